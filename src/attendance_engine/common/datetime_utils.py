from __future__ import annotations

from datetime import date, datetime

from ..core.constants import DEFAULT_MAX_TEACHING_WEEKS
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_iso_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(str(value or "").strip())
    except ValueError:
        raise ValidationError(f"Invalid datetime (ISO 8601): {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def teaching_week(term_start: date, now: date | datetime, *, max_weeks: int = DEFAULT_MAX_TEACHING_WEEKS) -> int:
    """Teaching week number of ``now`` counted from ``term_start``.

    Week 1 starts on the term start date. The result is clamped to
    ``[1, max_weeks]`` so dates before the term or after its end still map to
    a valid week.
    """
    if isinstance(now, datetime):
        now = now.date()
    if isinstance(term_start, datetime):
        term_start = term_start.date()
    if max_weeks < 1:
        raise ValidationError("max_weeks must be >= 1")

    week = (now - term_start).days // 7 + 1
    return max(1, min(week, max_weeks))
