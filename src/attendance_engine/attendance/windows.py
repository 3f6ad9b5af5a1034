from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Iterable, Optional

from ..core.enums import WindowStatus
from .model import VerificationWindow


def windows_for_session(windows: Iterable[VerificationWindow], session_id: str) -> list[VerificationWindow]:
    """Windows of one session, ordered by round number."""
    return sorted((w for w in windows if w.session_id == session_id), key=lambda w: w.round_number)


def latest_window(windows: Iterable[VerificationWindow]) -> Optional[VerificationWindow]:
    items = list(windows)
    if not items:
        return None
    return max(items, key=lambda w: w.round_number)


def has_concluded_round(windows: Iterable[VerificationWindow]) -> bool:
    """True once at least one round has run to completion (expired or closed)."""
    return any(w.has_concluded for w in windows)


def expire_if_elapsed(window: VerificationWindow, now: datetime) -> VerificationWindow:
    """Open -> expired transition applied by the external scheduler.

    Returns the same window when it is not open or its close time has not
    passed yet. Never called by the resolver, which only reads window status.
    """
    if window.status is WindowStatus.OPEN and now >= window.close_time:
        return dataclasses.replace(window, status=WindowStatus.EXPIRED)
    return window
