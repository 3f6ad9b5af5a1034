"""Attendance status resolution.

Pure functions over in-memory records: no I/O, no clock reads, no mutation.
``now`` only becomes ``decided_at`` on roster statuses and never changes which rule fires;
window expiry comes from the window status handed in.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.precedence import precedence_rank
from ..leave.model import LeaveSnapshot
from .factory import AttendanceRuleFactory
from .model import AttendanceEvent, StudentSessionStatus, VerificationWindow
from .rules.base import ResolutionContext, StatusDecision
from .windows import windows_for_session

logger = logging.getLogger(__name__)


class AttendanceStatusResolver:
    def __init__(self, *, rule_factory: AttendanceRuleFactory | None = None):
        self._factory = rule_factory or AttendanceRuleFactory()

    def decide(
        self,
        session_id: str,
        student_id: str,
        events: Iterable[AttendanceEvent],
        leave: Optional[LeaveSnapshot],
        windows: Iterable[VerificationWindow],
        now: datetime,
    ) -> StatusDecision:
        ctx = ResolutionContext(
            session_id=session_id,
            student_id=student_id,
            events=tuple(e for e in events if e.session_id == session_id and e.student_id == student_id),
            leave_status=_leave_status_for(leave, session_id, student_id),
            windows=tuple(windows_for_session(windows, session_id)),
            now=now,
        )
        rule = self._factory.for_context(ctx)
        decision = rule.decide(ctx)
        logger.debug("resolved %s/%s -> %s via %s", session_id, student_id, decision.status.value, rule.signal.value)
        return decision

    def resolve(
        self,
        session_id: str,
        student_id: str,
        events: Iterable[AttendanceEvent],
        leave: Optional[LeaveSnapshot],
        windows: Iterable[VerificationWindow],
        now: datetime,
    ) -> AttendanceStatus:
        return self.decide(session_id, student_id, events, leave, windows, now).status

    def resolve_roster(
        self,
        session_id: str,
        student_ids: Sequence[str],
        events: Iterable[AttendanceEvent],
        leaves: Mapping[str, LeaveSnapshot],
        windows: Iterable[VerificationWindow],
        now: datetime,
    ) -> list[StudentSessionStatus]:
        """One status per distinct student, most significant status first."""
        events = list(events)
        windows = list(windows)

        out: list[StudentSessionStatus] = []
        for student_id in dict.fromkeys(student_ids):
            d = self.decide(session_id, student_id, events, leaves.get(student_id), windows, now)
            out.append(
                StudentSessionStatus(
                    session_id=session_id,
                    student_id=student_id,
                    status=d.status,
                    signal=d.signal,
                    decided_at=now,
                    note=d.note,
                )
            )
        out.sort(key=lambda s: (precedence_rank(s.status), s.student_id))
        return out


def _leave_status_for(leave: Optional[LeaveSnapshot], session_id: str, student_id: str):
    if leave is None:
        return None
    app = leave.application
    if app.session_id != session_id or app.student_id != student_id:
        return None
    return leave.effective_status


_default_resolver = AttendanceStatusResolver()


def resolve(
    session_id: str,
    student_id: str,
    events: Iterable[AttendanceEvent],
    leave: Optional[LeaveSnapshot],
    windows: Iterable[VerificationWindow],
    now: datetime,
) -> AttendanceStatus:
    return _default_resolver.resolve(session_id, student_id, events, leave, windows, now)


def resolve_decision(
    session_id: str,
    student_id: str,
    events: Iterable[AttendanceEvent],
    leave: Optional[LeaveSnapshot],
    windows: Iterable[VerificationWindow],
    now: datetime,
) -> StatusDecision:
    return _default_resolver.decide(session_id, student_id, events, leave, windows, now)


def resolve_roster(
    session_id: str,
    student_ids: Sequence[str],
    events: Iterable[AttendanceEvent],
    leaves: Mapping[str, LeaveSnapshot],
    windows: Iterable[VerificationWindow],
    now: datetime,
) -> list[StudentSessionStatus]:
    return _default_resolver.resolve_roster(session_id, student_ids, events, leaves, windows, now)
