from __future__ import annotations

import logging
from datetime import datetime

from ..common.datetime_utils import now_local
from ..core.exceptions import ValidationError
from ..leave.aggregator import pick_leaves, snapshot
from ..leave.model import LeaveSnapshot
from ..leave.repository import LeaveRepository
from .model import StudentSessionStatus
from .repository import AttendanceRepository
from .resolver import AttendanceStatusResolver
from .rules.base import StatusDecision

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        *,
        resolver: AttendanceStatusResolver | None = None,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._resolver = resolver or AttendanceStatusResolver()

    def leave_snapshots(self, session_id: str) -> dict[str, LeaveSnapshot]:
        """The counting leave application per student, see ``pick_leaves``."""
        return pick_leaves(
            snapshot(app, self._leaves.list_approval_records(app.application_id))
            for app in self._leaves.list_applications_for_session(session_id)
        )

    def student_status(self, session_id: str, student_id: str, *, now: datetime | None = None) -> StatusDecision:
        now = now or now_local()
        leave = self.leave_snapshots(session_id).get(student_id)
        return self._resolver.decide(
            session_id,
            student_id,
            self._attendance.list_events(session_id),
            leave,
            self._attendance.list_windows(session_id),
            now,
        )

    def finalize_session(self, session_id: str, *, now: datetime | None = None) -> list[StudentSessionStatus]:
        now = now or now_local()
        roster = list(self._attendance.list_roster(session_id))
        if not roster:
            raise ValidationError(f"Session {session_id} has no enrolled students")

        statuses = self._resolver.resolve_roster(
            session_id,
            roster,
            self._attendance.list_events(session_id),
            self.leave_snapshots(session_id),
            self._attendance.list_windows(session_id),
            now,
        )
        for s in statuses:
            if not self._attendance.save_final_status(s):
                raise ValidationError(f"Saving status for {s.student_id} failed")

        logger.info("session %s finalized: %d students", session_id, len(statuses))
        return statuses
