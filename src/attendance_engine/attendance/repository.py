from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceEvent, StudentSessionStatus, VerificationWindow


class AttendanceRepository(Protocol):
    def list_roster(self, session_id: str) -> Sequence[str]:
        """Student ids enrolled in the session's course."""

        raise NotImplementedError

    def list_events(self, session_id: str) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_windows(self, session_id: str) -> Sequence[VerificationWindow]:
        raise NotImplementedError

    def save_final_status(self, status: StudentSessionStatus) -> bool:
        """Upsert the final status of one (session, student) pair."""

        raise NotImplementedError
