from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import AttendanceSignal, AttendanceStatus, WindowStatus


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one check-in that actually happened inside an open window."""

    session_id: str
    student_id: str
    checkin_time: datetime
    is_late: bool = False
    late_minutes: Optional[int] = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class VerificationWindow:
    """Domain entity: a teacher-opened check-in round for a session."""

    session_id: str
    round_number: int
    open_time: datetime
    close_time: datetime
    status: WindowStatus = WindowStatus.OPEN
    opened_by: Optional[str] = None

    @property
    def has_concluded(self) -> bool:
        return self.status in (WindowStatus.EXPIRED, WindowStatus.CLOSED)


@dataclass(frozen=True)
class StudentSessionStatus:
    """Read-model written back to storage once a session is finalized."""

    session_id: str
    student_id: str
    status: AttendanceStatus
    signal: AttendanceSignal
    decided_at: datetime
    note: Optional[str] = None
