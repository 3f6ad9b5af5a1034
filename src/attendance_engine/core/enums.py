from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Final per-session attendance status of one student."""

    PRESENT = "present"
    LATE = "late"
    LEAVE = "leave"
    LEAVE_PENDING = "leave_pending"
    TRUANT = "truant"
    ABSENT = "absent"


class AttendanceSignal(str, Enum):
    """Competing inputs the resolver weighs, one per precedence rule."""

    CHECKIN = "checkin"
    APPROVED_LEAVE = "approved_leave"
    PENDING_LEAVE = "pending_leave"
    EXPIRED_WINDOW_NO_SHOW = "expired_window_no_show"
    DEFAULT = "default"


class WindowStatus(str, Enum):
    """Lifecycle of a teacher-opened verification window."""

    OPEN = "open"
    EXPIRED = "expired"
    CLOSED = "closed"


class ApprovalDecision(str, Enum):
    """Decision held by one approver's record."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveStatus(str, Enum):
    """Overall status of a leave application."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING


class LeaveType(str, Enum):
    SICK = "sick"
    PERSONAL = "personal"
    EMERGENCY = "emergency"
    OTHER = "other"
