from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import ApprovalDecision, LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveApplication:
    application_id: int
    student_id: str
    session_id: str
    reason: str
    submitted_at: datetime
    leave_type: LeaveType = LeaveType.PERSONAL
    status: LeaveStatus = LeaveStatus.PENDING
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class ApprovalRecord:
    """One required approver's decision on one leave application."""

    record_id: int
    application_id: int
    approver_id: str
    decision: ApprovalDecision = ApprovalDecision.PENDING
    decided_at: Optional[datetime] = None
    comment: Optional[str] = None
    ordinal: int = 1

    @property
    def is_decided(self) -> bool:
        return ApprovalDecision(self.decision) is not ApprovalDecision.PENDING


@dataclass(frozen=True)
class ApprovalAggregate:
    final_status: LeaveStatus
    all_approved: bool
    any_rejected: bool
    counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "final_status": self.final_status.value,
            "all_approved": self.all_approved,
            "any_rejected": self.any_rejected,
            "counts": dict(self.counts),
        }


@dataclass(frozen=True)
class ApprovalPermission:
    can_approve: bool
    reason: Optional[str] = None
    current_status: Optional[LeaveStatus] = None

    def to_dict(self) -> dict:
        return {
            "can_approve": self.can_approve,
            "reason": self.reason,
            "current_status": self.current_status.value if self.current_status else None,
        }


@dataclass(frozen=True)
class LeaveSnapshot:
    """Leave application paired with the aggregate computed from its records.

    This is what the attendance resolver consumes.
    """

    application: LeaveApplication
    aggregate: ApprovalAggregate

    @property
    def effective_status(self) -> LeaveStatus:
        # Withdrawn/expired are set by the student or the scheduler and are
        # never derived from approvals.
        stored = LeaveStatus(self.application.status)
        if stored in (LeaveStatus.WITHDRAWN, LeaveStatus.EXPIRED):
            return stored
        return self.aggregate.final_status
