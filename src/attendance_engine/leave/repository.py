from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalDecision, LeaveStatus, LeaveType
from .model import ApprovalRecord, LeaveApplication


class LeaveRepository(Protocol):
    # Applications
    def create_application(
        self,
        *,
        student_id: str,
        session_id: str,
        leave_type: LeaveType,
        reason: str,
        submitted_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get_application(self, application_id: int) -> Optional[LeaveApplication]:
        raise NotImplementedError

    def list_applications_for_session(self, session_id: str) -> Sequence[LeaveApplication]:
        raise NotImplementedError

    def update_application_status(
        self,
        *,
        application_id: int,
        status: LeaveStatus,
        updated_at: datetime,
        expected: Optional[LeaveStatus] = None,
    ) -> bool:
        """Conditional write: only applies when the stored status equals ``expected``."""

        raise NotImplementedError

    # Approval records
    def create_approval_records(self, *, application_id: int, approver_ids: Sequence[str]) -> Sequence[int]:
        """Fan out one pending record per approver, ordinals following list order."""

        raise NotImplementedError

    def list_approval_records(self, application_id: int) -> Sequence[ApprovalRecord]:
        raise NotImplementedError

    def decide_record(
        self,
        *,
        application_id: int,
        approver_id: str,
        decision: ApprovalDecision,
        decided_at: datetime,
        comment: Optional[str] = None,
    ) -> bool:
        """Single-row update guarded by "record still pending"; False when it lost the race."""

        raise NotImplementedError
