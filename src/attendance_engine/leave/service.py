from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_unique
from ..core.enums import ApprovalDecision, LeaveStatus, LeaveType
from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from .aggregator import aggregate, snapshot, validate_approval_permission
from .model import ApprovalAggregate, ApprovalPermission, LeaveApplication, LeaveSnapshot
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, *, sequential_approval: bool = False):
        self._leaves = leaves
        self._sequential = bool(sequential_approval)

    def _get(self, application_id: int) -> LeaveApplication:
        app = self._leaves.get_application(int(application_id))
        if not app:
            raise NotFoundError("Leave application does not exist")
        return app

    def submit(
        self,
        *,
        student_id: str,
        session_id: str,
        reason: str,
        approver_ids: Sequence[str],
        leave_type: LeaveType = LeaveType.PERSONAL,
        now: datetime | None = None,
    ) -> int:
        now = now or now_local()
        student_id = require_non_empty(student_id, "Student")
        session_id = require_non_empty(session_id, "Session")
        reason = require_non_empty(reason, "Reason")
        approvers = require_unique(approver_ids, "Approvers")

        application_id = self._leaves.create_application(
            student_id=student_id,
            session_id=session_id,
            leave_type=LeaveType(leave_type),
            reason=reason,
            submitted_at=now,
        )
        self._leaves.create_approval_records(application_id=application_id, approver_ids=approvers)
        logger.info(
            "leave application %s submitted by %s for session %s (%d approvers)",
            application_id, student_id, session_id, len(approvers),
        )
        return application_id

    def snapshot(self, application_id: int) -> LeaveSnapshot:
        app = self._get(application_id)
        return snapshot(app, self._leaves.list_approval_records(app.application_id))

    def current_aggregate(self, application_id: int) -> ApprovalAggregate:
        """Recomputed from a fresh read every time."""
        return self.snapshot(application_id).aggregate

    def validate_approval_permission(self, application_id: int, approver_id: str) -> ApprovalPermission:
        app = self._leaves.get_application(int(application_id))
        records = self._leaves.list_approval_records(int(application_id)) if app else []
        return validate_approval_permission(app, records, str(approver_id), sequential=self._sequential)

    def decide(
        self,
        *,
        application_id: int,
        approver_id: str,
        decision: ApprovalDecision,
        comment: str = "",
        now: datetime | None = None,
    ) -> ApprovalAggregate:
        now = now or now_local()
        decision = ApprovalDecision(decision)
        if decision is ApprovalDecision.PENDING:
            raise ValidationError("Decision must be approved or rejected")

        permission = self.validate_approval_permission(application_id, approver_id)
        if not permission.can_approve:
            raise AuthorizationError(permission.reason or "Cannot approve")

        ok = self._leaves.decide_record(
            application_id=int(application_id),
            approver_id=str(approver_id),
            decision=decision,
            decided_at=now,
            comment=(comment or "").strip() or None,
        )
        if not ok:
            raise ValidationError("Approval record was already decided")

        records = self._leaves.list_approval_records(int(application_id))
        result = aggregate(records)
        if result.final_status is not LeaveStatus.PENDING:
            updated = self._leaves.update_application_status(
                application_id=int(application_id),
                status=result.final_status,
                updated_at=now,
                expected=LeaveStatus.PENDING,
            )
            if not updated:
                logger.warning(
                    "leave application %s left pending before outcome %s could be stored",
                    application_id, result.final_status.value,
                )

        logger.info(
            "approver %s %s leave application %s -> %s",
            approver_id, decision.value, application_id, result.final_status.value,
        )
        return result

    def _close(self, app: LeaveApplication, status: LeaveStatus, now: datetime) -> None:
        current = snapshot(app, self._leaves.list_approval_records(app.application_id)).effective_status
        if current.is_terminal:
            raise InvalidTransitionError(f"Leave application is already {current.value}")

        ok = self._leaves.update_application_status(
            application_id=app.application_id,
            status=status,
            updated_at=now,
            expected=LeaveStatus.PENDING,
        )
        if not ok:
            raise ValidationError(f"Could not mark leave application {status.value}")

    def withdraw(self, *, application_id: int, student_id: str, now: datetime | None = None) -> None:
        app = self._get(application_id)
        if app.student_id != str(student_id):
            raise AuthorizationError("Only the applicant can withdraw this leave application")

        self._close(app, LeaveStatus.WITHDRAWN, now or now_local())
        logger.info("leave application %s withdrawn by %s", application_id, student_id)

    def expire(self, *, application_id: int, now: Optional[datetime] = None) -> None:
        """Called by the external scheduler once the session has concluded."""
        app = self._get(application_id)
        self._close(app, LeaveStatus.EXPIRED, now or now_local())
        logger.info("leave application %s expired", application_id)
