"""Leave approval aggregation.

Unanimous consent with veto: every assigned approver must approve for an
application to pass, and a single rejection fails it regardless of how many
approvals already arrived. The aggregate is always recomputed from the full
set of records and never cached.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..core.constants import (
    REASON_ALREADY_DECIDED,
    REASON_NOT_ASSIGNED,
    REASON_NOT_FOUND,
    REASON_NOT_PENDING,
    REASON_WAITING_EARLIER,
)
from ..core.enums import ApprovalDecision, LeaveStatus
from .model import ApprovalAggregate, ApprovalPermission, ApprovalRecord, LeaveApplication, LeaveSnapshot

logger = logging.getLogger(__name__)


def count_decisions(records: Iterable[ApprovalRecord]) -> dict[str, int]:
    counter = Counter(ApprovalDecision(r.decision) for r in records)
    return {decision.value: counter.get(decision, 0) for decision in ApprovalDecision}


def aggregate(records: Iterable[ApprovalRecord]) -> ApprovalAggregate:
    """Compute the overall outcome of one application's approval records.

    An empty record list is approved vacuously: zero pending, zero rejected.
    """
    counts = count_decisions(records)
    rejected = counts[ApprovalDecision.REJECTED.value]
    pending = counts[ApprovalDecision.PENDING.value]

    if rejected > 0:
        final_status = LeaveStatus.REJECTED
    elif pending == 0:
        final_status = LeaveStatus.APPROVED
    else:
        final_status = LeaveStatus.PENDING

    return ApprovalAggregate(
        final_status=final_status,
        all_approved=final_status is LeaveStatus.APPROVED,
        any_rejected=rejected > 0,
        counts=counts,
    )


def overall_status(application: LeaveApplication, records: Iterable[ApprovalRecord]) -> LeaveStatus:
    return snapshot(application, records).effective_status


def snapshot(application: LeaveApplication, records: Iterable[ApprovalRecord]) -> LeaveSnapshot:
    own = [r for r in records if r.application_id == application.application_id]
    return LeaveSnapshot(application=application, aggregate=aggregate(own))


_ACTIVE_LEAVE = (LeaveStatus.APPROVED, LeaveStatus.PENDING)


def _leave_key(snap: LeaveSnapshot) -> tuple[int, datetime]:
    status = snap.effective_status
    weight = len(_ACTIVE_LEAVE) - _ACTIVE_LEAVE.index(status) if status in _ACTIVE_LEAVE else 0
    return weight, snap.application.submitted_at


def pick_leaves(snapshots: Iterable[Optional[LeaveSnapshot]]) -> dict[str, LeaveSnapshot]:
    """Pick the one leave application per student that counts for attendance.

    A student may have several (e.g. withdrawn and resubmitted). Approved
    beats pending, and the latest submission wins among equals.
    """
    best: dict[str, LeaveSnapshot] = {}
    for snap in snapshots:
        if snap is None:
            continue
        student_id = snap.application.student_id
        current = best.get(student_id)
        if current is None or _leave_key(snap) > _leave_key(current):
            best[student_id] = snap
    return best


def validate_approval_permission(
    application: Optional[LeaveApplication],
    records: Sequence[ApprovalRecord],
    approver_id: str,
    *,
    sequential: bool = False,
) -> ApprovalPermission:
    """Decide whether ``approver_id`` may act on ``application`` right now.

    Never raises: every refusal is returned as a structured result with a
    human-readable reason.
    """
    if application is None:
        return ApprovalPermission(can_approve=False, reason=REASON_NOT_FOUND)

    own = [r for r in records if r.application_id == application.application_id]
    current = snapshot(application, own).effective_status
    if current is not LeaveStatus.PENDING:
        return ApprovalPermission(can_approve=False, reason=REASON_NOT_PENDING, current_status=current)

    mine = next((r for r in own if r.approver_id == approver_id), None)
    if mine is None:
        return ApprovalPermission(can_approve=False, reason=REASON_NOT_ASSIGNED, current_status=current)
    if mine.is_decided:
        return ApprovalPermission(can_approve=False, reason=REASON_ALREADY_DECIDED, current_status=current)

    if sequential:
        earlier = [r for r in own if r.ordinal < mine.ordinal]
        if any(ApprovalDecision(r.decision) is not ApprovalDecision.APPROVED for r in earlier):
            return ApprovalPermission(can_approve=False, reason=REASON_WAITING_EARLIER, current_status=current)

    logger.debug("approver %s may act on application %s", approver_id, application.application_id)
    return ApprovalPermission(can_approve=True, current_status=current)
