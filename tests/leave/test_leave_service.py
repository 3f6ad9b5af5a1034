from __future__ import annotations

from datetime import datetime

import pytest

from attendance_engine.core.enums import ApprovalDecision, LeaveStatus
from attendance_engine.core.exceptions import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from attendance_engine.leave.service import LeaveService

NOW = datetime(2025, 9, 8, 10, 0)


def _submit(svc: LeaveService, approvers=("T1", "T2", "T3")) -> int:
    return svc.submit(
        student_id="S001",
        session_id="C-101",
        reason="Hospital appointment",
        approver_ids=list(approvers),
        now=datetime(2025, 9, 8, 7, 30),
    )


def test_submit_fans_out_one_pending_record_per_approver(leave_repo):
    svc = LeaveService(leave_repo)
    aid = _submit(svc)

    records = leave_repo.list_approval_records(aid)
    assert [r.approver_id for r in records] == ["T1", "T2", "T3"]
    assert [r.ordinal for r in records] == [1, 2, 3]
    assert all(r.decision == ApprovalDecision.PENDING for r in records)
    assert svc.current_aggregate(aid).final_status == LeaveStatus.PENDING


def test_submit_requires_reason_and_unique_approvers(leave_repo):
    svc = LeaveService(leave_repo)
    with pytest.raises(ValidationError):
        svc.submit(student_id="S001", session_id="C-101", reason="  ", approver_ids=["T1"])
    with pytest.raises(ValidationError):
        svc.submit(student_id="S001", session_id="C-101", reason="x", approver_ids=[])
    with pytest.raises(ValidationError):
        svc.submit(student_id="S001", session_id="C-101", reason="x", approver_ids=["T1", "T1"])


@pytest.mark.parametrize("student_id,session_id", [("", "C-101"), ("  ", "C-101"), ("S001", ""), ("S001", None)])
def test_submit_requires_owner_and_session(leave_repo, student_id, session_id):
    svc = LeaveService(leave_repo)
    with pytest.raises(ValidationError):
        svc.submit(student_id=student_id, session_id=session_id, reason="fever", approver_ids=["T1"])
    assert leave_repo.applications == {}


def test_application_approved_only_after_every_approver(leave_repo):
    svc = LeaveService(leave_repo)
    aid = _submit(svc)

    svc.decide(application_id=aid, approver_id="T1", decision=ApprovalDecision.APPROVED, now=NOW)
    result = svc.decide(application_id=aid, approver_id="T2", decision=ApprovalDecision.APPROVED, now=NOW)
    assert result.final_status == LeaveStatus.PENDING
    assert leave_repo.get_application(aid).status == LeaveStatus.PENDING

    result = svc.decide(application_id=aid, approver_id="T3", decision=ApprovalDecision.APPROVED, now=NOW)
    assert result.final_status == LeaveStatus.APPROVED
    assert leave_repo.get_application(aid).status == LeaveStatus.APPROVED


def test_single_rejection_closes_application(leave_repo):
    svc = LeaveService(leave_repo)
    aid = _submit(svc)

    svc.decide(application_id=aid, approver_id="T1", decision=ApprovalDecision.APPROVED, now=NOW)
    result = svc.decide(application_id=aid, approver_id="T2", decision=ApprovalDecision.REJECTED,
                        comment="no proof", now=NOW)

    assert result.final_status == LeaveStatus.REJECTED
    assert leave_repo.get_application(aid).status == LeaveStatus.REJECTED
    with pytest.raises(AuthorizationError):
        svc.decide(application_id=aid, approver_id="T3", decision=ApprovalDecision.APPROVED, now=NOW)


def test_double_approval_is_refused(leave_repo):
    svc = LeaveService(leave_repo)
    aid = _submit(svc)
    svc.decide(application_id=aid, approver_id="T1", decision=ApprovalDecision.APPROVED, now=NOW)

    with pytest.raises(AuthorizationError, match="already decided"):
        svc.decide(application_id=aid, approver_id="T1", decision=ApprovalDecision.REJECTED, now=NOW)


def test_unassigned_approver_is_refused(leave_repo):
    svc = LeaveService(leave_repo)
    aid = _submit(svc)

    with pytest.raises(AuthorizationError, match="not an assigned approver"):
        svc.decide(application_id=aid, approver_id="T9", decision=ApprovalDecision.APPROVED, now=NOW)


def test_pending_is_not_a_decision(leave_repo):
    svc = LeaveService(leave_repo)
    aid = _submit(svc)

    with pytest.raises(ValidationError):
        svc.decide(application_id=aid, approver_id="T1", decision=ApprovalDecision.PENDING, now=NOW)


def test_lost_conditional_update_is_reported(leave_repo):
    svc = LeaveService(leave_repo)
    aid = _submit(svc)
    leave_repo.lose_next_decision_race = True

    with pytest.raises(ValidationError):
        svc.decide(application_id=aid, approver_id="T1", decision=ApprovalDecision.APPROVED, now=NOW)
    assert svc.current_aggregate(aid).counts["pending"] == 3


def test_validate_permission_for_missing_application(leave_repo):
    perm = LeaveService(leave_repo).validate_approval_permission(404, "T1")
    assert perm.can_approve is False
    assert perm.reason == "application not found"


def test_sequential_deployment_enforces_order(leave_repo):
    svc = LeaveService(leave_repo, sequential_approval=True)
    aid = _submit(svc, approvers=("T1", "T2"))

    with pytest.raises(AuthorizationError, match="earlier approver"):
        svc.decide(application_id=aid, approver_id="T2", decision=ApprovalDecision.APPROVED, now=NOW)

    svc.decide(application_id=aid, approver_id="T1", decision=ApprovalDecision.APPROVED, now=NOW)
    result = svc.decide(application_id=aid, approver_id="T2", decision=ApprovalDecision.APPROVED, now=NOW)
    assert result.final_status == LeaveStatus.APPROVED


def test_student_can_withdraw_pending_application(leave_repo):
    svc = LeaveService(leave_repo)
    aid = _submit(svc)

    svc.withdraw(application_id=aid, student_id="S001", now=NOW)

    assert leave_repo.get_application(aid).status == LeaveStatus.WITHDRAWN
    assert svc.snapshot(aid).effective_status == LeaveStatus.WITHDRAWN
    with pytest.raises(AuthorizationError):
        svc.decide(application_id=aid, approver_id="T1", decision=ApprovalDecision.APPROVED, now=NOW)


def test_only_applicant_can_withdraw(leave_repo):
    svc = LeaveService(leave_repo)
    aid = _submit(svc)

    with pytest.raises(AuthorizationError):
        svc.withdraw(application_id=aid, student_id="S999", now=NOW)


def test_terminal_application_cannot_be_withdrawn_or_expired(leave_repo):
    svc = LeaveService(leave_repo)
    aid = _submit(svc, approvers=("T1",))
    svc.decide(application_id=aid, approver_id="T1", decision=ApprovalDecision.APPROVED, now=NOW)

    with pytest.raises(InvalidTransitionError):
        svc.withdraw(application_id=aid, student_id="S001", now=NOW)
    with pytest.raises(InvalidTransitionError):
        svc.expire(application_id=aid, now=NOW)


def test_scheduler_can_expire_pending_application(leave_repo):
    svc = LeaveService(leave_repo)
    aid = _submit(svc)

    svc.expire(application_id=aid, now=NOW)

    assert leave_repo.get_application(aid).status == LeaveStatus.EXPIRED
    assert svc.validate_approval_permission(aid, "T1").reason == "application is not pending"


def test_unknown_application_raises_not_found(leave_repo):
    with pytest.raises(NotFoundError):
        LeaveService(leave_repo).current_aggregate(42)
