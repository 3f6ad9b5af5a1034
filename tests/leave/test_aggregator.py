from __future__ import annotations

import itertools
from datetime import datetime

import pytest

from attendance_engine.core.enums import ApprovalDecision, LeaveStatus
from attendance_engine.leave.aggregator import aggregate, overall_status, pick_leaves, snapshot, validate_approval_permission
from attendance_engine.leave.model import ApprovalRecord, LeaveApplication

P, A, R = ApprovalDecision.PENDING, ApprovalDecision.APPROVED, ApprovalDecision.REJECTED


def _records(*decisions: ApprovalDecision, application_id: int = 1) -> list[ApprovalRecord]:
    return [
        ApprovalRecord(record_id=i, application_id=application_id, approver_id=f"T{i}", decision=d, ordinal=i)
        for i, d in enumerate(decisions, start=1)
    ]


def _application(status: LeaveStatus = LeaveStatus.PENDING) -> LeaveApplication:
    return LeaveApplication(
        application_id=1,
        student_id="S001",
        session_id="C-101",
        reason="fever",
        submitted_at=datetime(2025, 9, 8, 7, 0),
        status=status,
    )


def test_scenario_a_all_pending():
    result = aggregate(_records(P, P, P))
    assert result.final_status == LeaveStatus.PENDING
    assert result.counts["pending"] == 3
    assert result.counts["approved"] == 0
    assert result.counts["rejected"] == 0
    assert not result.all_approved
    assert not result.any_rejected


def test_scenario_b_single_rejection_vetoes():
    result = aggregate(_records(A, R, P))
    assert result.final_status == LeaveStatus.REJECTED
    assert result.any_rejected is True
    assert result.all_approved is False


def test_scenario_c_unanimous_approval():
    result = aggregate(_records(A, A, A))
    assert result.final_status == LeaveStatus.APPROVED
    assert result.all_approved is True
    assert result.counts["approved"] == 3


def test_empty_records_are_vacuously_approved():
    result = aggregate([])
    assert result.final_status == LeaveStatus.APPROVED
    assert result.all_approved is True
    assert result.any_rejected is False
    assert result.counts == {"pending": 0, "approved": 0, "rejected": 0}


def test_aggregate_is_idempotent():
    records = _records(A, P, A)
    assert aggregate(records) == aggregate(records)


@pytest.mark.parametrize("decisions", list(itertools.product([P, A, R], repeat=3)))
def test_veto_dominance_and_unanimity(decisions):
    result = aggregate(_records(*decisions))
    if R in decisions:
        assert result.final_status == LeaveStatus.REJECTED
    elif P not in decisions:
        assert result.final_status == LeaveStatus.APPROVED
    else:
        assert result.final_status == LeaveStatus.PENDING


def test_record_order_does_not_change_outcome():
    assert aggregate(_records(P, A, R)) == aggregate(_records(R, P, A))


def test_assigned_pending_approver_can_approve():
    perm = validate_approval_permission(_application(), _records(A, P), "T2")
    assert perm.can_approve is True
    assert perm.reason is None
    assert perm.current_status == LeaveStatus.PENDING


def test_unassigned_approver_is_refused():
    perm = validate_approval_permission(_application(), _records(P, P), "T9")
    assert perm.can_approve is False
    assert perm.reason == "not an assigned approver"


def test_approver_cannot_decide_twice():
    perm = validate_approval_permission(_application(), _records(A, P), "T1")
    assert perm.can_approve is False
    assert perm.reason == "already decided"


def test_no_one_can_act_after_rejection():
    perm = validate_approval_permission(_application(), _records(R, P), "T2")
    assert perm.can_approve is False
    assert perm.current_status == LeaveStatus.REJECTED


def test_withdrawn_application_refuses_approvers():
    perm = validate_approval_permission(_application(LeaveStatus.WITHDRAWN), _records(P), "T1")
    assert perm.can_approve is False
    assert perm.current_status == LeaveStatus.WITHDRAWN


def test_missing_application_is_refused_without_raising():
    perm = validate_approval_permission(None, [], "T1")
    assert perm.can_approve is False
    assert perm.reason == "application not found"


def test_records_of_other_applications_are_ignored():
    records = _records(P, application_id=1) + _records(R, application_id=2)
    perm = validate_approval_permission(_application(), records, "T1")
    assert perm.can_approve is True


def test_sequential_approval_waits_for_lower_ordinals():
    records = _records(P, P)
    assert validate_approval_permission(_application(), records, "T2", sequential=True).reason == (
        "waiting for an earlier approver"
    )
    assert validate_approval_permission(_application(), records, "T2").can_approve is True
    assert validate_approval_permission(_application(), _records(A, P), "T2", sequential=True).can_approve is True


@pytest.mark.parametrize(
    "stored,decisions,expected",
    [
        (LeaveStatus.PENDING, (A, P), LeaveStatus.PENDING),
        (LeaveStatus.PENDING, (A, A), LeaveStatus.APPROVED),
        (LeaveStatus.APPROVED, (A, R), LeaveStatus.REJECTED),
        (LeaveStatus.WITHDRAWN, (A, A), LeaveStatus.WITHDRAWN),
        (LeaveStatus.EXPIRED, (P,), LeaveStatus.EXPIRED),
    ],
)
def test_overall_status_prefers_records_unless_withdrawn_or_expired(stored, decisions, expected):
    assert overall_status(_application(stored), _records(*decisions)) == expected


def test_plain_string_decisions_agree_with_aggregate():
    records = [ApprovalRecord(record_id=1, application_id=1, approver_id="T1", decision="pending")]

    assert aggregate(records).final_status == LeaveStatus.PENDING
    assert records[0].is_decided is False
    assert validate_approval_permission(_application(), records, "T1").can_approve is True


def test_plain_string_application_status_is_normalized():
    app = LeaveApplication(
        application_id=1,
        student_id="S001",
        session_id="C-101",
        reason="fever",
        submitted_at=datetime(2025, 9, 8, 7, 0),
        status="withdrawn",
    )
    assert snapshot(app, _records(A)).effective_status is LeaveStatus.WITHDRAWN


def _leave_of(application_id: int, hour: int, *decisions: ApprovalDecision, student_id: str = "S001"):
    app = LeaveApplication(
        application_id=application_id,
        student_id=student_id,
        session_id="C-101",
        reason="fever",
        submitted_at=datetime(2025, 9, 8, hour, 0),
    )
    return snapshot(app, _records(*decisions, application_id=application_id))


def test_pick_leaves_prefers_approved_then_latest():
    approved_early = _leave_of(1, 6, A)
    rejected_late = _leave_of(2, 7, R)
    pending_old = _leave_of(3, 5, P, student_id="S002")
    pending_new = _leave_of(4, 8, P, student_id="S002")

    picked = pick_leaves([approved_early, rejected_late, pending_new, pending_old, None])

    assert picked["S001"] is approved_early
    assert picked["S002"] is pending_new
    assert pick_leaves([rejected_late, approved_early])["S001"] is approved_early
