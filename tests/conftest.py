from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Optional

import pytest

from attendance_engine.attendance.model import AttendanceEvent, StudentSessionStatus, VerificationWindow
from attendance_engine.core.enums import ApprovalDecision, LeaveStatus, LeaveType
from attendance_engine.leave.model import ApprovalRecord, LeaveApplication


class InMemoryLeaves:
    def __init__(self):
        self._next_app_id = 1
        self._next_record_id = 1
        self.applications: dict[int, LeaveApplication] = {}
        self.records: dict[int, list[ApprovalRecord]] = {}
        self.lose_next_decision_race = False

    def create_application(self, *, student_id, session_id, leave_type, reason, submitted_at):
        aid = self._next_app_id
        self._next_app_id += 1
        self.applications[aid] = LeaveApplication(
            application_id=aid,
            student_id=student_id,
            session_id=session_id,
            reason=reason,
            submitted_at=submitted_at,
            leave_type=LeaveType(leave_type),
        )
        self.records[aid] = []
        return aid

    def get_application(self, application_id):
        return self.applications.get(int(application_id))

    def list_applications_for_session(self, session_id):
        return [a for a in self.applications.values() if a.session_id == session_id]

    def update_application_status(self, *, application_id, status, updated_at, expected=None):
        app = self.applications.get(int(application_id))
        if not app or (expected is not None and app.status != expected):
            return False
        self.applications[app.application_id] = dataclasses.replace(app, status=status, updated_at=updated_at)
        return True

    def create_approval_records(self, *, application_id, approver_ids):
        ids = []
        for ordinal, approver_id in enumerate(approver_ids, start=1):
            rid = self._next_record_id
            self._next_record_id += 1
            self.records[application_id].append(
                ApprovalRecord(record_id=rid, application_id=application_id, approver_id=approver_id, ordinal=ordinal)
            )
            ids.append(rid)
        return ids

    def list_approval_records(self, application_id):
        return list(self.records.get(int(application_id), []))

    def decide_record(self, *, application_id, approver_id, decision, decided_at, comment=None):
        if self.lose_next_decision_race:
            self.lose_next_decision_race = False
            return False
        items = self.records.get(int(application_id), [])
        for i, r in enumerate(items):
            if r.approver_id == approver_id and r.decision == ApprovalDecision.PENDING:
                items[i] = dataclasses.replace(r, decision=decision, decided_at=decided_at, comment=comment)
                return True
        return False

    # test helper, not part of the repository protocol
    def add(self, *, student_id: str, session_id: str, approvers: dict[str, ApprovalDecision],
            submitted_at: Optional[datetime] = None, status: LeaveStatus = LeaveStatus.PENDING) -> int:
        aid = self.create_application(
            student_id=student_id,
            session_id=session_id,
            leave_type=LeaveType.SICK,
            reason="fever",
            submitted_at=submitted_at or datetime(2025, 9, 8, 7, 0),
        )
        self.create_approval_records(application_id=aid, approver_ids=list(approvers))
        for approver_id, decision in approvers.items():
            if decision != ApprovalDecision.PENDING:
                self.decide_record(application_id=aid, approver_id=approver_id, decision=decision,
                                   decided_at=datetime(2025, 9, 8, 9, 0))
        if status != LeaveStatus.PENDING:
            self.applications[aid] = dataclasses.replace(self.applications[aid], status=status)
        return aid


class InMemoryAttendance:
    def __init__(self, *, roster=None, events=None, windows=None):
        self.roster: dict[str, list[str]] = roster or {}
        self.events: list[AttendanceEvent] = events or []
        self.windows: list[VerificationWindow] = windows or []
        self.saved: dict[tuple[str, str], StudentSessionStatus] = {}
        self.fail_saves = False

    def list_roster(self, session_id):
        return list(self.roster.get(session_id, []))

    def list_events(self, session_id):
        return [e for e in self.events if e.session_id == session_id]

    def list_windows(self, session_id):
        return [w for w in self.windows if w.session_id == session_id]

    def save_final_status(self, status):
        if self.fail_saves:
            return False
        self.saved[(status.session_id, status.student_id)] = status
        return True


@pytest.fixture
def leave_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()
