from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..attendance.model import StudentSessionStatus
from ..core.enums import ApprovalDecision, AttendanceStatus
from ..core.precedence import precedence_rank
from ..leave.model import ApprovalRecord, LeaveApplication
from .calculator.base import AttendanceRateCalculator
from .calculator.standard_calculator import StandardAttendanceRateCalculator

STATUS_LABELS: dict[AttendanceStatus, str] = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.LATE: "Late",
    AttendanceStatus.LEAVE: "On leave",
    AttendanceStatus.LEAVE_PENDING: "Leave pending approval",
    AttendanceStatus.TRUANT: "Truant",
    AttendanceStatus.ABSENT: "Not checked in",
}


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]
    overall: dict


def _empty_counts() -> dict[str, int]:
    return {s.value: 0 for s in AttendanceStatus}


class AttendanceReportService:
    def __init__(self, *, calculator: Optional[AttendanceRateCalculator] = None):
        self._calculator = calculator or StandardAttendanceRateCalculator()

    def build_attendance_report(self, statuses: Iterable[StudentSessionStatus]) -> ReportData:
        rows: list[dict] = []
        per_student: dict[str, dict[str, int]] = {}
        overall = _empty_counts()

        ordered = sorted(statuses, key=lambda s: (s.session_id, precedence_rank(s.status), s.student_id))
        for s in ordered:
            rows.append(
                {
                    "session_id": s.session_id,
                    "student_id": s.student_id,
                    "status": s.status.value,
                    "label": STATUS_LABELS.get(s.status, s.status.value),
                    "decided_at": s.decided_at.isoformat(),
                    "note": s.note or "",
                }
            )
            counts = per_student.setdefault(s.student_id, _empty_counts())
            counts[s.status.value] += 1
            overall[s.status.value] += 1

        summary = []
        for student_id, counts in per_student.items():
            summary.append(
                {
                    "student_id": student_id,
                    "total_count": sum(counts.values()),
                    "counts": counts,
                    "attendance_rate": self._calculator.rate(counts),
                }
            )
        summary.sort(key=lambda x: (-x["attendance_rate"], -x["total_count"], x["student_id"]))

        return ReportData(
            rows=rows,
            summary=summary,
            overall={
                "total_count": sum(overall.values()),
                "counts": overall,
                "attendance_rate": self._calculator.rate(overall),
            },
        )

    @staticmethod
    def approval_statistics(applications: Iterable[LeaveApplication], records: Iterable[ApprovalRecord]) -> dict:
        """Counts, approval rate and mean decision latency across approval records."""
        submitted = {a.application_id: a.submitted_at for a in applications}
        counts = {d.value: 0 for d in ApprovalDecision}
        hours: list[float] = []

        for r in records:
            decision = ApprovalDecision(r.decision)
            counts[decision.value] += 1
            start = submitted.get(r.application_id)
            if decision is not ApprovalDecision.PENDING and r.decided_at and start:
                hours.append((r.decided_at - start).total_seconds() / 3600)

        decided = counts[ApprovalDecision.APPROVED.value] + counts[ApprovalDecision.REJECTED.value]
        return {
            "total_count": sum(counts.values()),
            "pending_count": counts[ApprovalDecision.PENDING.value],
            "approved_count": counts[ApprovalDecision.APPROVED.value],
            "rejected_count": counts[ApprovalDecision.REJECTED.value],
            "approval_rate": round(counts[ApprovalDecision.APPROVED.value] * 100.0 / decided, 2) if decided else 0.0,
            "average_decision_hours": round(sum(hours) / len(hours), 2) if hours else 0.0,
        }
