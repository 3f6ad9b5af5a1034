from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceRuleFactory
from .attendance.repository import AttendanceRepository
from .attendance.resolver import AttendanceStatusResolver
from .attendance.service import AttendanceService
from .config import EngineSettings
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .reports.service import AttendanceReportService


@dataclass(frozen=True)
class Container:
    settings: EngineSettings

    resolver: AttendanceStatusResolver
    report_service: AttendanceReportService

    # Only wired when the deployment supplies repositories.
    attendance_service: Optional[AttendanceService] = None
    leave_service: Optional[LeaveService] = None


def build_container(
    *,
    settings: EngineSettings,
    attendance_repo: Optional[AttendanceRepository] = None,
    leave_repo: Optional[LeaveRepository] = None,
) -> Container:
    resolver = AttendanceStatusResolver(rule_factory=AttendanceRuleFactory())
    report_service = AttendanceReportService()

    leave_service = None
    if leave_repo is not None:
        leave_service = LeaveService(leave_repo, sequential_approval=settings.sequential_approval)

    attendance_service = None
    if attendance_repo is not None and leave_repo is not None:
        attendance_service = AttendanceService(attendance_repo, leave_repo, resolver=resolver)

    return Container(
        settings=settings,
        resolver=resolver,
        report_service=report_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
    )
