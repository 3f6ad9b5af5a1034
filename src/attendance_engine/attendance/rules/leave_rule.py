from __future__ import annotations

from ...core.enums import AttendanceSignal, AttendanceStatus, LeaveStatus
from .base import ResolutionContext, StatusDecision, StatusRule


class ApprovedLeaveRule(StatusRule):
    signal = AttendanceSignal.APPROVED_LEAVE

    def matches(self, ctx: ResolutionContext) -> bool:
        return ctx.leave_status is LeaveStatus.APPROVED

    def decide(self, ctx: ResolutionContext) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LEAVE, signal=self.signal)


class PendingLeaveRule(StatusRule):
    signal = AttendanceSignal.PENDING_LEAVE

    def matches(self, ctx: ResolutionContext) -> bool:
        return ctx.leave_status is LeaveStatus.PENDING

    def decide(self, ctx: ResolutionContext) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LEAVE_PENDING, signal=self.signal)
