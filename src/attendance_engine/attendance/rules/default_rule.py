from __future__ import annotations

from ...core.enums import AttendanceSignal, AttendanceStatus
from .base import ResolutionContext, StatusDecision, StatusRule


class DefaultAbsentRule(StatusRule):
    """Check-in opportunity has not concluded yet: transient absence."""

    signal = AttendanceSignal.DEFAULT

    def matches(self, ctx: ResolutionContext) -> bool:
        return True

    def decide(self, ctx: ResolutionContext) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT, signal=self.signal)
