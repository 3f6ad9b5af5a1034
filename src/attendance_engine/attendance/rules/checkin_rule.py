from __future__ import annotations

from ...core.enums import AttendanceSignal, AttendanceStatus
from .base import ResolutionContext, StatusDecision, StatusRule


class CheckinRule(StatusRule):
    """A recorded check-in wins regardless of leave or window state.

    Any round counts: checking in during round 1 but not round 2 still
    resolves to present.
    """

    signal = AttendanceSignal.CHECKIN

    def matches(self, ctx: ResolutionContext) -> bool:
        return bool(ctx.events)

    def decide(self, ctx: ResolutionContext) -> StatusDecision:
        first = min(ctx.events, key=lambda e: e.checkin_time)
        if first.is_late:
            note = f"late {first.late_minutes} min" if first.late_minutes else None
            return StatusDecision(status=AttendanceStatus.LATE, signal=self.signal, note=note)
        return StatusDecision(status=AttendanceStatus.PRESENT, signal=self.signal)
