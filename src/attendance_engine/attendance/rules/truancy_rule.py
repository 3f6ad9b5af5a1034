from __future__ import annotations

from ...core.enums import AttendanceSignal, AttendanceStatus
from ..windows import has_concluded_round, latest_window
from .base import ResolutionContext, StatusDecision, StatusRule


class ExpiredWindowNoShowRule(StatusRule):
    """No check-in after at least one round ran to completion."""

    signal = AttendanceSignal.EXPIRED_WINDOW_NO_SHOW

    def matches(self, ctx: ResolutionContext) -> bool:
        return not ctx.events and has_concluded_round(ctx.windows)

    def decide(self, ctx: ResolutionContext) -> StatusDecision:
        last = latest_window(ctx.windows)
        return StatusDecision(
            status=AttendanceStatus.TRUANT,
            signal=self.signal,
            note=f"no check-in through round {last.round_number}" if last else None,
        )
