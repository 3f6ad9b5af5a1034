from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import AttendanceSignal
from ..core.precedence import SIGNAL_ORDER
from .rules.base import ResolutionContext, StatusRule
from .rules.checkin_rule import CheckinRule
from .rules.default_rule import DefaultAbsentRule
from .rules.leave_rule import ApprovedLeaveRule, PendingLeaveRule
from .rules.truancy_rule import ExpiredWindowNoShowRule


def _default_rules() -> dict[AttendanceSignal, StatusRule]:
    rules: list[StatusRule] = [
        CheckinRule(),
        ApprovedLeaveRule(),
        PendingLeaveRule(),
        ExpiredWindowNoShowRule(),
        DefaultAbsentRule(),
    ]
    return {rule.signal: rule for rule in rules}


@dataclass
class AttendanceRuleFactory:
    """Factory Pattern: pick the first rule, in precedence order, that matches."""

    rules_by_signal: dict[AttendanceSignal, StatusRule] = field(default_factory=_default_rules)

    def __post_init__(self) -> None:
        missing = [s for s in SIGNAL_ORDER if s not in self.rules_by_signal]
        if missing:
            raise ValueError(f"missing rules for signals: {[s.value for s in missing]}")

    @property
    def ordered_rules(self) -> list[StatusRule]:
        return [self.rules_by_signal[s] for s in SIGNAL_ORDER]

    def for_context(self, ctx: ResolutionContext) -> StatusRule:
        for rule in self.ordered_rules:
            if rule.matches(ctx):
                return rule
        # DefaultAbsentRule always matches; only reachable with a custom table.
        raise LookupError("no attendance rule matched")
