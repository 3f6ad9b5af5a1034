from __future__ import annotations

from typing import Mapping

from ...core.enums import AttendanceStatus
from .base import AttendanceRateCalculator

_ATTENDED = (AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.LEAVE)


class StandardAttendanceRateCalculator(AttendanceRateCalculator):
    """Standard rule: (present + late + leave) / total, as a percentage with 2 decimals."""

    def rate(self, counts: Mapping[str, int]) -> float:
        total = sum(int(v) for v in counts.values())
        if total <= 0:
            return 0.0
        attended = sum(int(counts.get(s.value, 0)) for s in _ATTENDED)
        return round(attended * 100.0 / total, 2)
