from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping


class AttendanceRateCalculator(ABC):
    """Calculator interface (Strategy Pattern for attendance rates)."""

    @abstractmethod
    def rate(self, counts: Mapping[str, int]) -> float:
        raise NotImplementedError
