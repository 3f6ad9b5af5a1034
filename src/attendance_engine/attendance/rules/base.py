from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceSignal, AttendanceStatus, LeaveStatus
from ..model import AttendanceEvent, VerificationWindow


@dataclass(frozen=True)
class ResolutionContext:
    """Inputs for one (session, student) pair, already filtered to that pair."""

    session_id: str
    student_id: str
    events: tuple[AttendanceEvent, ...]
    leave_status: Optional[LeaveStatus]
    windows: tuple[VerificationWindow, ...]
    now: datetime


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    signal: AttendanceSignal
    note: Optional[str] = None


class StatusRule(ABC):
    """Strategy Pattern: one precedence rule deciding an attendance status."""

    signal: AttendanceSignal

    @abstractmethod
    def matches(self, ctx: ResolutionContext) -> bool:
        raise NotImplementedError

    @abstractmethod
    def decide(self, ctx: ResolutionContext) -> StatusDecision:
        raise NotImplementedError
