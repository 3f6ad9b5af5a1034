"""Status precedence table.

Single source for the order in which attendance signals win over each other.
The resolver's rule chain and roster sorting are both derived from it.
"""

from __future__ import annotations

from .enums import AttendanceSignal, AttendanceStatus

# Highest precedence first. CHECKIN yields PRESENT or LATE depending on the event.
STATUS_PRECEDENCE: tuple[tuple[AttendanceSignal, tuple[AttendanceStatus, ...]], ...] = (
    (AttendanceSignal.CHECKIN, (AttendanceStatus.PRESENT, AttendanceStatus.LATE)),
    (AttendanceSignal.APPROVED_LEAVE, (AttendanceStatus.LEAVE,)),
    (AttendanceSignal.PENDING_LEAVE, (AttendanceStatus.LEAVE_PENDING,)),
    (AttendanceSignal.EXPIRED_WINDOW_NO_SHOW, (AttendanceStatus.TRUANT,)),
    (AttendanceSignal.DEFAULT, (AttendanceStatus.ABSENT,)),
)

SIGNAL_ORDER: tuple[AttendanceSignal, ...] = tuple(signal for signal, _ in STATUS_PRECEDENCE)

_RANKS: dict[AttendanceStatus, int] = {}
for _signal, _statuses in STATUS_PRECEDENCE:
    for _status in _statuses:
        _RANKS[_status] = len(_RANKS)


def precedence_rank(status: AttendanceStatus) -> int:
    """Lower rank means the status comes first when sorting a roster."""
    return _RANKS[AttendanceStatus(status)]


def signal_for(status: AttendanceStatus) -> AttendanceSignal:
    status = AttendanceStatus(status)
    for signal, statuses in STATUS_PRECEDENCE:
        if status in statuses:
            return signal
    raise KeyError(status)
