"""Convert JSON request bodies into domain records.

Every parser raises ``ValidationError`` on missing or malformed fields so
controllers can answer 400 uniformly.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..attendance.model import AttendanceEvent, StudentSessionStatus, VerificationWindow
from ..core.enums import ApprovalDecision, AttendanceStatus, LeaveStatus, LeaveType, WindowStatus
from ..core.exceptions import ValidationError
from ..core.precedence import signal_for
from ..leave.aggregator import snapshot
from ..leave.model import ApprovalRecord, LeaveApplication, LeaveSnapshot
from .datetime_utils import parse_iso_datetime


def _require(data: Mapping[str, Any], key: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValidationError("Expected a JSON object")
    value = data.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Missing field: {key}")
    return value


def _enum(enum_cls, value: Any, field_name: str):
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def _optional_datetime(data: Mapping[str, Any], key: str):
    value = data.get(key)
    return parse_iso_datetime(value) if value else None


def _optional_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be an integer")


def _require_int(data: Mapping[str, Any], key: str) -> int:
    value = _require(data, key)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be an integer")


def _optional_bool(data: Mapping[str, Any], key: str, default: bool = False) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be true or false")
    return value


def _optional_mapping(data: Mapping[str, Any], key: str) -> dict:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise ValidationError(f"{key} must be an object")
    return dict(value)


def event_from_dict(data: Mapping[str, Any]) -> AttendanceEvent:
    return AttendanceEvent(
        session_id=str(_require(data, "session_id")),
        student_id=str(_require(data, "student_id")),
        checkin_time=parse_iso_datetime(_require(data, "checkin_time")),
        is_late=_optional_bool(data, "is_late"),
        late_minutes=_optional_int(data, "late_minutes"),
        metadata=_optional_mapping(data, "metadata"),
    )


def window_from_dict(data: Mapping[str, Any]) -> VerificationWindow:
    return VerificationWindow(
        session_id=str(_require(data, "session_id")),
        round_number=_require_int(data, "round_number"),
        open_time=parse_iso_datetime(_require(data, "open_time")),
        close_time=parse_iso_datetime(_require(data, "close_time")),
        status=_enum(WindowStatus, data.get("status", "open"), "status"),
        opened_by=data.get("opened_by"),
    )


def application_from_dict(data: Mapping[str, Any]) -> LeaveApplication:
    return LeaveApplication(
        application_id=_require_int(data, "application_id"),
        student_id=str(_require(data, "student_id")),
        session_id=str(_require(data, "session_id")),
        reason=str(data.get("reason") or ""),
        submitted_at=parse_iso_datetime(_require(data, "submitted_at")),
        leave_type=_enum(LeaveType, data.get("leave_type", "personal"), "leave_type"),
        status=_enum(LeaveStatus, data.get("status", "pending"), "status"),
    )


def record_from_dict(data: Mapping[str, Any], *, application_id: Optional[int] = None) -> ApprovalRecord:
    if not isinstance(data, Mapping):
        raise ValidationError("Expected a JSON object")
    app_id = _optional_int(data, "application_id")
    if app_id is None:
        app_id = application_id if application_id is not None else _require_int(data, "application_id")
    ordinal = _optional_int(data, "ordinal")
    return ApprovalRecord(
        record_id=_optional_int(data, "record_id") or 0,
        application_id=app_id,
        approver_id=str(_require(data, "approver_id")),
        decision=_enum(ApprovalDecision, data.get("decision", "pending"), "decision"),
        decided_at=_optional_datetime(data, "decided_at"),
        comment=data.get("comment"),
        ordinal=1 if ordinal is None else ordinal,
    )


def records_from_list(items: Any, *, application_id: Optional[int] = None) -> list[ApprovalRecord]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValidationError("records must be a list")
    return [record_from_dict(item, application_id=application_id) for item in items]


def leave_from_dict(data: Optional[Mapping[str, Any]]) -> Optional[LeaveSnapshot]:
    """``{"application": {...}, "records": [...]}`` -> LeaveSnapshot, or None."""
    if not data:
        return None
    app = application_from_dict(_require(data, "application"))
    return snapshot(app, records_from_list(data.get("records"), application_id=app.application_id))


def list_of(items: Any, parser, field_name: str) -> list:
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValidationError(f"{field_name} must be a list")
    return [parser(item) for item in items]


def session_status_from_dict(data: Mapping[str, Any]) -> StudentSessionStatus:
    status = _enum(AttendanceStatus, _require(data, "status"), "status")
    return StudentSessionStatus(
        session_id=str(_require(data, "session_id")),
        student_id=str(_require(data, "student_id")),
        status=status,
        signal=signal_for(status),
        decided_at=parse_iso_datetime(_require(data, "decided_at")),
        note=data.get("note"),
    )
