from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date, parse_iso_datetime, teaching_week
from ..common.payloads import event_from_dict, leave_from_dict, list_of, window_from_dict
from ..common.responses import json_endpoint
from ..core.exceptions import ValidationError
from ..container import Container
from ..leave.aggregator import pick_leaves


def register(app: Flask, container: Container) -> None:
    def _body() -> dict:
        return request.get_json(silent=True) or {}

    def _now(data: dict):
        value = data.get("now")
        return parse_iso_datetime(value) if value else now_local()

    def _status_json(s) -> dict:
        return {
            "session_id": s.session_id,
            "student_id": s.student_id,
            "status": s.status.value,
            "signal": s.signal.value,
            "decided_at": s.decided_at.isoformat(),
            "note": s.note,
        }

    @app.route("/api/attendance/resolve", methods=["POST"], endpoint="api_attendance_resolve")
    @json_endpoint
    def api_attendance_resolve():
        data = _body()
        session_id = str(data.get("session_id") or "").strip()
        student_id = str(data.get("student_id") or "").strip()
        if not session_id or not student_id:
            raise ValidationError("session_id and student_id are required")

        decision = container.resolver.decide(
            session_id,
            student_id,
            list_of(data.get("events"), event_from_dict, "events"),
            leave_from_dict(data.get("leave")),
            list_of(data.get("windows"), window_from_dict, "windows"),
            _now(data),
        )
        return jsonify({
            "success": True,
            "status": decision.status.value,
            "signal": decision.signal.value,
            "note": decision.note,
        }), 200

    @app.route("/api/attendance/roster", methods=["POST"], endpoint="api_attendance_roster")
    @json_endpoint
    def api_attendance_roster():
        data = _body()
        session_id = str(data.get("session_id") or "").strip()
        student_ids = data.get("student_ids")
        if not session_id or not isinstance(student_ids, list):
            raise ValidationError("session_id and student_ids are required")

        statuses = container.resolver.resolve_roster(
            session_id,
            [str(s) for s in student_ids],
            list_of(data.get("events"), event_from_dict, "events"),
            pick_leaves(list_of(data.get("leaves"), leave_from_dict, "leaves")),
            list_of(data.get("windows"), window_from_dict, "windows"),
            _now(data),
        )
        return jsonify({"success": True, "statuses": [_status_json(s) for s in statuses]}), 200

    @app.route("/api/calendar/teaching-week", methods=["GET"], endpoint="api_teaching_week")
    @json_endpoint
    def api_teaching_week():
        term_start = container.settings.term_start_date
        if term_start is None:
            raise ValidationError("Term start date is not configured")

        value = request.args.get("date")
        day = parse_iso_date(value) if value else now_local().date()
        week = teaching_week(term_start, day, max_weeks=container.settings.max_teaching_weeks)
        return jsonify({
            "success": True,
            "date": day.isoformat(),
            "term_start_date": term_start.isoformat(),
            "teaching_week": week,
        }), 200

    if container.attendance_service is None:
        return

    @app.route("/api/sessions/<session_id>/students/<student_id>/status", methods=["GET"], endpoint="api_student_status")
    @json_endpoint
    def api_student_status(session_id: str, student_id: str):
        decision = container.attendance_service.student_status(session_id, student_id)
        return jsonify({"success": True, "status": decision.status.value, "signal": decision.signal.value}), 200

    @app.route("/api/sessions/<session_id>/finalize", methods=["POST"], endpoint="api_finalize_session")
    @json_endpoint
    def api_finalize_session(session_id: str):
        statuses = container.attendance_service.finalize_session(session_id, now=_now(_body()))
        return jsonify({"success": True, "statuses": [_status_json(s) for s in statuses]}), 200
