from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime
from ..common.payloads import application_from_dict, records_from_list
from ..common.responses import json_endpoint
from ..core.enums import ApprovalDecision, LeaveType
from ..core.exceptions import ValidationError
from ..container import Container
from .aggregator import aggregate, validate_approval_permission


def register(app: Flask, container: Container) -> None:
    def _body() -> dict:
        return request.get_json(silent=True) or {}

    def _now(data: dict):
        value = data.get("now")
        return parse_iso_datetime(value) if value else None

    @app.route("/api/leave/aggregate", methods=["POST"], endpoint="api_leave_aggregate")
    @json_endpoint
    def api_leave_aggregate():
        data = _body()
        records = records_from_list(data.get("records"), application_id=data.get("application_id") or 0)
        return jsonify({"success": True, **aggregate(records).to_dict()}), 200

    @app.route("/api/leave/permission", methods=["POST"], endpoint="api_leave_permission")
    @json_endpoint
    def api_leave_permission():
        data = _body()
        approver_id = str(data.get("approver_id") or "").strip()
        if not approver_id:
            raise ValidationError("approver_id is required")

        application = application_from_dict(data["application"]) if data.get("application") else None
        records = []
        if application is not None:
            records = records_from_list(data.get("records"), application_id=application.application_id)

        permission = validate_approval_permission(
            application,
            records,
            approver_id,
            sequential=container.settings.sequential_approval,
        )
        return jsonify({"success": True, **permission.to_dict()}), 200

    if container.leave_service is None:
        return

    svc = container.leave_service

    @app.route("/api/leave/applications", methods=["POST"], endpoint="api_leave_submit")
    @json_endpoint
    def api_leave_submit():
        data = _body()
        approvers = data.get("approver_ids")
        if not isinstance(approvers, list):
            raise ValidationError("approver_ids must be a list")

        try:
            leave_type = LeaveType(str(data.get("leave_type") or "personal").lower())
        except ValueError:
            raise ValidationError("Unknown leave_type")

        application_id = svc.submit(
            student_id=str(data.get("student_id") or ""),
            session_id=str(data.get("session_id") or ""),
            reason=str(data.get("reason") or ""),
            approver_ids=approvers,
            leave_type=leave_type,
            now=_now(data),
        )
        return jsonify({"success": True, "application_id": application_id}), 201

    @app.route("/api/leave/applications/<int:application_id>/decisions", methods=["POST"], endpoint="api_leave_decide")
    @json_endpoint
    def api_leave_decide(application_id: int):
        data = _body()
        try:
            decision = ApprovalDecision(str(data.get("decision") or "").lower())
        except ValueError:
            raise ValidationError("decision must be approved or rejected")

        result = svc.decide(
            application_id=application_id,
            approver_id=str(data.get("approver_id") or ""),
            decision=decision,
            comment=str(data.get("comment") or ""),
            now=_now(data),
        )
        return jsonify({"success": True, **result.to_dict()}), 200

    @app.route("/api/leave/applications/<int:application_id>/withdraw", methods=["POST"], endpoint="api_leave_withdraw")
    @json_endpoint
    def api_leave_withdraw(application_id: int):
        data = _body()
        svc.withdraw(application_id=application_id, student_id=str(data.get("student_id") or ""), now=_now(data))
        return jsonify({"success": True, "status": "withdrawn"}), 200

    @app.route("/api/leave/applications/<int:application_id>/aggregate", methods=["GET"], endpoint="api_leave_current")
    @json_endpoint
    def api_leave_current(application_id: int):
        return jsonify({"success": True, **svc.current_aggregate(application_id).to_dict()}), 200

    @app.route("/api/leave/applications/<int:application_id>/permission", methods=["GET"], endpoint="api_leave_can_approve")
    @json_endpoint
    def api_leave_can_approve(application_id: int):
        permission = svc.validate_approval_permission(application_id, request.args.get("approver_id", ""))
        return jsonify({"success": True, **permission.to_dict()}), 200
