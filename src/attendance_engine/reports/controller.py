from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.payloads import application_from_dict, list_of, record_from_dict, session_status_from_dict
from ..common.responses import json_endpoint
from ..container import Container
from .export import XLSX_MIMETYPE, attendance_report_to_excel


def register(app: Flask, container: Container) -> None:
    def _report():
        data = request.get_json(silent=True) or {}
        statuses = list_of(data.get("statuses"), session_status_from_dict, "statuses")
        return container.report_service.build_attendance_report(statuses)

    @app.route("/api/reports/attendance", methods=["POST"], endpoint="api_attendance_report")
    @json_endpoint
    def api_attendance_report():
        report = _report()
        return jsonify({
            "success": True,
            "rows": report.rows,
            "summary": report.summary,
            "overall": report.overall,
        }), 200

    @app.route("/api/reports/attendance/export", methods=["POST"], endpoint="api_attendance_export")
    @json_endpoint
    def api_attendance_export():
        output = attendance_report_to_excel(_report())
        return send_file(output, mimetype=XLSX_MIMETYPE, as_attachment=True, download_name="attendance_report.xlsx")

    @app.route("/api/reports/approvals", methods=["POST"], endpoint="api_approval_report")
    @json_endpoint
    def api_approval_report():
        data = request.get_json(silent=True) or {}
        applications = list_of(data.get("applications"), application_from_dict, "applications")
        records = list_of(data.get("records"), record_from_dict, "records")
        stats = container.report_service.approval_statistics(applications, records)
        return jsonify({"success": True, **stats}), 200
