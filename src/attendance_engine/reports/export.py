from __future__ import annotations

import io

import pandas as pd

from .service import ReportData

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

ROW_COLUMNS = ["session_id", "student_id", "status", "label", "decided_at", "note"]


def attendance_report_to_excel(report: ReportData) -> io.BytesIO:
    """Write the report into an in-memory workbook (sheets: Statuses, Summary)."""
    rows = pd.DataFrame(report.rows, columns=ROW_COLUMNS)

    # Flatten the per-status counts into one column each.
    summary = pd.DataFrame(
        [
            {
                "student_id": s["student_id"],
                "total_count": s["total_count"],
                **s["counts"],
                "attendance_rate": s["attendance_rate"],
            }
            for s in report.summary
        ]
    )

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        rows.to_excel(writer, index=False, sheet_name="Statuses")
        summary.to_excel(writer, index=False, sheet_name="Summary")

    output.seek(0)
    return output
