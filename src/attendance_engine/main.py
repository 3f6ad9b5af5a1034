from __future__ import annotations

import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .attendance.repository import AttendanceRepository
from .config import EngineSettings, get_settings_module, load_settings
from .container import build_container
from .leave.controller import register as register_leave
from .leave.repository import LeaveRepository
from .logging_config import setup_logging
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def create_app(
    *,
    settings: Optional[EngineSettings] = None,
    attendance_repo: Optional[AttendanceRepository] = None,
    leave_repo: Optional[LeaveRepository] = None,
) -> Flask:
    load_dotenv(override=False)
    settings = settings or load_settings()
    setup_logging(level=settings.log_level, log_file=settings.log_file)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["DEBUG"] = settings.debug

    if settings.debug:
        logger.info(
            "settings=%s term_start=%s sequential_approval=%s",
            get_settings_module(), settings.term_start_date, settings.sequential_approval,
        )

    container = build_container(settings=settings, attendance_repo=attendance_repo, leave_repo=leave_repo)

    register_attendance(app, container)
    register_leave(app, container)
    register_reports(app, container)

    return app
