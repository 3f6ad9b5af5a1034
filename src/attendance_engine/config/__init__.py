from __future__ import annotations

import importlib
import os
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..core.constants import DEFAULT_MAX_TEACHING_WEEKS


def get_settings_module() -> str:
    # APP_ENV picks the settings module, development by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return f"{__name__}.production"

    if env in {"test", "testing"}:
        return f"{__name__}.testing"

    return f"{__name__}.development"


@dataclass(frozen=True)
class EngineSettings:
    secret_key: str
    debug: bool = False
    term_start_date: Optional[date] = None
    max_teaching_weeks: int = DEFAULT_MAX_TEACHING_WEEKS
    sequential_approval: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None


def load_settings(settings_module: Optional[str] = None) -> EngineSettings:
    module = importlib.import_module(settings_module or get_settings_module())
    term_start = getattr(module, "TERM_START_DATE", None)
    return EngineSettings(
        secret_key=str(getattr(module, "SECRET_KEY")),
        debug=bool(getattr(module, "DEBUG", False)),
        term_start_date=parse_iso_date(term_start) if term_start else None,
        max_teaching_weeks=int(getattr(module, "MAX_TEACHING_WEEKS", DEFAULT_MAX_TEACHING_WEEKS)),
        sequential_approval=bool(getattr(module, "SEQUENTIAL_APPROVAL", False)),
        log_level=str(getattr(module, "LOG_LEVEL", "INFO")).upper(),
        log_file=getattr(module, "LOG_FILE", None) or None,
    )
