from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .core.constants import DEFAULT_LOG_FORMAT, LOG_FILE_BACKUP_COUNT, LOG_FILE_MAX_BYTES


def setup_logging(*, level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure the root logger once for the whole application.

    Logs always go to stdout; when ``log_file`` is set they are also written
    to a file rotated at 5 MB, keeping 5 old files.
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Drop handlers installed by the server so our format applies everywhere.
    if logger.hasHandlers():
        logger.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
    logger.addHandler(stdout_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUP_COUNT)
        file_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        logger.addHandler(file_handler)
