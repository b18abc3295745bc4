"""Loguru sinks for the store: stderr plus an optional rotating file per run."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

from utils.constants import APP_NAME, LOG_LEVEL, LOG_RETENTION, LOG_ROTATION


def configure_logging(logs_dir: Path | None, level: str = LOG_LEVEL) -> Path | None:
    """
    Replace the loguru sinks with stderr and, when logs_dir is given, a rotating file.

    Args:
        logs_dir: Directory for the run's log file, or None for stderr only
        level: Minimum level for both sinks

    Returns:
        The log file path, or None when no file sink could be added
    """
    logger.remove()
    logger.add(sys.stderr, level=level, backtrace=True, diagnose=False, enqueue=True)
    if logs_dir is None:
        return None

    log_file = logs_dir / f"{APP_NAME}_{datetime.now():%Y%m%d_%H%M%S}.log"
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level,
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
            encoding="utf-8",
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )
    except OSError as exc:
        logger.warning(f"File logging disabled; unable to write to {logs_dir}: {exc}")
        return None

    logger.debug(f"Logging to {log_file} at level {level}")
    return log_file
