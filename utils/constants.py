"""Constants file."""

import os
from pathlib import Path

APP_NAME = "controller_db"


def _default_base_dir() -> Path:
    """Return the writable base directory for data and logs."""
    override = os.getenv("CONTROLLER_DB_HOME")
    if override:
        return Path(override)
    return Path.home() / ".controller_db"


BASE_DATA_DIR = _default_base_dir()
DATA_DIR = BASE_DATA_DIR / "database"
LOGS_DIR = BASE_DATA_DIR / "logs"

LOG_LEVEL = os.getenv("CONTROLLER_DB_LOG_LEVEL", "INFO").upper()
LOG_ROTATION = "5 MB"
LOG_RETENTION = 5

ITEMS_FILE_NAME = "items.json"
JSON_INDENT = "\t"

# Quality assigned to counts stored before items had qualities
LEGACY_QUALITY = "normal"

__all__ = [
    "APP_NAME",
    "BASE_DATA_DIR",
    "DATA_DIR",
    "LOGS_DIR",
    "LOG_LEVEL",
    "LOG_RETENTION",
    "LOG_ROTATION",
    "ITEMS_FILE_NAME",
    "JSON_INDENT",
    "LEGACY_QUALITY",
]
