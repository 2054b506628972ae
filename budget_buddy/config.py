"""Configuration management for Budget Buddy.

This module centralizes the on-disk locations used by the app, with
environment variable overrides for tests and alternative installs.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base project root - assumes this file is in budget_buddy/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("BUDGETBUDDY_DATA_DIR", _PROJECT_ROOT / "data"))
BACKUP_DIR = Path(os.getenv("BUDGETBUDDY_BACKUP_DIR", DATA_DIR / "backups"))

# The single persisted record
APP_DATA_FILE = Path(
    os.getenv("BUDGETBUDDY_DATA_FILE", DATA_DIR / "app_data.json")
).resolve()

BACKUP_FILE_PREFIX = "budgetbuddy_backup_"


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, BACKUP_DIR, APP_DATA_FILE.parent]:
        directory.mkdir(parents=True, exist_ok=True)
