"""Configuration management for finboard.

This module centralizes all configuration values including paths,
defaults, and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base project root - assumes this file is in finboard/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("FINBOARD_DATA_DIR", _PROJECT_ROOT / "data"))
REPORTS_DIR = DATA_DIR / "reports"
LOGS_DIR = DATA_DIR / "logs"

# Database
DB_PATH = Path(
    os.getenv("FINBOARD_DB_PATH", DATA_DIR / "finboard.db")
).resolve()

# Display currency for formatted amounts
CURRENCY = os.getenv("FINBOARD_CURRENCY", "USD")

# Logging
LOG_LEVEL = os.getenv("FINBOARD_LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("FINBOARD_LOG_FILE")

# Budget and goal thresholds
BUDGET_WARNING_PERCENT = 75.0
BUDGET_OVER_PERCENT = 100.0
GOAL_URGENT_DAYS = 30

# Trailing window used by the income vs expense series
DEFAULT_TREND_MONTHS = 6


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, REPORTS_DIR, LOGS_DIR]:
        directory.mkdir(parents=True, exist_ok=True)


def get_db_path() -> str:
    """Get the database path as a string."""
    return str(DB_PATH)
