# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
import os

from dotenv import load_dotenv

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
load_dotenv()  # Load from .env file in project root


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
# API Settings
_API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3001/api")
_API_TIMEOUT = int(os.getenv("API_TIMEOUT", "15"))
_API_VERIFY_SSL = _env_flag("API_VERIFY_SSL", "true")
_PREFERENCES_ENDPOINT = os.getenv("PREFERENCES_ENDPOINT", "/preferences")

# Wizard behaviour
_AUTOSAVE_ON_ADVANCE = _env_flag("AUTOSAVE_ON_ADVANCE", "true")
_BLOCK_NEXT_ON_ERRORS = _env_flag("BLOCK_NEXT_ON_ERRORS", "true")
_PREFERENCES_PARTIAL_UPDATES = _env_flag("PREFERENCES_PARTIAL_UPDATES", "false")


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "Tenant Preferences"
    VERSION: str = "1.0.0"

    # HTTP API Backend Settings
    # ✅ DYNAMIC: Reads from .env file (API_BASE_URL, API_TIMEOUT, API_VERIFY_SSL)
    API_BASE_URL: str = _API_BASE_URL
    API_TIMEOUT: int = _API_TIMEOUT  # seconds; a save slower than this is treated as failed
    API_VERIFY_SSL: bool = _API_VERIFY_SSL
    PREFERENCES_ENDPOINT: str = _PREFERENCES_ENDPOINT

    # Preference Wizard
    AUTOSAVE_ON_ADVANCE: bool = _AUTOSAVE_ON_ADVANCE
    BLOCK_NEXT_ON_ERRORS: bool = _BLOCK_NEXT_ON_ERRORS
    # PUT only the changed keys once a stored draft exists (POST full snapshot otherwise)
    PREFERENCES_PARTIAL_UPDATES: bool = _PREFERENCES_PARTIAL_UPDATES

    # Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # Resume-step bookkeeping
    STEP_PROGRESS_FILE: str = "wizard_progress.json"
    STEP_PROGRESS_PATH: Path = DATA_DIR / STEP_PROGRESS_FILE

    # Logging
    LOG_FILE: str = "app.log"
    LOG_PATH: Path = LOGS_DIR / LOG_FILE
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3
    LOG_CONSOLE_LEVEL: str = os.getenv("LOG_CONSOLE_LEVEL", "INFO").upper()
