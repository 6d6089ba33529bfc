"""
Centralized configuration module for application-wide settings.

All settings come from environment variables so tests and deployments can
override them without code changes. A ``.env`` file is honoured by
``clinic.main`` when ``DATABASE_URL`` is not already defined.
"""

import logging
import os
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")

# ===========================
# Timezone Configuration
# ===========================


def get_app_timezone() -> ZoneInfo:
    """
    Get the application timezone from environment variable.

    Returns:
        ZoneInfo: Application timezone (defaults to UTC if not configured)

    Environment Variables:
        TZ: Timezone identifier (e.g., 'Asia/Amman', 'UTC')
            Default: 'UTC'
    """
    tz_name = os.getenv("TZ", "UTC")

    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.warning(
            f"Invalid timezone '{tz_name}' specified in TZ environment variable. "
            f"Falling back to UTC. Error: {e}"
        )
        return ZoneInfo("UTC")


APP_TZ = get_app_timezone()


def log_timezone_config():
    """Log the active timezone configuration at startup."""
    logger.info(
        "Timezone configuration initialized",
        extra={
            "context": {
                "timezone": str(APP_TZ),
                "tz_env_var": os.getenv("TZ", "UTC"),
            }
        },
    )


# ===========================
# Database Configuration
# ===========================

DEFAULT_DATABASE_URL = "sqlite:///./clinic.db"


def get_database_url() -> str:
    """Return the configured SQLAlchemy database URL."""
    return os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


# ===========================
# Patient Records Configuration
# ===========================

DEFAULT_RECENT_VISITS_LIMIT = 3


def get_recent_visits_limit() -> int:
    """
    Number of most recent visits attached to each patient record.

    Environment Variables:
        RECENT_VISITS_LIMIT: positive integer, default 3
    """
    raw = os.getenv("RECENT_VISITS_LIMIT", str(DEFAULT_RECENT_VISITS_LIMIT))
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning(
            "Invalid RECENT_VISITS_LIMIT, using default",
            extra={"context": {"value": raw}},
        )
        return DEFAULT_RECENT_VISITS_LIMIT
    if value <= 0:
        return DEFAULT_RECENT_VISITS_LIMIT
    return value


# ===========================
# Runtime / Logging Configuration
# ===========================


def is_production() -> bool:
    return os.getenv("FLASK_ENV", "development") == "production"


def is_testing() -> bool:
    return os.getenv("TESTING", "").lower().strip() in _TRUTHY


def get_log_settings() -> dict:
    """Collect logging flags used by ``setup_logging``."""
    return {
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "use_json_format": os.getenv(
            "LOG_JSON", "true" if is_production() else "false"
        ).lower()
        in _TRUTHY,
        "log_to_file": os.getenv(
            "LOG_TO_FILE", "false" if is_testing() else "true"
        ).lower()
        in _TRUTHY,
        "enable_sql_echo": os.getenv("SQL_ECHO", "false").lower() in _TRUTHY,
    }
