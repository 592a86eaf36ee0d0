# config.py - environment-driven configuration for the cleanup jobs
# Values come from environment variables (.env supported for local runs)

import os
from typing import Any, Callable, List

from dotenv import load_dotenv

from .logging_setup import logger
from .models import BYTES_PER_GB
from .schema import LIVE_STREAMS_BLOB_PREFIX

# Load environment variables (local dev only; Cloud Run injects them directly)
load_dotenv()

# Dictionary to track config values and their sources
CONFIG_SOURCES = {}


def get_config_value(key: str, default: Any, cast_func: Callable = str) -> Any:
    value = os.getenv(key)
    if value is not None:
        try:
            casted_value = cast_func(value)
        except Exception:
            logger.warning(f"Invalid value for {key}={value!r}, using default: {default}")
            casted_value = default
        CONFIG_SOURCES[key] = {"value": casted_value, "source": "env"}
        return casted_value
    else:
        CONFIG_SOURCES[key] = {"value": default, "source": "default"}
        return default


def get_env_int(key: str, default: int) -> int:
    return get_config_value(key, default, int)


def get_env_float(key: str, default: float) -> float:
    return get_config_value(key, default, float)


def get_env_list(key: str, default: List[str] = None, separator: str = ',') -> List[str]:
    if default is None:
        default = []

    def cast_list(val):
        return [item.strip() for item in val.split(separator) if item.strip()]
    return get_config_value(key, default, cast_list)


# =============================================================================
# GOOGLE CLOUD
# =============================================================================

GOOGLE_CLOUD_PROJECT = get_config_value("GOOGLE_CLOUD_PROJECT", "")
# Firebase projects default to <project>.appspot.com for the media bucket
STORAGE_BUCKET = get_config_value(
    "STORAGE_BUCKET", f"{GOOGLE_CLOUD_PROJECT}.appspot.com" if GOOGLE_CLOUD_PROJECT else ""
)

# =============================================================================
# STREAM CLEANUP
# =============================================================================

# Firestore rejects write batches larger than 500 operations
MAX_BATCH_SIZE = 500
CHILD_DELETE_BATCH_SIZE = min(get_env_int("CHILD_DELETE_BATCH_SIZE", MAX_BATCH_SIZE), MAX_BATCH_SIZE)

# =============================================================================
# STORAGE MONITORING
# =============================================================================

STORAGE_MONITOR_PREFIX = get_config_value("STORAGE_MONITOR_PREFIX", LIVE_STREAMS_BLOB_PREFIX)
STORAGE_WARN_THRESHOLD_GB = get_env_float("STORAGE_WARN_THRESHOLD_GB", 4.5)
STORAGE_WARN_THRESHOLD_BYTES = STORAGE_WARN_THRESHOLD_GB * BYTES_PER_GB

# =============================================================================
# SCHEDULING
# =============================================================================

SCHEDULE_TIME_ZONE = get_config_value("SCHEDULE_TIME_ZONE", "Asia/Bangkok")
CLEANUP_SCHEDULE = get_config_value("CLEANUP_SCHEDULE", "0 3 * * *")
STORAGE_MONITOR_SCHEDULE = get_config_value("STORAGE_MONITOR_SCHEDULE", "0 0 * * *")

# =============================================================================
# HTTP
# =============================================================================

FRONTEND_ORIGINS = get_env_list("FRONTEND_ORIGINS", ["*"])
PORT = get_env_int("PORT", 8080)


# =============================================================================
# VALIDATION
# =============================================================================

def validate_config():
    """Validate critical configuration values."""
    errors = []
    warnings = []

    if not STORAGE_BUCKET:
        warnings.append("STORAGE_BUCKET not set and GOOGLE_CLOUD_PROJECT unknown - storage access will fail")
    if CHILD_DELETE_BATCH_SIZE <= 0:
        errors.append("CHILD_DELETE_BATCH_SIZE must be positive")
    if STORAGE_WARN_THRESHOLD_GB <= 0:
        warnings.append("STORAGE_WARN_THRESHOLD_GB should be positive")
    if not STORAGE_MONITOR_PREFIX:
        warnings.append("STORAGE_MONITOR_PREFIX is empty - the whole bucket will be measured")

    for error in errors:
        logger.error(f"Configuration error: {error}")
    for warning in warnings:
        logger.warning(f"Configuration warning: {warning}")

    return len(errors) == 0


config_valid = validate_config()

logger.debug(f"config loaded: {CONFIG_SOURCES}")
