"""Utility functions for dirstat"""

import logging
import os

import psutil


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Number of extensions / files shown in reports when not overridden
DEFAULT_TOP = 15
MIN_WORKERS = 2


def get_int_env(key: str) -> int:
    """Get integer value from environment variable, return 0 if not set or invalid."""
    val = os.getenv(key)
    if val is None:
        return 0
    try:
        return int(val)
    except ValueError:
        return 0


def get_str_env(key: str, default: str) -> str:
    """
    Get string from environment variable, return default if not set.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        String value or default
    """
    return os.getenv(key, default)


def get_bool_env(key: str, default: bool) -> bool:
    """
    Get boolean from environment variable, return default if not set.

    Recognizes: true/false, yes/no, 1/0 (case-insensitive)

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Boolean value or default
    """
    val = os.getenv(key)
    if val is None:
        return default
    val_lower = val.lower()
    if val_lower in ('true', 'yes', '1'):
        return True
    elif val_lower in ('false', 'no', '0'):
        return False
    return default


def hardware_parallelism() -> int:
    """Number of logical CPUs, falling back to os.cpu_count()."""
    try:
        count = psutil.cpu_count(logical=True)
    except (OSError, RuntimeError):
        count = None
    return count or os.cpu_count() or 1


def default_worker_count() -> int:
    """Worker pool size used when the caller does not pass one.

    Priority:
    1. DIRSTAT_WORKERS environment variable (if set to a positive int)
    2. max(2, logical CPU count)
    """
    env_workers = get_int_env('DIRSTAT_WORKERS')
    if env_workers > 0:
        return max(MIN_WORKERS, env_workers)
    return max(MIN_WORKERS, hardware_parallelism())


def default_top() -> int:
    """Number of report rows, from DIRSTAT_TOP or DEFAULT_TOP."""
    env_top = get_int_env('DIRSTAT_TOP')
    return env_top if env_top > 0 else DEFAULT_TOP


def human_readable_size(size_bytes: int) -> str:
    """Convert bytes to human-readable format."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024:
            return f'{size_bytes:.2f} {unit}'
        size_bytes /= 1024
    return f'{size_bytes:.2f} PB'


def setup_logging(level_name: str | None = None) -> None:
    """Configure root logging for the command line entry point.

    Args:
        level_name: Level name such as 'DEBUG'. Defaults to DIRSTAT_LOG_LEVEL,
            then WARNING. Unknown names fall back to WARNING.
    """
    if level_name is None:
        level_name = get_str_env('DIRSTAT_LOG_LEVEL', 'WARNING')
    level = getattr(logging, level_name.upper(), logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger('dirstat').setLevel(level)
