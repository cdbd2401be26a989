"""
Profiles context logger.

Provides logging interface for the profiles context with automatic [profiles] prefix.
All profile modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from cvfill.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[profiles]"


def setup_profiles_logger(log_dir: Optional[Path] = None, store_path: Optional[Path] = None) -> Path:
    """
    Setup logger for the profiles context.

    Args:
        log_dir: Directory for this session (defaults to CVFILL_LOGS_PATH)
        store_path: Profile store file, recorded in provenance

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="profiles",
        log_dir=log_dir,
        extra_provenance={"Profile store": store_path} if store_path else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [profiles] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [profiles] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [profiles] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [profiles] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [profiles] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
