"""
Autofill context logger.

Provides logging interface for the autofill context with automatic [autofill] prefix.
All autofill modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from cvfill.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[autofill]"


def setup_autofill_logger(log_dir: Optional[Path] = None, target: Optional[str] = None) -> Path:
    """
    Setup logger for the autofill context.

    Args:
        log_dir: Directory for this session (defaults to CVFILL_LOGS_PATH)
        target: Page being filled (file path or URL), recorded in provenance

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="autofill",
        log_dir=log_dir,
        extra_provenance={"Target": target} if target else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [autofill] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [autofill] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [autofill] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [autofill] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [autofill] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
