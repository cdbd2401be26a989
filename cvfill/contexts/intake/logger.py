"""
Intake context logger.

Provides logging interface for the intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from cvfill.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Optional[Path] = None, source: Optional[str] = None) -> Path:
    """
    Setup logger for the intake context.

    Args:
        log_dir: Directory for this session (defaults to CVFILL_LOGS_PATH)
        source: Document being parsed, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="intake",
        log_dir=log_dir,
        extra_provenance={"Source": source} if source else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [intake] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [intake] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_extraction_summary(source: str, record) -> None:
    """
    Log what was extracted from one document.

    Args:
        source: Document name or "<text>"
        record: CVRecord produced by the parser
    """
    personal = record.personal_info.to_dict()
    _log_info(
        f"{source}: {len(personal)} personal fields, {len(record.education)} education, "
        f"{len(record.experience)} experience, {len(record.skills)} skills, "
        f"{len(record.custom_fields)} custom fields"
    )
    if not personal:
        _log_warning(f"{source}: no name or contact details found")
    if record.custom_fields:
        _log_debug(f"Custom headings: {', '.join(record.custom_fields)}")
