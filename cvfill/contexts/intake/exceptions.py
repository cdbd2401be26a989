"""Custom exceptions for the intake context."""

from pathlib import Path
from typing import Optional


class CVParseError(Exception):
    """
    Exception raised when a resume document cannot be turned into text.

    Extraction either succeeds with a (possibly sparse) record or fails
    atomically with this error; it never returns a half-built record.

    Attributes:
        message: Error description
        source_path: The document that failed, if known
        original_error: The underlying library error, if any
    """

    def __init__(
        self,
        message: str,
        source_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.source_path = source_path
        self.original_error = original_error

        parts = [message]

        if source_path:
            parts.append(f"Source: {source_path}")

        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
