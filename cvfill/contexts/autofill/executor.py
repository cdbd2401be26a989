"""
AutofillExecutor: one fill pass over a page.

Scan every input and textarea, skip what cannot be written, classify the
rest, resolve values from the record, write them with the framework event
sequence, then highlight what was filled and show one summary notification.

A field that fails mid-write is skipped and logged at debug level; only a
failure to enumerate the page fails the whole pass.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Optional

from dotenv import load_dotenv

from cvfill.contexts.autofill.logger import _log_debug, _log_error, _log_info
from cvfill.contexts.autofill.page_context import FILL_EVENTS, PageContext
from cvfill.contexts.intake.cv_data_structure import CVRecord
from cvfill.contexts.matching.field_descriptor import FieldDescriptor
from cvfill.contexts.matching.field_matcher import FieldMatcher

load_dotenv()
HIGHLIGHT_MS = int(os.getenv("CVFILL_HIGHLIGHT_MS", "2000"))
NOTIFICATION_MS = int(os.getenv("CVFILL_NOTIFICATION_MS", "3000"))

NOTIFICATION_TEMPLATE = "✓ Filled {count} fields from your CV"


@dataclass
class FilledField:
    """One field written during a fill pass."""

    type: str
    value: str
    descriptor: Optional[FieldDescriptor] = None

    def to_dict(self) -> dict[str, str]:
        return {"type": str(self.type), "value": self.value}


@dataclass
class FillResult:
    """
    Outcome of a fill pass.

    Attributes:
        success: False only when the page could not be scanned
        fields: Filled fields in document order
        error: Error message if not successful
    """

    success: bool
    fields: list[FilledField] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def fields_count(self) -> int:
        return len(self.fields)

    def to_dict(self) -> dict[str, Any]:
        """Wire response: {success, fieldsCount, fields} or {success, error}."""
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "fieldsCount": self.fields_count,
            "fields": [f.to_dict() for f in self.fields],
        }


class AutofillExecutor:
    """
    Fill a page's form fields from a CVRecord.

    Args:
        page: PageContext to operate on
        matcher: Field classifier (defaults to the built-in mapping table)
        highlight_ms: How long filled fields stay highlighted
        notification_ms: How long the summary notification stays up
    """

    def __init__(
        self,
        page: PageContext,
        matcher: Optional[FieldMatcher] = None,
        highlight_ms: int = HIGHLIGHT_MS,
        notification_ms: int = NOTIFICATION_MS,
    ):
        self.page = page
        self.matcher = matcher or FieldMatcher()
        self.highlight_ms = highlight_ms
        self.notification_ms = notification_ms

    def fill(self, cv: CVRecord) -> FillResult:
        """
        Run one fill pass.

        Args:
            cv: Record to take values from

        Returns:
            FillResult; success=False only if the page scan itself failed
        """
        try:
            elements = self.page.query_fields()
        except Exception as e:
            _log_error(f"Could not scan page for fields: {e}")
            return FillResult(success=False, error=str(e))

        _log_debug(f"Found {len(elements)} input/textarea element(s)")

        filled: list[FilledField] = []
        filled_elements = []
        for element in elements:
            try:
                filled_field = self._fill_element(element, cv)
            except Exception as e:
                _log_debug(f"Skipped field after error: {e}")
                continue
            if filled_field:
                filled.append(filled_field)
                filled_elements.append(element)

        self._show_feedback(filled_elements)

        _log_info(f"Filled {len(filled)} of {len(elements)} field(s)")
        return FillResult(success=True, fields=filled)

    def _fill_element(self, element: Any, cv: CVRecord) -> Optional[FilledField]:
        descriptor = self.page.describe(element)
        if not self.matcher.is_fillable(descriptor):
            return None

        field_type = self.matcher.detect_field_type(descriptor, cv)
        if field_type is None:
            return None

        value = self.matcher.get_value_for_field(field_type, cv)
        if not value:
            return None

        self.write(element, value)
        _log_debug(f"{descriptor.describe()} <- {field_type}")
        return FilledField(type=str(field_type), value=value, descriptor=descriptor)

    def write(self, element: Any, value: str) -> None:
        """Write a value and dispatch input, change and blur in that order."""
        self.page.write_value(element, value)
        for event_type in FILL_EVENTS:
            self.page.dispatch_event(element, event_type)

    def _show_feedback(self, filled_elements: list) -> None:
        for element in filled_elements:
            try:
                self.page.highlight(element, self.highlight_ms)
            except Exception as e:
                _log_debug(f"Could not highlight field: {e}")

        try:
            self.page.notify(
                NOTIFICATION_TEMPLATE.format(count=len(filled_elements)), self.notification_ms
            )
        except Exception as e:
            _log_debug(f"Could not show notification: {e}")
