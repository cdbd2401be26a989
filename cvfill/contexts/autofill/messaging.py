"""
Fill request/response handling on both sides of the page transport.

Page side:    handle_autofill_request(request, page) -> response dict
Control side: request_autofill(store, transport) -> StatusMessage

Wire formats:
    request:  {"action": "autofill", "cvData": <CVRecord dict>}
    response: {"success": true, "fieldsCount": n, "fields": [{"type", "value"}]}
              {"success": false, "error": "..."}

The transport is any callable taking a request dict and returning the
response dict. A transport that raises or returns None means the page side
never answered (e.g. the page was opened before the handler existed).
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from cvfill.contexts.autofill.executor import AutofillExecutor
from cvfill.contexts.autofill.logger import _log_error, _log_info, _log_warning
from cvfill.contexts.autofill.page_context import PageContext
from cvfill.contexts.intake.cv_data_structure import CVRecord
from cvfill.contexts.matching.field_matcher import FieldMatcher

AUTOFILL_ACTION = "autofill"

Transport = Callable[[dict], Optional[dict]]


@dataclass(frozen=True)
class StatusMessage:
    """User-facing outcome of an autofill request. kind is "success" or "error"."""

    text: str
    kind: str

    @property
    def ok(self) -> bool:
        return self.kind == "success"


def build_autofill_request(cv: CVRecord) -> dict[str, Any]:
    return {"action": AUTOFILL_ACTION, "cvData": cv.to_dict()}


def handle_autofill_request(
    request: dict, page: PageContext, matcher: Optional[FieldMatcher] = None
) -> dict[str, Any]:
    """
    Answer one request on the page side.

    Args:
        request: Incoming request dict
        page: Page to fill
        matcher: Optional classifier override

    Returns:
        Response dict
    """
    action = request.get("action") if isinstance(request, dict) else None
    if action != AUTOFILL_ACTION:
        return {"success": False, "error": f"Unknown action: {action}"}

    cv = CVRecord.from_dict(request.get("cvData"))
    return AutofillExecutor(page, matcher=matcher).fill(cv).to_dict()


def request_autofill(store, transport: Transport) -> StatusMessage:
    """
    Send the active profile to the page and summarize the answer.

    Args:
        store: ProfileStore holding the active profile
        transport: Callable delivering the request to the page side

    Returns:
        StatusMessage for the user
    """
    try:
        loaded = store.load()
        if not loaded.success or not loaded.data:
            return StatusMessage("No CV data found", "error")

        try:
            response = transport(build_autofill_request(loaded.data))
        except Exception as e:
            _log_warning(f"Page did not answer the autofill request: {e}")
            response = None

        if response is None:
            return StatusMessage("Please refresh the page and try again", "error")

        if response.get("success"):
            count = response.get("fieldsCount", 0)
            _log_info(f"Page reported {count} filled field(s)")
            return StatusMessage(f"Filled {count} fields!", "success")

        _log_warning(f"Autofill unsuccessful: {response.get('error')}")
        return StatusMessage("No form fields found on this page", "error")

    except Exception as e:
        _log_error(f"Autofill failed: {e}")
        return StatusMessage("Autofill failed", "error")
