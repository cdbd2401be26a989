"""
Autofill Context

Responsibilities:
- Scans a page for input and textarea elements
- Writes CVRecord values into matched fields with framework-compatible events
- Highlights filled fields and shows a summary notification
- Handles fill requests and turns responses into user status messages

Owns: PageContext implementations and the fill pass
Never: Parses resumes or persists profiles
"""

from cvfill.contexts.autofill.executor import AutofillExecutor, FilledField, FillResult
from cvfill.contexts.autofill.html_page import HtmlPageContext
from cvfill.contexts.autofill.messaging import (
    StatusMessage,
    handle_autofill_request,
    request_autofill,
)
from cvfill.contexts.autofill.page_context import PageContext

__all__ = [
    "AutofillExecutor",
    "FillResult",
    "FilledField",
    "HtmlPageContext",
    "PageContext",
    "StatusMessage",
    "handle_autofill_request",
    "request_autofill",
]
