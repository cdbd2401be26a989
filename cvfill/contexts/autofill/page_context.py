"""
PageContext: capability interface over one page holding form fields.

The executor never touches a DOM directly. It asks a PageContext to list
field elements, describe them, write values, dispatch events and show
visual feedback. Elements are opaque handles owned by the implementation.

Implementations:
- HtmlPageContext (html_page.py): static HTML via BeautifulSoup, virtual clock
- PlaywrightPageContext (browser_page.py): live page via Playwright
"""

from abc import ABC, abstractmethod
from typing import Any

from cvfill.contexts.matching.field_descriptor import FieldDescriptor

# Visual feedback identifiers shared by every implementation
HIGHLIGHT_CLASS = "cv-autofill-highlight"
NOTIFICATION_ID = "cv-autofill-notification"
STYLE_ID = "cv-autofill-styles"

# Notification slide-out animation length, after which it is removed
NOTIFICATION_SLIDE_OUT_MS = 300

# Events dispatched after every write, in order
FILL_EVENTS = ("input", "change", "blur")

AUTOFILL_CSS = """
.cv-autofill-highlight {
  animation: cvAutofillPulse 0.6s ease-in-out;
  border: 2px solid #00ff88 !important;
  background-color: rgba(0, 255, 136, 0.05) !important;
}
@keyframes cvAutofillPulse {
  0%, 100% { box-shadow: 0 0 0 0 rgba(0, 255, 136, 0.7); }
  50% { box-shadow: 0 0 0 8px rgba(0, 255, 136, 0); }
}
#cv-autofill-notification {
  position: fixed;
  top: 20px;
  right: 20px;
  background: linear-gradient(135deg, #00d4ff 0%, #7000ff 100%);
  color: white;
  padding: 16px 24px;
  border-radius: 8px;
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
  font-size: 14px;
  font-weight: 600;
  box-shadow: 0 8px 32px rgba(0, 0, 0, 0.3);
  z-index: 999999;
  animation: cvSlideIn 0.3s ease-out;
}
@keyframes cvSlideIn {
  from { transform: translateX(400px); opacity: 0; }
  to { transform: translateX(0); opacity: 1; }
}
@keyframes cvSlideOut {
  from { transform: translateX(0); opacity: 1; }
  to { transform: translateX(400px); opacity: 0; }
}
"""


class PageContext(ABC):
    """
    Abstract page holding input and textarea elements.

    Subclasses must implement every abstract method. Timers started by
    highlight() and notify() are owned by the page and never awaited by
    the caller.
    """

    @abstractmethod
    def query_fields(self) -> list[Any]:
        """All input and textarea elements, in document order."""

    @abstractmethod
    def describe(self, element: Any) -> FieldDescriptor:
        """Snapshot the element's attributes, label and visibility state."""

    @abstractmethod
    def write_value(self, element: Any, value: str) -> None:
        """
        Set the element's value.

        Assigns the value property directly and again through the native
        value setter, so framework-controlled inputs see the change.
        """

    @abstractmethod
    def read_value(self, element: Any) -> str:
        """Current value of the element."""

    @abstractmethod
    def dispatch_event(self, element: Any, event_type: str) -> None:
        """Dispatch a bubbling event of the given type on the element."""

    @abstractmethod
    def highlight(self, element: Any, duration_ms: int) -> None:
        """Add the highlight class, removing it after duration_ms."""

    @abstractmethod
    def notify(self, message: str, duration_ms: int) -> None:
        """
        Show the page notification with message.

        An existing notification element is reused. It slides out after
        duration_ms and is removed NOTIFICATION_SLIDE_OUT_MS later.
        """
