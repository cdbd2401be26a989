"""
Static-HTML PageContext backed by BeautifulSoup.

Fills a saved HTML document in memory and serializes it back out. There is
no layout engine, so visibility is derived from inline styles and the
hidden attribute on the element and its ancestors. There is no event loop
either: timers run on a virtual clock that only moves when advance() is
called.

Example:
    page = HtmlPageContext(Path("form.html").read_text())
    AutofillExecutor(page).fill(record)
    page.advance(5000)  # expire highlight and notification
    Path("filled.html").write_text(page.to_html())
"""

import heapq
import itertools
from typing import Callable, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from cvfill.contexts.autofill.page_context import (
    AUTOFILL_CSS,
    HIGHLIGHT_CLASS,
    NOTIFICATION_ID,
    NOTIFICATION_SLIDE_OUT_MS,
    STYLE_ID,
    PageContext,
)
from cvfill.contexts.matching.field_descriptor import FieldDescriptor

# Input types a browser recognizes; anything else reports as "text"
KNOWN_INPUT_TYPES = frozenset(
    {
        "button",
        "checkbox",
        "color",
        "date",
        "datetime-local",
        "email",
        "file",
        "hidden",
        "image",
        "month",
        "number",
        "password",
        "radio",
        "range",
        "reset",
        "search",
        "submit",
        "tel",
        "text",
        "time",
        "url",
        "week",
    }
)

# Text inside these tags is not part of a label's visible text
NON_LABEL_TAGS = ("textarea", "script", "style", "option")


def parse_inline_style(tag: Tag) -> dict[str, str]:
    """Parse a style attribute into lowercased property → value."""
    declarations = {}
    for declaration in (tag.get("style") or "").split(";"):
        if ":" not in declaration:
            continue
        prop, value = declaration.split(":", 1)
        declarations[prop.strip().lower()] = value.replace("!important", "").strip().lower()
    return declarations


def _is_display_none(tag: Tag) -> bool:
    return tag.has_attr("hidden") or parse_inline_style(tag).get("display") == "none"


def _label_text(label: Tag) -> str:
    """Visible text of a label, excluding nested field content."""
    parts = []
    for string in label.find_all(string=True):
        if string.parent is not None and string.parent.name in NON_LABEL_TAGS:
            continue
        if string.strip():
            parts.append(string.strip())
    return " ".join(parts)


class HtmlPageContext(PageContext):
    """
    PageContext over a parsed HTML document.

    Attributes:
        soup: Parsed document (mutated in place by writes and feedback)
        now_ms: Virtual clock, starts at 0
        dispatched_events: (element, event_type) in dispatch order
    """

    def __init__(self, html: str):
        self.soup = BeautifulSoup(html, "html.parser")
        self.now_ms = 0
        self.dispatched_events: list[tuple[Tag, str]] = []
        self._timers: list[tuple[int, int, Callable[[], None]]] = []
        self._timer_seq = itertools.count()

    # =========================================================================
    # VIRTUAL CLOCK
    # =========================================================================

    def set_timeout(self, callback: Callable[[], None], delay_ms: int) -> None:
        """Schedule callback to run once the clock reaches now + delay_ms."""
        heapq.heappush(self._timers, (self.now_ms + delay_ms, next(self._timer_seq), callback))

    def advance(self, ms: int) -> None:
        """Move the clock forward, running due timers in due order."""
        target = self.now_ms + ms
        while self._timers and self._timers[0][0] <= target:
            due, _, callback = heapq.heappop(self._timers)
            self.now_ms = due
            callback()
        self.now_ms = target

    def flush_timers(self) -> None:
        """Run every pending timer, including ones scheduled while flushing."""
        while self._timers:
            self.advance(self._timers[0][0] - self.now_ms)

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    # =========================================================================
    # FIELD ACCESS
    # =========================================================================

    def query_fields(self) -> list[Tag]:
        return self.soup.find_all(["input", "textarea"])

    def describe(self, element: Tag) -> FieldDescriptor:
        tag = element.name
        if tag == "textarea":
            input_type = "textarea"
        else:
            input_type = (element.get("type") or "text").strip().lower()
            if input_type not in KNOWN_INPUT_TYPES:
                input_type = "text"

        style = parse_inline_style(element)
        display = "none" if _is_display_none(element) else style.get("display", "inline-block")

        return FieldDescriptor(
            tag=tag,
            input_type=input_type,
            name=element.get("name") or "",
            element_id=element.get("id") or "",
            placeholder=element.get("placeholder") or "",
            aria_label=element.get("aria-label") or "",
            class_name=" ".join(element.get("class") or []),
            label=self.find_label(element),
            display=display,
            visibility=self._computed_visibility(element),
            has_layout_box=self._has_layout_box(element, input_type),
            disabled=element.has_attr("disabled"),
            readonly=element.has_attr("readonly"),
        )

    def find_label(self, element: Tag) -> Optional[str]:
        """
        Resolve the element's label text.

        Tried in order: label[for=id], enclosing label, aria-label,
        placeholder, and a label immediately before the element.
        """
        element_id = element.get("id")
        if element_id:
            label = self.soup.find("label", attrs={"for": element_id})
            if label:
                return _label_text(label)

        parent_label = element.find_parent("label")
        if parent_label:
            return _label_text(parent_label)

        if element.get("aria-label"):
            return element["aria-label"]

        if element.get("placeholder"):
            return element["placeholder"]

        previous = element.find_previous_sibling()
        if previous is not None and previous.name == "label":
            return _label_text(previous)

        return None

    def _computed_visibility(self, element: Tag) -> str:
        # visibility inherits: the nearest declared value wins
        for node in [element, *element.parents]:
            if isinstance(node, Tag):
                visibility = parse_inline_style(node).get("visibility")
                if visibility:
                    return visibility
        return "visible"

    def _has_layout_box(self, element: Tag, input_type: str) -> bool:
        if input_type == "hidden":
            return False
        return not any(
            _is_display_none(node) for node in [element, *element.parents] if isinstance(node, Tag)
        )

    def write_value(self, element: Tag, value: str) -> None:
        if element.name == "textarea":
            element.string = value
        else:
            element["value"] = value

    def read_value(self, element: Tag) -> str:
        if element.name == "textarea":
            return element.get_text()
        return element.get("value") or ""

    def dispatch_event(self, element: Tag, event_type: str) -> None:
        self.dispatched_events.append((element, event_type))

    # =========================================================================
    # VISUAL FEEDBACK
    # =========================================================================

    def _ensure_styles(self) -> None:
        if self.soup.find(id=STYLE_ID):
            return
        style = self.soup.new_tag("style", id=STYLE_ID)
        style.string = AUTOFILL_CSS
        head = self.soup.head or self.soup.find("html") or self.soup
        head.append(style)

    def highlight(self, element: Tag, duration_ms: int) -> None:
        self._ensure_styles()
        classes = list(element.get("class") or [])
        if HIGHLIGHT_CLASS not in classes:
            element["class"] = classes + [HIGHLIGHT_CLASS]

        def remove_highlight():
            remaining = [c for c in element.get("class") or [] if c != HIGHLIGHT_CLASS]
            if remaining:
                element["class"] = remaining
            elif element.has_attr("class"):
                del element["class"]

        self.set_timeout(remove_highlight, duration_ms)

    def notification(self) -> Optional[Tag]:
        """The notification element, if currently attached."""
        return self.soup.find(id=NOTIFICATION_ID)

    def notify(self, message: str, duration_ms: int) -> None:
        self._ensure_styles()
        notification = self.notification()
        if notification is None:
            notification = self.soup.new_tag("div", id=NOTIFICATION_ID)
            body = self.soup.body or self.soup.find("html") or self.soup
            body.append(notification)

        notification.clear()
        notification.append(NavigableString(message))

        def remove():
            if notification.parent is not None:
                notification.decompose()

        def slide_out():
            notification["style"] = "animation: cvSlideOut 0.3s ease-in"
            self.set_timeout(remove, NOTIFICATION_SLIDE_OUT_MS)

        self.set_timeout(slide_out, duration_ms)

    def to_html(self) -> str:
        return str(self.soup)
