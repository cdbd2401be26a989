"""
Live-browser PageContext backed by Playwright's sync API.

Each capability is a single in-page evaluation, so descriptors see the
browser's computed style and layout, and timers are real setTimeout calls
that keep running after the fill returns.
"""

from contextlib import contextmanager
from typing import Iterator

from playwright.sync_api import ElementHandle, Page, sync_playwright

from cvfill.contexts.autofill.page_context import (
    AUTOFILL_CSS,
    HIGHLIGHT_CLASS,
    NOTIFICATION_ID,
    NOTIFICATION_SLIDE_OUT_MS,
    STYLE_ID,
    PageContext,
)
from cvfill.contexts.matching.field_descriptor import FieldDescriptor

FIELD_SELECTOR = "input, textarea"

DESCRIBE_JS = """
(el) => {
  const style = window.getComputedStyle(el);
  const text = (node) => node.textContent.trim();
  let label = null;
  if (el.id) {
    const forLabel = document.querySelector(`label[for="${CSS.escape(el.id)}"]`);
    if (forLabel) label = text(forLabel);
  }
  if (label === null) {
    const parentLabel = el.closest('label');
    if (parentLabel) label = text(parentLabel);
  }
  if (label === null && el.getAttribute('aria-label')) label = el.getAttribute('aria-label');
  if (label === null && el.placeholder) label = el.placeholder;
  if (label === null) {
    const prev = el.previousElementSibling;
    if (prev && prev.tagName === 'LABEL') label = text(prev);
  }
  return {
    tag: el.tagName.toLowerCase(),
    inputType: (el.type || 'text').toLowerCase(),
    name: el.getAttribute('name') || '',
    id: el.id || '',
    placeholder: el.getAttribute('placeholder') || '',
    ariaLabel: el.getAttribute('aria-label') || '',
    className: el.getAttribute('class') || '',
    label: label,
    display: style.display,
    visibility: style.visibility,
    hasLayoutBox: el.offsetParent !== null,
    disabled: !!el.disabled,
    readOnly: !!el.readOnly,
  };
}
"""

WRITE_JS = """
(el, value) => {
  el.value = value;
  const proto = el.tagName === 'TEXTAREA'
    ? window.HTMLTextAreaElement.prototype
    : window.HTMLInputElement.prototype;
  const descriptor = Object.getOwnPropertyDescriptor(proto, 'value');
  if (descriptor && descriptor.set) descriptor.set.call(el, value);
}
"""

ENSURE_STYLES_JS = """
([styleId, css]) => {
  if (document.getElementById(styleId)) return;
  const style = document.createElement('style');
  style.id = styleId;
  style.textContent = css;
  (document.head || document.documentElement).appendChild(style);
}
"""

HIGHLIGHT_JS = """
(el, [cls, ms]) => {
  el.classList.add(cls);
  setTimeout(() => el.classList.remove(cls), ms);
}
"""

NOTIFY_JS = """
([id, message, ms, slideOutMs]) => {
  let notification = document.getElementById(id);
  if (!notification) {
    notification = document.createElement('div');
    notification.id = id;
    document.body.appendChild(notification);
  }
  notification.textContent = message;
  setTimeout(() => {
    notification.style.animation = 'cvSlideOut 0.3s ease-in';
    setTimeout(() => notification.remove(), slideOutMs);
  }, ms);
}
"""


class PlaywrightPageContext(PageContext):
    """PageContext over an open Playwright page."""

    def __init__(self, page: Page):
        self.page = page

    def query_fields(self) -> list[ElementHandle]:
        return self.page.query_selector_all(FIELD_SELECTOR)

    def describe(self, element: ElementHandle) -> FieldDescriptor:
        raw = element.evaluate(DESCRIBE_JS)
        return FieldDescriptor(
            tag=raw["tag"],
            input_type=raw["inputType"],
            name=raw["name"],
            element_id=raw["id"],
            placeholder=raw["placeholder"],
            aria_label=raw["ariaLabel"],
            class_name=raw["className"],
            label=raw["label"],
            display=raw["display"],
            visibility=raw["visibility"],
            has_layout_box=raw["hasLayoutBox"],
            disabled=raw["disabled"],
            readonly=raw["readOnly"],
        )

    def write_value(self, element: ElementHandle, value: str) -> None:
        element.evaluate(WRITE_JS, value)

    def read_value(self, element: ElementHandle) -> str:
        return element.input_value()

    def dispatch_event(self, element: ElementHandle, event_type: str) -> None:
        element.dispatch_event(event_type)

    def _ensure_styles(self) -> None:
        self.page.evaluate(ENSURE_STYLES_JS, [STYLE_ID, AUTOFILL_CSS])

    def highlight(self, element: ElementHandle, duration_ms: int) -> None:
        self._ensure_styles()
        element.evaluate(HIGHLIGHT_JS, [HIGHLIGHT_CLASS, duration_ms])

    def notify(self, message: str, duration_ms: int) -> None:
        self._ensure_styles()
        self.page.evaluate(
            NOTIFY_JS, [NOTIFICATION_ID, message, duration_ms, NOTIFICATION_SLIDE_OUT_MS]
        )


@contextmanager
def open_browser_page(url: str, headless: bool = False) -> Iterator[PlaywrightPageContext]:
    """
    Launch Chromium, open url, and yield a PageContext for it.

    The browser is closed when the block exits.
    """
    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=headless)
        try:
            page = browser.new_page()
            page.goto(url)
            yield PlaywrightPageContext(page)
        finally:
            browser.close()
