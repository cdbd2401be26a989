"""
FieldDescriptor: snapshot of one form element as the matcher sees it.

Descriptors are produced by a PageContext and never persisted. Attribute
values are the raw strings from the page; missing attributes are "".
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Attributes, label and visibility state of an input or textarea.

    Attributes:
        tag: "input" or "textarea"
        input_type: Lowercased type attribute ("text" when absent)
        name, element_id, placeholder, aria_label, class_name: Raw attributes
        label: Associated label text, None when no label is found
        display: Computed CSS display ("none" when hidden)
        visibility: Computed CSS visibility
        has_layout_box: False when the element occupies no layout box
        disabled, readonly: Element state flags
    """

    tag: str = "input"
    input_type: str = "text"
    name: str = ""
    element_id: str = ""
    placeholder: str = ""
    aria_label: str = ""
    class_name: str = ""
    label: Optional[str] = None
    display: str = "inline-block"
    visibility: str = "visible"
    has_layout_box: bool = True
    disabled: bool = False
    readonly: bool = False

    def search_string(self) -> str:
        """
        Lowercased text the keyword tables are matched against.

        Label text first, then name, id, placeholder, aria-label and class,
        separated by spaces.
        """
        attributes = " ".join(
            [self.name, self.element_id, self.placeholder, self.aria_label, self.class_name]
        )
        return (self.label or "").lower() + " " + attributes.lower()

    def describe(self) -> str:
        """Short human-readable identifier for log messages."""
        ident = self.element_id or self.name or self.placeholder or self.label or "?"
        return f"<{self.tag} type={self.input_type}> {ident}"
