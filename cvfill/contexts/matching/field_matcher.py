"""
Form field classification and value resolution.

FieldMatcher answers three questions about a FieldDescriptor:
- detect_field_type: which CVRecord value does this field want?
- get_value_for_field: what is that value for a given record?
- is_fillable: may the field be written at all?

All three are pure: no page access, no logging, no exceptions for
well-formed inputs.
"""

import re
from functools import lru_cache
from typing import Callable, Optional

from cvfill.contexts.intake.cv_data_structure import CVRecord
from cvfill.contexts.matching.field_descriptor import FieldDescriptor
from cvfill.contexts.matching.field_mappings import (
    DEFAULT_FIELD_MAPPINGS,
    NAME_EXCLUSIONS,
    NAME_KEYWORD,
    WHOLE_WORD_KEYWORDS,
    FieldMappings,
)
from cvfill.contexts.matching.field_types import FieldType, custom_field_type, custom_key

FILLABLE_INPUT_TYPES = frozenset({"text", "email", "tel", "url", "search", "password"})

_WHITESPACE = re.compile(r"\s+")
_SEPARATORS = re.compile(r"[\s_-]+")


@lru_cache(maxsize=None)
def _whole_word(keyword: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(keyword) + r"\b")


def key_renderings(key: str) -> tuple[str, ...]:
    """
    Spellings of a custom field key as it might appear in field attributes.

    Example:
        >>> key_renderings("Security Clearance")
        ('security clearance', 'security-clearance', 'security_clearance', 'securityclearance')
    """
    lowered = key.lower()
    return (
        lowered,
        _WHITESPACE.sub("-", lowered),
        _WHITESPACE.sub("_", lowered),
        _WHITESPACE.sub("", lowered),
    )


def flatten_key(text: str) -> str:
    """Lowercase and drop whitespace, hyphens and underscores."""
    return _SEPARATORS.sub("", text.lower())


def custom_key_matches(key: str, search: str) -> bool:
    """
    Test a custom field key against a field's search string.

    Any rendering of the key may appear in the search string, or the
    flattened key may appear in the flattened search string. A blank key
    matches nothing.
    """
    key = key.strip()
    if not key:
        return False

    if any(rendering in search for rendering in key_renderings(key)):
        return True
    flat_key = flatten_key(key)
    return bool(flat_key) and flat_key in flatten_key(search)


def keyword_matches(keyword: str, search: str) -> bool:
    """
    Test one mapping keyword against a field's search string.

    The bare "name" keyword never matches a field that mentions first, last
    or company; short ambiguous keywords match whole words only; everything
    else is a substring test.
    """
    if keyword == NAME_KEYWORD:
        if any(excluded in search for excluded in NAME_EXCLUSIONS):
            return False
        return bool(_whole_word(keyword).search(search))

    if keyword in WHOLE_WORD_KEYWORDS:
        return bool(_whole_word(keyword).search(search))

    return keyword in search


def _join_skills(cv: CVRecord) -> Optional[str]:
    return ", ".join(cv.skills) if cv.skills else None


def _education_degree(cv: CVRecord) -> Optional[str]:
    entry = cv.most_recent_education()
    return entry.degree if entry else None


def _experience_company(cv: CVRecord) -> Optional[str]:
    entry = cv.most_recent_experience()
    return entry.company if entry else None


def _experience_title(cv: CVRecord) -> Optional[str]:
    entry = cv.most_recent_experience()
    return entry.title if entry else None


# Well-known field type → value resolver
VALUE_RESOLVERS: dict[FieldType, Callable[[CVRecord], Optional[str]]] = {
    FieldType.FIRST_NAME: lambda cv: cv.personal_info.first_name,
    FieldType.LAST_NAME: lambda cv: cv.personal_info.last_name,
    FieldType.FULL_NAME: lambda cv: cv.personal_info.name,
    FieldType.EMAIL: lambda cv: cv.personal_info.email,
    FieldType.PHONE: lambda cv: cv.personal_info.phone,
    FieldType.ADDRESS: lambda cv: cv.personal_info.address,
    FieldType.CITY: lambda cv: cv.personal_info.city,
    FieldType.STATE: lambda cv: cv.personal_info.state,
    FieldType.ZIP: lambda cv: cv.personal_info.zip,
    FieldType.COUNTRY: lambda cv: cv.personal_info.country,
    FieldType.LINKEDIN: lambda cv: cv.personal_info.linkedin,
    FieldType.GITHUB: lambda cv: cv.personal_info.github,
    FieldType.WEBSITE: lambda cv: cv.personal_info.website,
    FieldType.EDUCATION: _education_degree,
    FieldType.COMPANY: _experience_company,
    FieldType.POSITION: _experience_title,
    FieldType.SKILLS: _join_skills,
}


class FieldMatcher:
    """
    Keyword-table field classifier.

    Args:
        mappings: Ordered (FieldType, keywords) table; declaration order is
            precedence. Defaults to DEFAULT_FIELD_MAPPINGS.
    """

    def __init__(self, mappings: Optional[FieldMappings] = None):
        self.mappings: FieldMappings = tuple(mappings or DEFAULT_FIELD_MAPPINGS)

    # =========================================================================
    # CLASSIFICATION
    # =========================================================================

    def detect_field_type(
        self, descriptor: FieldDescriptor, cv: Optional[CVRecord] = None
    ) -> Optional[str]:
        """
        Classify a form field.

        Precedence: the input type attribute (email, tel), then the mapping
        table in order, then the record's custom field keys in order.

        Args:
            descriptor: Field snapshot
            cv: Record whose custom field keys may match (optional)

        Returns:
            A FieldType, "custom:<key>", or None when nothing matches
        """
        input_type = (descriptor.input_type or "").lower()
        if input_type == "email":
            return FieldType.EMAIL
        if input_type == "tel":
            return FieldType.PHONE

        search = descriptor.search_string()

        for field_type, keywords in self.mappings:
            if any(keyword_matches(keyword, search) for keyword in keywords):
                return field_type

        if cv is not None:
            for key in cv.custom_fields:
                if custom_key_matches(key, search):
                    return custom_field_type(key)

        return None

    # =========================================================================
    # VALUE RESOLUTION
    # =========================================================================

    def get_value_for_field(self, field_type: Optional[str], cv: CVRecord) -> Optional[str]:
        """
        Resolve the record value for a field type.

        Returns:
            The value, or None when the type is unknown or the value is
            missing or empty
        """
        if not field_type:
            return None

        key = custom_key(field_type)
        if key is not None:
            value = cv.custom_fields.get(key)
        else:
            try:
                resolver = VALUE_RESOLVERS[FieldType(field_type)]
            except ValueError:
                return None
            value = resolver(cv)

        return value or None

    # =========================================================================
    # FILLABILITY
    # =========================================================================

    def is_fillable(self, descriptor: FieldDescriptor) -> bool:
        """True for visible, enabled, writable text-like inputs and textareas."""
        if descriptor.display == "none" or descriptor.visibility == "hidden":
            return False
        if not descriptor.has_layout_box:
            return False
        if descriptor.disabled or descriptor.readonly:
            return False

        if descriptor.tag == "textarea":
            return True
        return (descriptor.input_type or "text").lower() in FILLABLE_INPUT_TYPES
