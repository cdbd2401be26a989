"""
Matching Context

Responsibilities:
- Classifies page form fields by semantic type from their attributes and label
- Resolves the CVRecord value for a field type
- Decides whether a field may be written at all

Owns: Field-mapping keyword tables and classification precedence
Never: Reads or writes pages, or persists anything
"""

from cvfill.contexts.matching.field_descriptor import FieldDescriptor
from cvfill.contexts.matching.field_mappings import DEFAULT_FIELD_MAPPINGS, load_field_mappings
from cvfill.contexts.matching.field_matcher import FieldMatcher, key_renderings
from cvfill.contexts.matching.field_types import CUSTOM_PREFIX, FieldType

__all__ = [
    "CUSTOM_PREFIX",
    "DEFAULT_FIELD_MAPPINGS",
    "FieldDescriptor",
    "FieldMatcher",
    "FieldType",
    "key_renderings",
    "load_field_mappings",
]
