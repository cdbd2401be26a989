"""
Semantic field types.

A field type is either one of the well-known FieldType members or an
open-ended custom type "custom:<key>" naming a CVRecord custom_fields key.
Both are plain strings at runtime, so results compare equal to their wire
names ("email", "custom:Certifications").
"""

from enum import Enum
from typing import Optional

CUSTOM_PREFIX = "custom:"


class FieldType(str, Enum):
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    FULL_NAME = "fullName"
    EMAIL = "email"
    PHONE = "phone"
    ADDRESS = "address"
    CITY = "city"
    STATE = "state"
    ZIP = "zip"
    COUNTRY = "country"
    LINKEDIN = "linkedin"
    GITHUB = "github"
    WEBSITE = "website"
    EDUCATION = "education"
    COMPANY = "company"
    POSITION = "position"
    SKILLS = "skills"

    def __str__(self) -> str:
        return self.value


def custom_field_type(key: str) -> str:
    """Field type for a custom_fields key, e.g. "custom:Certifications"."""
    return f"{CUSTOM_PREFIX}{key}"


def custom_key(field_type: str) -> Optional[str]:
    """The custom_fields key named by a custom field type, or None for well-known types."""
    if str(field_type).startswith(CUSTOM_PREFIX):
        return str(field_type)[len(CUSTOM_PREFIX) :]
    return None
