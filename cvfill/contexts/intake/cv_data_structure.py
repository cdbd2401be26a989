"""
CV record data structure for the Intake context.

CVRecord is the canonical extracted and persisted record. Python attributes
use snake_case; the serialized form (profile store, fill requests) keeps the
camelCase wire layout:

    {
        "personalInfo": {"firstName": ..., "email": ..., ...},
        "education": [{"degree": ..., "institution": ..., "year": ...}],
        "experience": [{"title": ..., "company": ..., "duration": ...}],
        "skills": [...],
        "customFields": {"Certifications": ...},
    }

Every field is independently optional. Lists are never None, only empty.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional

# Python attribute → wire key, in display order
PERSONAL_INFO_KEYS = {
    "first_name": "firstName",
    "last_name": "lastName",
    "name": "name",
    "email": "email",
    "phone": "phone",
    "address": "address",
    "city": "city",
    "state": "state",
    "zip": "zip",
    "country": "country",
    "linkedin": "linkedin",
    "github": "github",
    "website": "website",
}

WIRE_TO_ATTRIBUTE = {wire: attr for attr, wire in PERSONAL_INFO_KEYS.items()}


@dataclass
class PersonalInfo:
    """Name, contact and link fields. Unset fields are None."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None

    def get_field(self, wire_key: str) -> Optional[str]:
        """Look up a field by its wire key (e.g. "firstName")."""
        attr = WIRE_TO_ATTRIBUTE.get(wire_key)
        return getattr(self, attr) if attr else None

    def set_field(self, wire_key: str, value: Optional[str]) -> None:
        """
        Overwrite a field by its wire key.

        Raises:
            KeyError: If wire_key is not a personal info field
        """
        if wire_key not in WIRE_TO_ATTRIBUTE:
            raise KeyError(f"Unknown personal info field: {wire_key}")
        setattr(self, WIRE_TO_ATTRIBUTE[wire_key], value)

    def to_dict(self) -> dict[str, str]:
        """Serialize set fields only, keyed by wire key."""
        return {
            wire: getattr(self, attr)
            for attr, wire in PERSONAL_INFO_KEYS.items()
            if getattr(self, attr) is not None
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "PersonalInfo":
        """Build from a wire dict, ignoring unknown keys."""
        data = data or {}
        return cls(
            **{
                attr: data.get(wire)
                for attr, wire in PERSONAL_INFO_KEYS.items()
                if data.get(wire) is not None
            }
        )


@dataclass
class EducationEntry:
    degree: str = ""
    institution: str = ""
    year: str = ""


@dataclass
class ExperienceEntry:
    title: str = ""
    company: str = ""
    duration: str = ""


def _entry_from_dict(entry_cls, data: Any):
    """Build an entry dataclass from a possibly partial dict."""
    data = data if isinstance(data, dict) else {}
    return entry_cls(**{f.name: data.get(f.name) or "" for f in fields(entry_cls)})


def _entry_to_dict(entry) -> dict[str, str]:
    return {f.name: getattr(entry, f.name) for f in fields(entry)}


@dataclass
class CVRecord:
    """
    Structured record extracted from one resume.

    The first education and experience entries are treated as the most
    recent. custom_fields preserves document order and original heading
    casing.
    """

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    education: list[EducationEntry] = field(default_factory=list)
    experience: list[ExperienceEntry] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    custom_fields: dict[str, str] = field(default_factory=dict)

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def empty_manual(cls) -> "CVRecord":
        """
        Record for a manually created profile.

        Carries one blank education and experience entry so the
        most-recent degree, title and company can be edited in place.
        """
        return cls(education=[EducationEntry()], experience=[ExperienceEntry()])

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "CVRecord":
        """
        Build a record from its wire layout.

        Tolerates missing keys, null lists and partial entries.
        """
        data = data or {}
        return cls(
            personal_info=PersonalInfo.from_dict(data.get("personalInfo")),
            education=[_entry_from_dict(EducationEntry, e) for e in data.get("education") or []],
            experience=[
                _entry_from_dict(ExperienceEntry, e) for e in data.get("experience") or []
            ],
            skills=[str(s) for s in data.get("skills") or []],
            custom_fields={
                str(k): "" if v is None else str(v)
                for k, v in (data.get("customFields") or {}).items()
            },
        )

    # =========================================================================
    # PUBLIC API METHODS
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire layout."""
        return {
            "personalInfo": self.personal_info.to_dict(),
            "education": [_entry_to_dict(e) for e in self.education],
            "experience": [_entry_to_dict(e) for e in self.experience],
            "skills": list(self.skills),
            "customFields": dict(self.custom_fields),
        }

    def most_recent_education(self) -> Optional[EducationEntry]:
        return self.education[0] if self.education else None

    def most_recent_experience(self) -> Optional[ExperienceEntry]:
        return self.experience[0] if self.experience else None

    def is_empty(self) -> bool:
        """True when nothing at all was extracted or entered."""
        return not (
            self.personal_info.to_dict()
            or any(e.degree or e.institution or e.year for e in self.education)
            or any(e.title or e.company or e.duration for e in self.experience)
            or self.skills
            or self.custom_fields
        )
