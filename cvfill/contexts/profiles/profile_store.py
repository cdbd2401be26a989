"""
Profile persistence for CVFILL.

A profile is a named CVRecord. Any number can be stored; at most one is
active, and the active profile is what autofill sends to the page.

Store layout (flat keys in a KeyValueStore):
    cvProfiles:      [{"id": ..., "name": ..., "data": <CVRecord dict>}, ...]
    activeProfileId: id of the active profile, or null
    cvData:          legacy single-record layout, migrated on first read

Every operation returns a StoreResult instead of raising; storage faults
are logged and reported as success=False.

Usage:
    from cvfill.contexts.profiles.profile_store import ProfileStore

    store = ProfileStore()
    result = store.save_profile("Startup CV", record)
    store.update_field("personalInfo.city", "Berlin")
    active = store.load().data
"""

import os
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union

from dotenv import load_dotenv

from cvfill.contexts.intake.cv_data_structure import CVRecord, EducationEntry, ExperienceEntry
from cvfill.contexts.profiles.key_value_store import JsonFileStore, KeyValueStore
from cvfill.contexts.profiles.logger import _log_debug, _log_error, _log_info, _log_warning
from cvfill.utils.event_logging import log_profile_event

load_dotenv()
PROFILE_STORE_PATH = Path(os.getenv("CVFILL_PROFILE_STORE", "~/.cvfill/profiles.json")).expanduser()
_events_env = os.getenv("CVFILL_EVENTS_FILE")
EVENTS_FILE = Path(_events_env) if _events_env else None

# Store keys
PROFILES_KEY = "cvProfiles"
ACTIVE_PROFILE_KEY = "activeProfileId"
LEGACY_DATA_KEY = "cvData"
ALL_KEYS = (PROFILES_KEY, ACTIVE_PROFILE_KEY, LEGACY_DATA_KEY)

# Default profile names
IMPORTED_PROFILE_NAME = "Imported CV"
DEFAULT_PROFILE_NAME = "My Form"
MANUAL_PROFILE_NAME = "My Custom Form"
PARSED_PROFILE_NAME = "Parsed Form"

# Manual edit keys
PERSONAL_INFO_PREFIX = "personalInfo."
CUSTOM_FIELDS_PREFIX = "customFields."
EDUCATION_DEGREE_KEY = "education.0.degree"
EXPERIENCE_TITLE_KEY = "experience.0.title"
EXPERIENCE_COMPANY_KEY = "experience.0.company"
SKILLS_KEY = "skills"


def new_profile_id() -> str:
    return uuid.uuid4().hex[:12]


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class Profile:
    """A named, stored CVRecord."""

    id: str
    name: str
    data: CVRecord = field(default_factory=CVRecord)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "data": self.data.to_dict()}

    @classmethod
    def from_dict(cls, raw: dict) -> "Profile":
        return cls(
            id=str(raw.get("id")),
            name=raw.get("name") or "",
            data=CVRecord.from_dict(raw.get("data")),
        )


@dataclass
class StoreResult:
    """
    Result of a profile store operation.

    Attributes:
        success: Whether the operation succeeded
        error: Error message if not successful
        profiles: All profiles (get_profiles)
        active_id: Active profile id after the operation
        id: Profile id written (save_profile, save, create_manual_profile)
        data: Active record (load, update_field and the custom field edits)
    """

    success: bool
    error: Optional[str] = None
    profiles: list[Profile] = field(default_factory=list)
    active_id: Optional[str] = None
    id: Optional[str] = None
    data: Optional[CVRecord] = None

    def active_profile(self) -> Optional[Profile]:
        for profile in self.profiles:
            if profile.id == self.active_id:
                return profile
        return None


# =============================================================================
# MANUAL EDITS
# =============================================================================


def apply_field_edit(record: CVRecord, key: str, value: str) -> None:
    """
    Apply one manual edit to a record in place.

    Supported keys: personalInfo.<field>, education.0.degree,
    experience.0.title, experience.0.company, skills (comma-separated),
    customFields.<key>. Values are trimmed; an empty personal info value
    clears the field.

    Raises:
        KeyError: If the key is not editable or names a blank custom field
    """
    value = (value or "").strip()

    if key.startswith(PERSONAL_INFO_PREFIX):
        record.personal_info.set_field(key[len(PERSONAL_INFO_PREFIX) :], value or None)
    elif key == EDUCATION_DEGREE_KEY:
        if not record.education:
            record.education.append(EducationEntry())
        record.education[0].degree = value
    elif key in (EXPERIENCE_TITLE_KEY, EXPERIENCE_COMPANY_KEY):
        if not record.experience:
            record.experience.append(ExperienceEntry())
        setattr(record.experience[0], key.rsplit(".", 1)[1], value)
    elif key == SKILLS_KEY:
        record.skills = [s.strip() for s in value.split(",") if s.strip()]
    elif key.startswith(CUSTOM_FIELDS_PREFIX):
        custom_name = key[len(CUSTOM_FIELDS_PREFIX) :].strip()
        if not custom_name:
            raise KeyError("Custom field name must not be empty")
        record.custom_fields[custom_name] = value
    else:
        raise KeyError(f"Unknown field key: {key}")


# =============================================================================
# PROFILE STORE
# =============================================================================


class ProfileStore:
    """
    CRUD over named profiles with one active profile.

    Args:
        backend: Key-value backend (defaults to JsonFileStore at CVFILL_PROFILE_STORE)
        events_file: JSON Lines file for profile events (defaults to
            CVFILL_EVENTS_FILE; no events are written when unset)
        source: Recorded as the source of every profile event
    """

    def __init__(
        self,
        backend: Optional[KeyValueStore] = None,
        events_file: Optional[Path] = EVENTS_FILE,
        source: str = "cli",
    ):
        self.backend = backend if backend is not None else JsonFileStore(PROFILE_STORE_PATH)
        self.events_file = events_file
        self.source = source

    def _log_event(self, event_type: str, profile_id: Optional[str], **extra_fields) -> None:
        if self.events_file:
            log_profile_event(self.events_file, event_type, profile_id, self.source, **extra_fields)

    def _failure(self, operation: str, error: Exception) -> StoreResult:
        _log_error(f"Error {operation}: {error}")
        return StoreResult(success=False, error=str(error))

    def _write_profiles(self, profiles: list[Profile], active_id: Optional[str]) -> None:
        self.backend.set(
            {
                PROFILES_KEY: [p.to_dict() for p in profiles],
                ACTIVE_PROFILE_KEY: active_id,
            }
        )

    # =========================================================================
    # PROFILES
    # =========================================================================

    def get_profiles(self) -> StoreResult:
        """
        All profiles and the active id.

        A legacy single record with no profiles is migrated first: it
        becomes the active profile "Imported CV" and the legacy key is
        removed.
        """
        try:
            stored = self.backend.get(ALL_KEYS)
            profiles = [Profile.from_dict(p) for p in stored.get(PROFILES_KEY) or []]
            active_id = stored.get(ACTIVE_PROFILE_KEY)

            if stored.get(LEGACY_DATA_KEY) and not profiles:
                legacy = Profile(
                    id=new_profile_id(),
                    name=IMPORTED_PROFILE_NAME,
                    data=CVRecord.from_dict(stored[LEGACY_DATA_KEY]),
                )
                profiles.append(legacy)
                active_id = legacy.id
                self._write_profiles(profiles, active_id)
                self.backend.remove([LEGACY_DATA_KEY])
                _log_info(f"Migrated legacy CV data into profile '{legacy.name}' ({legacy.id})")
                self._log_event("legacy_migrated", legacy.id, name=legacy.name)

            return StoreResult(success=True, profiles=profiles, active_id=active_id)
        except Exception as e:
            return self._failure("loading profiles", e)

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        """Look up one profile by id (None if missing or the store is unreadable)."""
        listing = self.get_profiles()
        for profile in listing.profiles:
            if profile.id == profile_id:
                return profile
        return None

    def save_profile(
        self, name: str, data: Union[CVRecord, dict], profile_id: Optional[str] = None
    ) -> StoreResult:
        """
        Update the profile with profile_id, or append a new one, and make it active.

        Args:
            name: Profile display name
            data: Record (CVRecord or its wire dict)
            profile_id: Existing id to update; a new id is generated when None

        Returns:
            StoreResult with id set
        """
        listing = self.get_profiles()
        if not listing.success:
            return listing

        try:
            record = data if isinstance(data, CVRecord) else CVRecord.from_dict(data)
            profile_id = profile_id or new_profile_id()
            profiles = listing.profiles

            existing = next((p for p in profiles if p.id == profile_id), None)
            if existing:
                existing.name = name
                existing.data = record
            else:
                profiles.append(Profile(id=profile_id, name=name, data=record))

            self._write_profiles(profiles, profile_id)
            _log_debug(f"Saved profile '{name}' ({profile_id})")
            self._log_event("profile_saved", profile_id, name=name, created=existing is None)
            return StoreResult(success=True, id=profile_id, active_id=profile_id)
        except Exception as e:
            return self._failure("saving profile", e)

    def set_active(self, profile_id: Optional[str]) -> StoreResult:
        """Mark a profile active. The id is stored as given."""
        try:
            self.backend.set({ACTIVE_PROFILE_KEY: profile_id})
            self._log_event("profile_activated", profile_id)
            return StoreResult(success=True, active_id=profile_id)
        except Exception as e:
            return self._failure("setting active profile", e)

    def rename_profile(self, profile_id: str, name: str) -> StoreResult:
        """Rename a profile without changing which profile is active."""
        listing = self.get_profiles()
        if not listing.success:
            return listing

        profile = next((p for p in listing.profiles if p.id == profile_id), None)
        if profile is None:
            return StoreResult(success=False, error=f"No profile with id {profile_id}")

        try:
            profile.name = name
            self._write_profiles(listing.profiles, listing.active_id)
            self._log_event("profile_renamed", profile_id, name=name)
            return StoreResult(success=True, id=profile_id, active_id=listing.active_id)
        except Exception as e:
            return self._failure("renaming profile", e)

    def delete_profile(self, profile_id: str) -> StoreResult:
        """
        Delete a profile.

        When the active profile is deleted, the first remaining profile
        becomes active (or none, when no profiles remain).

        Returns:
            StoreResult with active_id set to the new active id
        """
        listing = self.get_profiles()
        if not listing.success:
            return listing

        try:
            profiles = [p for p in listing.profiles if p.id != profile_id]
            active_id = listing.active_id
            if active_id == profile_id:
                active_id = profiles[0].id if profiles else None

            self._write_profiles(profiles, active_id)
            self._log_event("profile_deleted", profile_id, new_active_id=active_id)
            return StoreResult(success=True, profiles=profiles, active_id=active_id)
        except Exception as e:
            return self._failure("deleting profile", e)

    # =========================================================================
    # ACTIVE RECORD
    # =========================================================================

    def save(self, data: Union[CVRecord, dict]) -> StoreResult:
        """Save to the active profile, or to a new "My Form" profile when none is active."""
        listing = self.get_profiles()
        if not listing.success:
            return listing

        active = listing.active_profile()
        if active:
            return self.save_profile(active.name, data, active.id)
        return self.save_profile(DEFAULT_PROFILE_NAME, data)

    def load(self) -> StoreResult:
        """
        The active profile's record.

        Returns:
            StoreResult with data set, or data=None when no profile is active
        """
        listing = self.get_profiles()
        if not listing.success:
            return listing

        active = listing.active_profile()
        return StoreResult(
            success=True, active_id=listing.active_id, data=active.data if active else None
        )

    def exists(self) -> bool:
        """True when an active record can be loaded."""
        result = self.load()
        return result.success and result.data is not None

    def clear(self) -> StoreResult:
        """Remove every profile, the active id and any legacy record."""
        try:
            self.backend.remove(ALL_KEYS)
            _log_warning("Cleared all stored profiles")
            self._log_event("store_cleared", None)
            return StoreResult(success=True)
        except Exception as e:
            return self._failure("clearing CV data", e)

    # =========================================================================
    # MANUAL EDITING
    # =========================================================================

    def create_manual_profile(self, name: Optional[str] = None) -> StoreResult:
        """Create and activate an empty profile ready for manual editing."""
        return self.save_profile(name or MANUAL_PROFILE_NAME, CVRecord.empty_manual())

    def _edit_active(self, edit: Callable[[CVRecord], None]) -> StoreResult:
        listing = self.get_profiles()
        if not listing.success:
            return listing

        active = listing.active_profile()
        if active is None:
            return StoreResult(success=False, error="No active profile")

        try:
            edit(active.data)
        except (KeyError, ValueError) as e:
            message = e.args[0] if e.args else str(e)
            return StoreResult(success=False, error=str(message), active_id=active.id)

        result = self.save_profile(active.name, active.data, active.id)
        if result.success:
            result.data = active.data
        return result

    def update_field(self, key: str, value: str) -> StoreResult:
        """
        Apply a manual edit to the active profile.

        Args:
            key: Edit key (e.g. "personalInfo.email", "experience.0.title",
                "skills", "customFields.Certifications")
            value: New value (skills as a comma-separated list)

        Returns:
            StoreResult with the updated record as data
        """
        return self._edit_active(lambda record: apply_field_edit(record, key, value))

    def add_custom_field(self, key: str) -> StoreResult:
        """Add an empty custom field to the active profile. An existing key keeps its value."""
        key = (key or "").strip()
        if not key:
            return StoreResult(success=False, error="Custom field name must not be empty")

        def add(record: CVRecord) -> None:
            record.custom_fields.setdefault(key, "")

        return self._edit_active(add)

    def delete_custom_field(self, key: str) -> StoreResult:
        """Remove a custom field from the active profile."""

        def delete(record: CVRecord) -> None:
            if key not in record.custom_fields:
                raise KeyError(f"No custom field named '{key}'")
            del record.custom_fields[key]

        return self._edit_active(delete)
