"""
Profiles Context

Responsibilities:
- Stores named CVRecords and tracks the active one
- Migrates the legacy single-record layout
- Applies field-by-field manual edits

Owns: Profile persistence and the store layout
Never: Parses resumes or touches pages
"""

from cvfill.contexts.profiles.key_value_store import JsonFileStore, KeyValueStore, MemoryStore
from cvfill.contexts.profiles.profile_store import Profile, ProfileStore, StoreResult

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "Profile",
    "ProfileStore",
    "StoreResult",
]
