"""Unit tests for profile CRUD, migration and manual editing."""

import pytest

from cvfill.contexts.intake.cv_data_structure import CVRecord, PersonalInfo
from cvfill.contexts.profiles import MemoryStore, ProfileStore
from cvfill.contexts.profiles.profile_store import apply_field_edit
from cvfill.utils.event_logging import get_recent_events


@pytest.fixture
def backend():
    return MemoryStore()


@pytest.fixture
def store(backend):
    return ProfileStore(backend=backend, events_file=None)


def _record(first_name: str) -> CVRecord:
    return CVRecord(personal_info=PersonalInfo(first_name=first_name))


# =============================================================================
# PROFILES
# =============================================================================


@pytest.mark.unit
def test_empty_store(store):
    """Test that a fresh store has no profiles and nothing active."""
    result = store.get_profiles()

    assert result.success
    assert result.profiles == []
    assert result.active_id is None
    assert store.load().data is None
    assert not store.exists()


@pytest.mark.unit
def test_save_profile_appends_and_activates(store):
    """Test that a new profile is appended and becomes active."""
    first = store.save_profile("First", _record("Ada"))
    second = store.save_profile("Second", _record("Grace"))

    listing = store.get_profiles()
    assert [p.name for p in listing.profiles] == ["First", "Second"]
    assert listing.active_id == second.id
    assert first.id != second.id
    assert store.load().data.personal_info.first_name == "Grace"


@pytest.mark.unit
def test_save_profile_updates_in_place(store):
    """Test that saving with an existing id replaces name and data."""
    saved = store.save_profile("Draft", _record("Ada"))
    store.save_profile("Final", {"personalInfo": {"firstName": "Ada L."}}, saved.id)

    listing = store.get_profiles()
    assert len(listing.profiles) == 1
    assert listing.profiles[0].name == "Final"
    assert listing.profiles[0].data.personal_info.first_name == "Ada L."


@pytest.mark.unit
def test_get_profile(store):
    """Test lookup by id."""
    saved = store.save_profile("Main", _record("Ada"))

    assert store.get_profile(saved.id).name == "Main"
    assert store.get_profile("missing") is None


@pytest.mark.unit
def test_set_active(store):
    """Test switching the active profile."""
    first = store.save_profile("First", _record("Ada"))
    store.save_profile("Second", _record("Grace"))

    assert store.set_active(first.id).success
    assert store.load().data.personal_info.first_name == "Ada"


@pytest.mark.unit
def test_rename_profile_keeps_active(store):
    """Test renaming a non-active profile."""
    first = store.save_profile("First", _record("Ada"))
    second = store.save_profile("Second", _record("Grace"))

    result = store.rename_profile(first.id, "Renamed")

    assert result.success
    assert store.get_profile(first.id).name == "Renamed"
    assert store.get_profiles().active_id == second.id


@pytest.mark.unit
def test_rename_missing_profile(store):
    """Test that renaming an unknown id fails."""
    result = store.rename_profile("nope", "Name")
    assert not result.success
    assert "nope" in result.error


@pytest.mark.unit
def test_delete_active_reassigns_first_remaining(store):
    """Test that deleting the active profile activates the first remaining one."""
    first = store.save_profile("First", _record("Ada"))
    second = store.save_profile("Second", _record("Grace"))
    third = store.save_profile("Third", _record("Joan"))

    result = store.delete_profile(third.id)

    assert result.success
    assert result.active_id == first.id
    assert [p.id for p in result.profiles] == [first.id, second.id]


@pytest.mark.unit
def test_delete_inactive_keeps_active(store):
    """Test that deleting another profile leaves the active one alone."""
    first = store.save_profile("First", _record("Ada"))
    second = store.save_profile("Second", _record("Grace"))

    assert store.delete_profile(first.id).active_id == second.id


@pytest.mark.unit
def test_delete_last_profile(store):
    """Test that deleting the only profile leaves nothing active."""
    only = store.save_profile("Only", _record("Ada"))

    result = store.delete_profile(only.id)

    assert result.active_id is None
    assert store.load().data is None


# =============================================================================
# LEGACY MIGRATION
# =============================================================================


@pytest.mark.unit
def test_legacy_record_migrated(backend, store):
    """Test that a lone legacy record becomes the active 'Imported CV' profile."""
    backend.set({"cvData": {"personalInfo": {"email": "old@x.io"}}})

    listing = store.get_profiles()

    assert [p.name for p in listing.profiles] == ["Imported CV"]
    assert listing.active_id == listing.profiles[0].id
    assert listing.profiles[0].data.personal_info.email == "old@x.io"
    assert "cvData" not in backend.data
    assert backend.data["activeProfileId"] == listing.active_id


@pytest.mark.unit
def test_legacy_record_ignored_when_profiles_exist(backend, store):
    """Test that migration only happens when there are no profiles."""
    store.save_profile("Current", _record("Ada"))
    backend.set({"cvData": {"personalInfo": {"email": "old@x.io"}}})

    listing = store.get_profiles()

    assert [p.name for p in listing.profiles] == ["Current"]
    assert "cvData" in backend.data


@pytest.mark.unit
def test_legacy_migration_runs_once(backend, store):
    """Test that a second read does not migrate again."""
    backend.set({"cvData": {"skills": ["Go"]}})

    first_id = store.get_profiles().active_id
    listing = store.get_profiles()

    assert len(listing.profiles) == 1
    assert listing.active_id == first_id


# =============================================================================
# ACTIVE RECORD
# =============================================================================


@pytest.mark.unit
def test_save_without_active_creates_default_profile(store):
    """Test that save() with nothing active creates 'My Form'."""
    result = store.save(_record("Ada"))

    listing = store.get_profiles()
    assert result.success
    assert [p.name for p in listing.profiles] == ["My Form"]
    assert listing.active_id == result.id
    assert store.exists()


@pytest.mark.unit
def test_save_overwrites_active(store):
    """Test that save() replaces the active profile's record and keeps its name."""
    saved = store.save_profile("Main", _record("Ada"))
    store.save(_record("Grace"))

    profile = store.get_profile(saved.id)
    assert profile.name == "Main"
    assert profile.data.personal_info.first_name == "Grace"
    assert len(store.get_profiles().profiles) == 1


@pytest.mark.unit
def test_clear(backend, store):
    """Test that clear() removes profiles, active id and legacy data."""
    store.save_profile("Main", _record("Ada"))
    backend.set({"cvData": {}})

    assert store.clear().success
    assert backend.data == {}
    assert not store.exists()


@pytest.mark.unit
def test_storage_fault_reported_not_raised(tmp_path):
    """Test that an unreadable store yields a failed result."""
    from cvfill.contexts.profiles import JsonFileStore

    path = tmp_path / "profiles.json"
    path.write_text("{not json", encoding="utf-8")
    store = ProfileStore(backend=JsonFileStore(path), events_file=None)

    result = store.load()

    assert not result.success
    assert result.error
    assert not store.exists()
    assert not store.save(_record("Ada")).success


# =============================================================================
# MANUAL EDITING
# =============================================================================


@pytest.mark.unit
def test_create_manual_profile(store):
    """Test the manual profile default name and blank template."""
    result = store.create_manual_profile()

    profile = store.get_profile(result.id)
    assert profile.name == "My Custom Form"
    assert store.get_profiles().active_id == result.id
    assert len(profile.data.education) == 1
    assert len(profile.data.experience) == 1

    named = store.create_manual_profile("Consulting")
    assert store.get_profile(named.id).name == "Consulting"


@pytest.mark.unit
def test_update_field_personal_info(store):
    """Test that personal info edits are trimmed and persisted."""
    store.create_manual_profile()

    result = store.update_field("personalInfo.email", "  ada@x.io ")

    assert result.success
    assert result.data.personal_info.email == "ada@x.io"
    assert store.load().data.personal_info.email == "ada@x.io"


@pytest.mark.unit
def test_update_field_empty_clears_personal_info(store):
    """Test that an empty personal info value clears the field."""
    store.save_profile("Main", _record("Ada"))

    store.update_field("personalInfo.firstName", "   ")

    assert store.load().data.personal_info.first_name is None


@pytest.mark.unit
def test_update_field_entries_and_skills(store):
    """Test degree, title, company and skills edits."""
    store.create_manual_profile()
    store.update_field("education.0.degree", "BSc")
    store.update_field("experience.0.title", "Engineer")
    store.update_field("experience.0.company", "Acme")
    result = store.update_field("skills", "Python, Go, ,SQL ")

    data = result.data
    assert data.education[0].degree == "BSc"
    assert data.experience[0].title == "Engineer"
    assert data.experience[0].company == "Acme"
    assert data.skills == ["Python", "Go", "SQL"]


@pytest.mark.unit
def test_update_field_entry_created_when_missing(store):
    """Test that editing a degree on a record with no education adds an entry."""
    store.save_profile("Parsed", CVRecord())

    result = store.update_field("education.0.degree", "MSc")

    assert [e.degree for e in result.data.education] == ["MSc"]


@pytest.mark.unit
@pytest.mark.parametrize("key", ["personalInfo.nickname", "education.1.degree", "hobbies"])
def test_update_field_unknown_key(store, key):
    """Test that unknown edit keys fail without touching the record."""
    store.save_profile("Main", _record("Ada"))

    result = store.update_field(key, "x")

    assert not result.success
    assert "Unknown" in result.error
    assert store.load().data == _record("Ada")


@pytest.mark.unit
def test_update_field_without_active_profile(store):
    """Test that edits need an active profile."""
    result = store.update_field("personalInfo.email", "a@b.co")
    assert not result.success
    assert result.error == "No active profile"


@pytest.mark.unit
def test_custom_field_add_edit_delete(store):
    """Test the custom field lifecycle on the active profile."""
    store.create_manual_profile()

    assert store.add_custom_field(" Certifications ").data.custom_fields == {"Certifications": ""}

    store.update_field("customFields.Certifications", "CKA")
    # Adding an existing key keeps its value
    assert store.add_custom_field("Certifications").data.custom_fields == {"Certifications": "CKA"}

    result = store.delete_custom_field("Certifications")
    assert result.success
    assert result.data.custom_fields == {}


@pytest.mark.unit
def test_custom_field_errors(store):
    """Test empty names and deleting a missing key."""
    store.create_manual_profile()

    empty = store.add_custom_field("  ")
    missing = store.delete_custom_field("Nope")

    assert not empty.success
    assert empty.error == "Custom field name must not be empty"
    assert not missing.success
    assert missing.error == "No custom field named 'Nope'"


@pytest.mark.unit
def test_apply_field_edit_custom_key_may_contain_dots():
    """Test that everything after the custom prefix is the key."""
    record = CVRecord()
    apply_field_edit(record, "customFields.Node.js Version", "20")
    assert record.custom_fields == {"Node.js Version": "20"}


@pytest.mark.unit
@pytest.mark.parametrize("key", ["customFields.", "customFields.   "])
def test_update_field_blank_custom_key(store, key):
    """Test that an edit naming no custom field is rejected and nothing is stored."""
    store.create_manual_profile()

    result = store.update_field(key, "oops")

    assert not result.success
    assert result.error == "Custom field name must not be empty"
    assert store.load().data.custom_fields == {}


@pytest.mark.unit
def test_apply_field_edit_trims_custom_key():
    """Test that the custom field name is stored without surrounding spaces."""
    record = CVRecord()
    apply_field_edit(record, "customFields. Clearance ", "Secret")
    assert record.custom_fields == {"Clearance": "Secret"}


# =============================================================================
# EVENTS
# =============================================================================


@pytest.mark.unit
def test_events_written(tmp_path):
    """Test that lifecycle operations append events with the store's source."""
    events_file = tmp_path / "events.log"
    store = ProfileStore(backend=MemoryStore(), events_file=events_file, source="test")

    saved = store.save_profile("Main", _record("Ada"))
    store.rename_profile(saved.id, "Renamed")
    store.set_active(saved.id)
    store.delete_profile(saved.id)
    store.clear()

    events = get_recent_events(events_file, n=20)
    assert [e["event_type"] for e in events] == [
        "profile_saved",
        "profile_renamed",
        "profile_activated",
        "profile_deleted",
        "store_cleared",
    ]
    assert all(e["source"] == "test" for e in events)
    assert events[0]["profile_id"] == saved.id
    assert events[0]["created"] is True
    assert events[-1]["profile_id"] is None


@pytest.mark.unit
def test_migration_event_written(tmp_path):
    """Test that a legacy migration is recorded."""
    events_file = tmp_path / "events.log"
    backend = MemoryStore({"cvData": {"skills": ["Go"]}})

    ProfileStore(backend=backend, events_file=events_file).get_profiles()

    events = get_recent_events(events_file, event_type="legacy_migrated")
    assert len(events) == 1
    assert events[0]["name"] == "Imported CV"


@pytest.mark.unit
def test_no_events_without_file(tmp_path, store):
    """Test that no event log is written when none is configured."""
    store.save_profile("Main", _record("Ada"))
    assert list(tmp_path.iterdir()) == []
