"""Unit tests for CVRecord and its wire layout."""

import pytest

from cvfill.contexts.intake.cv_data_structure import (
    CVRecord,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
)


@pytest.mark.unit
def test_personal_info_wire_keys():
    """Test that to_dict uses camelCase keys and omits unset fields."""
    info = PersonalInfo(first_name="Jane", last_name="Doe", email="jane@x.io")
    assert info.to_dict() == {"firstName": "Jane", "lastName": "Doe", "email": "jane@x.io"}


@pytest.mark.unit
def test_personal_info_get_and_set_field():
    """Test field access by wire key."""
    info = PersonalInfo()
    info.set_field("firstName", "Ada")

    assert info.first_name == "Ada"
    assert info.get_field("firstName") == "Ada"
    assert info.get_field("nickname") is None


@pytest.mark.unit
def test_personal_info_set_unknown_field():
    """Test that setting an unknown wire key raises KeyError."""
    with pytest.raises(KeyError):
        PersonalInfo().set_field("nickname", "Ace")


@pytest.mark.unit
def test_record_round_trip():
    """Test that to_dict/from_dict preserve a populated record."""
    record = CVRecord(
        personal_info=PersonalInfo(name="Jane Doe", phone="555-0100"),
        education=[EducationEntry(degree="BSc", institution="MIT", year="2020")],
        experience=[ExperienceEntry(title="Engineer", company="Acme", duration="2021 - 2023")],
        skills=["Go"],
        custom_fields={"Languages": "English"},
    )
    assert CVRecord.from_dict(record.to_dict()) == record


@pytest.mark.unit
def test_from_dict_tolerates_partial_data():
    """Test that missing keys, nulls and partial entries are accepted."""
    record = CVRecord.from_dict(
        {
            "personalInfo": {"email": "a@b.co", "unknown": "x"},
            "education": [{"degree": "BSc"}],
            "experience": None,
            "customFields": {"Clearance": None},
        }
    )

    assert record.personal_info.email == "a@b.co"
    assert record.education == [EducationEntry(degree="BSc", institution="", year="")]
    assert record.experience == []
    assert record.skills == []
    assert record.custom_fields == {"Clearance": ""}


@pytest.mark.unit
def test_from_dict_none():
    """Test that None deserializes to an empty record."""
    assert CVRecord.from_dict(None).is_empty()


@pytest.mark.unit
def test_most_recent_entries_are_first():
    """Test that the first list entry is the most recent."""
    record = CVRecord(
        education=[EducationEntry(degree="PhD"), EducationEntry(degree="BSc")],
        experience=[ExperienceEntry(title="Lead"), ExperienceEntry(title="Intern")],
    )
    assert record.most_recent_education().degree == "PhD"
    assert record.most_recent_experience().title == "Lead"
    assert CVRecord().most_recent_education() is None
    assert CVRecord().most_recent_experience() is None


@pytest.mark.unit
def test_empty_manual_record():
    """Test the manual profile template carries one blank entry of each kind."""
    record = CVRecord.empty_manual()

    assert record.education == [EducationEntry()]
    assert record.experience == [ExperienceEntry()]
    assert record.is_empty()
    assert record.to_dict()["personalInfo"] == {}


@pytest.mark.unit
def test_is_empty_false_with_any_content():
    """Test that a single skill makes a record non-empty."""
    assert not CVRecord(skills=["Go"]).is_empty()
