"""Unit tests for loading field-mapping tables."""

from pathlib import Path

import pytest

from cvfill.contexts.matching import DEFAULT_FIELD_MAPPINGS, FieldType, load_field_mappings
from cvfill.contexts.matching import field_mappings as field_mappings_module

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"


@pytest.mark.unit
def test_default_table_order():
    """Test that personal info types come first and skills last."""
    order = [field_type for field_type, _ in DEFAULT_FIELD_MAPPINGS]

    assert order[:3] == [FieldType.FIRST_NAME, FieldType.LAST_NAME, FieldType.FULL_NAME]
    assert order[-1] == FieldType.SKILLS
    assert len(order) == len(FieldType)


@pytest.mark.unit
def test_default_keywords_lowercase():
    """Test that built-in keywords are lowercase, as search strings are."""
    for _, keywords in DEFAULT_FIELD_MAPPINGS:
        assert all(keyword == keyword.lower() for keyword in keywords)


@pytest.mark.unit
def test_load_without_path_returns_defaults(monkeypatch):
    """Test that no path and no environment override gives the built-in table."""
    monkeypatch.setattr(field_mappings_module, "FIELD_MAPPINGS_PATH", None)
    assert load_field_mappings() is DEFAULT_FIELD_MAPPINGS


@pytest.mark.unit
def test_load_minimal_yaml():
    """Test that a YAML table keeps its order and types."""
    mappings = load_field_mappings(FIXTURES_PATH / "field_mappings_minimal.yaml")

    assert mappings == (
        (FieldType.EMAIL, ("email",)),
        (FieldType.POSITION, ("title", "role")),
        (FieldType.COMPANY, ("company",)),
    )


@pytest.mark.unit
def test_load_uses_environment_path(monkeypatch):
    """Test that the configured path is used when none is passed."""
    monkeypatch.setattr(
        field_mappings_module,
        "FIELD_MAPPINGS_PATH",
        FIXTURES_PATH / "field_mappings_minimal.yaml",
    )
    assert [t for t, _ in load_field_mappings()] == [
        FieldType.EMAIL,
        FieldType.POSITION,
        FieldType.COMPANY,
    ]


@pytest.mark.unit
def test_load_unknown_type():
    """Test that an unknown field type is rejected."""
    with pytest.raises(ValueError, match="Unknown field type 'experience'"):
        load_field_mappings(FIXTURES_PATH / "field_mappings_unknown_type.yaml")


@pytest.mark.unit
def test_load_missing_section(tmp_path):
    """Test that a file without field_mappings is rejected."""
    config = tmp_path / "mappings.yaml"
    config.write_text("other: 1\n", encoding="utf-8")

    with pytest.raises(ValueError, match="No field_mappings section"):
        load_field_mappings(config)


@pytest.mark.unit
def test_load_type_without_keywords(tmp_path):
    """Test that a type with an empty keyword list is rejected."""
    config = tmp_path / "mappings.yaml"
    config.write_text("field_mappings:\n  email: []\n", encoding="utf-8")

    with pytest.raises(ValueError, match="no keywords"):
        load_field_mappings(config)


@pytest.mark.unit
def test_load_lowercases_and_accepts_scalar(tmp_path):
    """Test keyword lowercasing and a single keyword given as a string."""
    config = tmp_path / "mappings.yaml"
    config.write_text(
        "field_mappings:\n  linkedin: LinkedIn\n  skills: [Skills, Tech Stack]\n",
        encoding="utf-8",
    )

    assert load_field_mappings(config) == (
        (FieldType.LINKEDIN, ("linkedin",)),
        (FieldType.SKILLS, ("skills", "tech stack")),
    )
