"""Unit tests for the key-value persistence backends."""

import json

import pytest

from cvfill.contexts.profiles import JsonFileStore, MemoryStore


@pytest.mark.unit
def test_memory_store_get_set_remove():
    """Test the three operations on the in-memory backend."""
    store = MemoryStore({"a": 1})
    store.set({"b": [1, 2]})

    assert store.get(["a", "b", "missing"]) == {"a": 1, "b": [1, 2]}

    store.remove(["a", "missing"])
    assert store.get(["a", "b"]) == {"b": [1, 2]}


@pytest.mark.unit
def test_memory_store_isolates_values():
    """Test that callers cannot mutate stored values through returned objects."""
    initial = {"items": [1]}
    store = MemoryStore(initial)
    initial["items"].append(2)

    fetched = store.get(["items"])
    fetched["items"].append(3)

    assert store.data == {"items": [1]}


@pytest.mark.unit
@pytest.mark.parametrize("initial", [None, {}])
def test_memory_store_starts_empty(initial):
    """Test that no initial mapping gives an empty backend."""
    store = MemoryStore(initial)
    assert store.get(["cvProfiles"]) == {}
    assert store.data == {}


@pytest.mark.unit
def test_json_store_missing_file_reads_empty(tmp_path):
    """Test that a store file that does not exist yet reads as empty."""
    store = JsonFileStore(tmp_path / "profiles.json")
    assert store.get(["cvProfiles"]) == {}


@pytest.mark.unit
def test_json_store_persists_between_instances(tmp_path):
    """Test that values written by one instance are read by another."""
    path = tmp_path / "nested" / "profiles.json"
    JsonFileStore(path).set({"activeProfileId": "abc", "cvProfiles": []})

    assert JsonFileStore(path).get(["activeProfileId"]) == {"activeProfileId": "abc"}
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "activeProfileId": "abc",
        "cvProfiles": [],
    }


@pytest.mark.unit
def test_json_store_remove(tmp_path):
    """Test that removed keys disappear from the file."""
    path = tmp_path / "profiles.json"
    store = JsonFileStore(path)
    store.set({"a": 1, "b": 2})
    store.remove(["a"])

    assert json.loads(path.read_text(encoding="utf-8")) == {"b": 2}


@pytest.mark.unit
def test_json_store_leaves_no_temp_files(tmp_path):
    """Test that atomic writes clean up after themselves."""
    store = JsonFileStore(tmp_path / "profiles.json")
    store.set({"a": 1})
    store.set({"b": 2})

    assert [p.name for p in tmp_path.iterdir()] == ["profiles.json"]


@pytest.mark.unit
def test_json_store_rejects_non_object(tmp_path):
    """Test that a file holding something other than an object is an error."""
    path = tmp_path / "profiles.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError, match="does not contain a JSON object"):
        JsonFileStore(path).get(["a"])


@pytest.mark.unit
def test_json_store_expands_user(monkeypatch, tmp_path):
    """Test that ~ in the store path is expanded."""
    monkeypatch.setenv("HOME", str(tmp_path))
    store = JsonFileStore("~/profiles.json")
    assert store.path == tmp_path / "profiles.json"
