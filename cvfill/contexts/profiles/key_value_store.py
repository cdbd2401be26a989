"""
Key-value persistence backends for the profile store.

The profile store only needs three operations over a flat JSON-compatible
namespace: get some keys, set some keys, remove some keys. Absent keys are
simply missing from get()'s result.

Backends:
    JsonFileStore: one JSON document on disk, rewritten atomically
    MemoryStore: in-process dict, for tests and one-shot CLI runs
"""

import copy
import json
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, Optional


class KeyValueStore(ABC):
    """Abstract flat key-value namespace."""

    @abstractmethod
    def get(self, keys: Iterable[str]) -> dict[str, Any]:
        """Values for the requested keys that exist."""

    @abstractmethod
    def set(self, mapping: dict[str, Any]) -> None:
        """Create or overwrite every key in mapping."""

    @abstractmethod
    def remove(self, keys: Iterable[str]) -> None:
        """Delete keys; missing keys are ignored."""


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self.data: dict[str, Any] = copy.deepcopy(initial or {})

    def get(self, keys: Iterable[str]) -> dict[str, Any]:
        return {k: copy.deepcopy(self.data[k]) for k in keys if k in self.data}

    def set(self, mapping: dict[str, Any]) -> None:
        self.data.update(copy.deepcopy(mapping))

    def remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """
    Key-value store persisted as a single JSON object.

    A missing file reads as empty. Every write goes to a temp file first and
    replaces the original only once the write succeeded.
    """

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Profile store {self.path} does not contain a JSON object")
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Write to temp file first (atomic write pattern)
        temp_fd, temp_path = tempfile.mkstemp(suffix=".json", dir=self.path.parent, text=True)
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            # Only overwrite original if write succeeded
            shutil.move(temp_path, self.path)
        except Exception:
            # Clean up temp file if write failed
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def get(self, keys: Iterable[str]) -> dict[str, Any]:
        data = self._read_all()
        return {k: data[k] for k in keys if k in data}

    def set(self, mapping: dict[str, Any]) -> None:
        data = self._read_all()
        data.update(mapping)
        self._write_all(data)

    def remove(self, keys: Iterable[str]) -> None:
        data = self._read_all()
        for key in keys:
            data.pop(key, None)
        self._write_all(data)
