from __future__ import annotations

import fcntl
import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterator

from .errors import StaleRecordError
from .models import UserViolationRecord


class ViolationStore(ABC):
    """Key-value storage of violation records keyed by user id."""

    @abstractmethod
    def load(self, user_id: str) -> UserViolationRecord:
        """Return the stored record, or a fresh one for unknown users."""
        raise NotImplementedError

    @abstractmethod
    def save(
        self, record: UserViolationRecord, expected_version: int
    ) -> UserViolationRecord:
        """Write ``record`` if the stored version still equals ``expected_version``.

        Returns the record as stored, with its version bumped. Raises
        StaleRecordError when another writer got there first.
        """
        raise NotImplementedError


class InMemoryViolationStore(ViolationStore):
    """Process-local store with compare-and-swap semantics."""

    def __init__(self) -> None:
        self._records: Dict[str, UserViolationRecord] = {}
        self._lock = threading.Lock()

    def load(self, user_id: str) -> UserViolationRecord:
        with self._lock:
            return self._records.get(user_id) or UserViolationRecord(user_id=user_id)

    def save(
        self, record: UserViolationRecord, expected_version: int
    ) -> UserViolationRecord:
        with self._lock:
            stored = self._records.get(record.user_id)
            actual = stored.version if stored else 0
            if actual != expected_version:
                raise StaleRecordError(record.user_id, expected_version, actual)
            saved = replace(record, version=actual + 1)
            self._records[record.user_id] = saved
            return saved


class JsonFileViolationStore(ViolationStore):
    """Stores all records in one JSON document on disk.

    The version check and write happen under an exclusive ``fcntl`` lock on a
    sibling ``.lock`` file, so separate processes sharing the state file see
    each other's writes. The document is replaced atomically.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        self._lock = threading.Lock()

    def load(self, user_id: str) -> UserViolationRecord:
        with self._exclusive():
            data = self._read().get(user_id)
        if data is None:
            return UserViolationRecord(user_id=user_id)
        return UserViolationRecord.from_dict(data)

    def save(
        self, record: UserViolationRecord, expected_version: int
    ) -> UserViolationRecord:
        with self._exclusive():
            records = self._read()
            stored = records.get(record.user_id)
            actual = int(stored.get("version", 0)) if stored else 0
            if actual != expected_version:
                raise StaleRecordError(record.user_id, expected_version, actual)
            saved = replace(record, version=actual + 1)
            records[record.user_id] = saved.to_dict()
            self._write(records)
            return saved

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock, open(self.lock_path, "a", encoding="utf-8") as handle:
            fcntl.flock(handle, fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(handle, fcntl.LOCK_UN)

    def _read(self) -> Dict[str, dict]:
        if not self.path.exists():
            return {}
        contents = self.path.read_text(encoding="utf-8").strip()
        if not contents:
            return {}
        parsed = json.loads(contents)
        if not isinstance(parsed, dict):
            raise ValueError(f"Violation state file {self.path} must hold a JSON object.")
        return parsed

    def _write(self, records: Dict[str, dict]) -> None:
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(records, handle, indent=2)
            os.replace(temp_name, self.path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
