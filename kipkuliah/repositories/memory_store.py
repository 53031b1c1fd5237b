"""
In-memory record store used whenever the database is unavailable.

Each entity kind is an ordered list of dict records seeded from the same
baseline as the database. Data written here is lost on restart and is never
copied back into the database.
"""
from __future__ import annotations

import threading
from typing import Any, Iterable, Mapping, Optional, Sequence

from kipkuliah.domain.records import DISCUSSIONS, STUDENTS, matches, sort_records
from kipkuliah.domain.seed import seed_discussions, seed_students


class MemoryCollection:
    """Thread-safe ordered sequence of records with linear-scan lookups."""

    def __init__(self, name: str, records: Iterable[dict] = ()) -> None:
        self.name = name
        self._records: list[dict] = [dict(record) for record in records]
        self._lock = threading.Lock()

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def find(
        self,
        query: Optional[Mapping[str, Any]] = None,
        sort: Optional[Sequence[tuple[str, int]]] = None,
    ) -> list[dict]:
        with self._lock:
            found = [dict(record) for record in self._records if matches(record, query)]
        return sort_records(found, sort)

    def find_one(self, query: Mapping[str, Any]) -> Optional[dict]:
        with self._lock:
            for record in self._records:
                if matches(record, query):
                    return dict(record)
        return None

    def insert_front(self, record: Mapping[str, Any]) -> dict:
        stored = dict(record)
        with self._lock:
            self._records.insert(0, stored)
        return dict(stored)

    def update_first(self, query: Mapping[str, Any], patch: Mapping[str, Any]) -> bool:
        with self._lock:
            for record in self._records:
                if matches(record, query):
                    record.update(patch)
                    return True
        return False

    def remove_first(self, query: Mapping[str, Any]) -> bool:
        with self._lock:
            for index, record in enumerate(self._records):
                if matches(record, query):
                    del self._records[index]
                    return True
        return False


class MemoryStore:
    """One MemoryCollection per entity kind."""

    def __init__(self, collections: Mapping[str, MemoryCollection]) -> None:
        self._collections = dict(collections)

    @classmethod
    def seeded(cls) -> "MemoryStore":
        return cls(
            {
                STUDENTS: MemoryCollection(STUDENTS, seed_students()),
                DISCUSSIONS: MemoryCollection(DISCUSSIONS, seed_discussions()),
            }
        )

    def collection(self, kind: str) -> MemoryCollection:
        try:
            return self._collections[kind]
        except KeyError:
            raise ValueError(f"Unknown entity kind {kind!r}") from None
