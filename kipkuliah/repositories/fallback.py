"""
Per-operation routing between the database and the in-memory store.

Every call first targets the database when one is connected. A
StoreOperationError from that attempt is logged and the equivalent operation
runs against the in-memory store instead, so persistence failures never reach
the services. The next call tries the database again.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Optional, Sequence, TypeVar, Union

from kipkuliah.repositories.memory_store import MemoryCollection, MemoryStore
from kipkuliah.repositories.sql_repository import SQLCollection, SQLStore, StoreOperationError

logger = logging.getLogger("kipkuliah.store")

T = TypeVar("T")

SOURCE_SQL = "sql"
SOURCE_MEMORY = "memory"


@dataclass(frozen=True)
class Connected:
    handle: SQLStore


@dataclass(frozen=True)
class Unavailable:
    reason: str = ""


StoreState = Union[Connected, Unavailable]


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    value: T
    source: str  # "sql" | "memory"
    warning: Optional[str] = None


class FallbackResolver:
    def __init__(self, state: StoreState, memory: MemoryStore) -> None:
        self.state = state
        self.memory = memory

    def run(
        self,
        kind: str,
        operation: str,
        live: Callable[[SQLCollection], T],
        fallback: Callable[[MemoryCollection], T],
    ) -> StoreResult[T]:
        state = self.state
        if isinstance(state, Connected):
            try:
                return StoreResult(live(state.handle.collection(kind)), SOURCE_SQL)
            except StoreOperationError as exc:
                logger.warning("Database %s on %s failed, using in-memory store: %s", operation, kind, exc)
                return StoreResult(
                    fallback(self.memory.collection(kind)),
                    SOURCE_MEMORY,
                    warning=f"Fell back to in-memory store: {type(exc).__name__}",
                )
        return StoreResult(fallback(self.memory.collection(kind)), SOURCE_MEMORY)

    def find(
        self,
        kind: str,
        query: Optional[Mapping[str, Any]] = None,
        sort: Optional[Sequence[tuple[str, int]]] = None,
    ) -> StoreResult[list[dict]]:
        return self.run(
            kind,
            "find",
            live=lambda c: c.find(query, sort),
            fallback=lambda m: m.find(query, sort),
        )

    def find_one(self, kind: str, query: Mapping[str, Any]) -> StoreResult[Optional[dict]]:
        return self.run(kind, "find_one", live=lambda c: c.find_one(query), fallback=lambda m: m.find_one(query))

    def insert(self, kind: str, record: Mapping[str, Any]) -> StoreResult[dict]:
        return self.run(kind, "insert", live=lambda c: c.insert_one(record), fallback=lambda m: m.insert_front(record))

    def update(self, kind: str, query: Mapping[str, Any], patch: Mapping[str, Any]) -> StoreResult[bool]:
        return self.run(
            kind,
            "update",
            live=lambda c: c.update_one(query, patch) > 0,
            fallback=lambda m: m.update_first(query, patch),
        )

    def delete(self, kind: str, query: Mapping[str, Any]) -> StoreResult[bool]:
        return self.run(
            kind,
            "delete",
            live=lambda c: c.delete_one(query) > 0,
            fallback=lambda m: m.remove_first(query),
        )
