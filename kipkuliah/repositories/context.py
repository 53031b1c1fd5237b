"""Startup wiring for the stores.

open_data_context() is called once when the application starts; the returned
DataContext is owned by the app, handed to the services and closed at
shutdown. A failed connection is not retried for the lifetime of the process.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from kipkuliah.core.config import Settings
from kipkuliah.repositories.fallback import Connected, FallbackResolver, StoreState, Unavailable
from kipkuliah.repositories.memory_store import MemoryStore
from kipkuliah.repositories.sql_repository import SQLStore, StoreError

logger = logging.getLogger("kipkuliah.store")


@dataclass
class DataContext:
    state: StoreState
    memory: MemoryStore = field(default_factory=MemoryStore.seeded)

    def __post_init__(self):
        self.resolver = FallbackResolver(self.state, self.memory)

    @property
    def connected(self) -> bool:
        return isinstance(self.state, Connected)

    def close(self) -> None:
        if isinstance(self.state, Connected):
            self.state.handle.close()


def open_data_context(settings: Settings) -> DataContext:
    memory = MemoryStore.seeded()
    if not settings.database_url:
        logger.info("DATABASE_URL not configured, using in-memory store")
        return DataContext(Unavailable("DATABASE_URL not configured"), memory)

    try:
        store = SQLStore.connect(settings.database_url)
    except StoreError as exc:
        logger.warning("Database connection failed, using in-memory store: %s", exc)
        return DataContext(Unavailable(str(exc)), memory)

    try:
        store.seed_if_empty()
    except StoreError as exc:
        logger.warning("Database seeding failed, using in-memory store: %s", exc)
        store.close()
        return DataContext(Unavailable(str(exc)), memory)

    logger.info("Connected to database")
    return DataContext(Connected(store), memory)
