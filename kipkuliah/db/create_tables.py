"""Utility script to create the schema and load the seed records."""
from __future__ import annotations

from kipkuliah.core.config import get_settings
from kipkuliah.repositories.sql_repository import SQLStore, StoreError


def create_all(url: str) -> list[str]:
    """Create missing tables and seed the empty ones; returns the seeded kinds."""
    store = SQLStore.connect(url)
    try:
        return store.seed_if_empty()
    finally:
        store.close()


if __name__ == "__main__":
    try:
        seeded = create_all(get_settings().database_url)
        print("Database tables created successfully.")
        for kind in seeded:
            print(f"  seeded: {kind}")
    except StoreError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
