"""
Configuration helpers for the KIP Kuliah backend.

This is the only module that reads os.environ; routers, services and stores
receive a Settings instance instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    cors_origins: tuple[str, ...]
    log_level: str
    host: str
    port: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
        if value is None:
            return default
        items = tuple(part.strip() for part in value.split(",") if part.strip())
        return items or default

    def _log_level(value: str | None, default: str) -> str:
        level = (value or "").strip().upper()
        return level if level in LOG_LEVELS else default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        cors_origins=_csv(os.getenv("CORS_ORIGINS"), ("*",)),
        log_level=_log_level(os.getenv("LOG_LEVEL"), "INFO"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "5000"), 5000),
    )
