"""Input normalisation shared by the services."""
from __future__ import annotations

from typing import Any


class ValidationError(Exception):
    """Raised when a required input is missing or blank.

    ``error`` is the short English label, ``message`` the text shown to site
    visitors.
    """

    def __init__(self, error: str, message: str = ""):
        super().__init__(error)
        self.error = error
        self.message = message or error


def clean_text(value: Any) -> str:
    """Return the trimmed string, or "" for anything that is not a string."""
    if not isinstance(value, str):
        return ""
    return value.strip()


def require_text(value: Any, error: str, message: str = "") -> str:
    candidate = clean_text(value)
    if not candidate:
        raise ValidationError(error, message)
    return candidate
