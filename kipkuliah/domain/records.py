"""Record kinds and the filter/sort rules both stores share."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Sequence

STUDENTS = "students"
DISCUSSIONS = "discussions"
ENTITY_KINDS = (STUDENTS, DISCUSSIONS)

ASCENDING = 1
DESCENDING = -1

STUDENT_FIELDS = ("studentId", "name", "registered")
DISCUSSION_FIELDS = ("id", "name", "email", "question", "createdAt", "answer", "answeredAt")

NEWEST_FIRST = (("createdAt", DESCENDING),)


def as_utc(value: datetime | None) -> datetime | None:
    """Naive datetimes are read as UTC; aware ones are converted to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_registered(record: Mapping[str, Any]) -> bool:
    """A student is registered unless explicitly marked False."""
    return record.get("registered") is not False


def matches(record: Mapping[str, Any], query: Mapping[str, Any] | None) -> bool:
    if not query:
        return True
    return all(field in record and record[field] == value for field, value in query.items())


def sort_records(records: Iterable[dict], sort: Sequence[tuple[str, int]] | None) -> list[dict]:
    """Stable multi-key sort; records missing a sort field go last."""
    ordered = list(records)
    for field, direction in reversed(tuple(sort or ())):
        present = [r for r in ordered if r.get(field) is not None]
        missing = [r for r in ordered if r.get(field) is None]
        present.sort(key=lambda r: r[field], reverse=direction == DESCENDING)
        ordered = present + missing
    return ordered
