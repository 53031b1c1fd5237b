"""Discussion board use cases: ask, list, answer, delete."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Callable

from kipkuliah.domain.ids import DiscussionIdGenerator
from kipkuliah.domain.records import DISCUSSIONS, NEWEST_FIRST, sort_records
from kipkuliah.domain.validation import clean_text, require_text
from kipkuliah.repositories.fallback import FallbackResolver

DEFAULT_NAME = "Anonymous"
ID_PATTERN = re.compile(r"-?[0-9]+")


class DiscussionError(Exception):
    """Base exception for discussion workflow."""


class DiscussionNotFoundError(DiscussionError):
    """Raised when no discussion carries the requested id."""

    def __init__(self, discussion_id: Any):
        super().__init__(f"Discussion {discussion_id} not found")
        self.discussion_id = discussion_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_discussion_id(value: Any) -> int:
    """Path ids that are not integers cannot match any discussion."""
    if isinstance(value, bool):
        raise DiscussionNotFoundError(value)
    if isinstance(value, int):
        return value
    candidate = str(value).strip()
    if not ID_PATTERN.fullmatch(candidate):
        raise DiscussionNotFoundError(value)
    return int(candidate)


class DiscussionService:
    """Questions posted by visitors and answered by administrators."""

    def __init__(
        self,
        resolver: FallbackResolver,
        ids: DiscussionIdGenerator | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.resolver = resolver
        self.ids = ids or DiscussionIdGenerator()
        self.clock = clock

    def list_discussions(self) -> list[dict]:
        result = self.resolver.find(DISCUSSIONS, sort=NEWEST_FIRST)
        # the SQL path already orders; re-sorting keeps both paths identical
        return sort_records(result.value, NEWEST_FIRST)

    def create(self, name: Any = None, email: Any = None, question: Any = None) -> dict:
        text = require_text(question, "Question is required", "Pertanyaan tidak boleh kosong")
        record = {
            "id": self.ids.next_id(),
            "name": clean_text(name) or DEFAULT_NAME,
            "email": clean_text(email),
            "question": text,
            "createdAt": self.clock(),
            "answer": None,
            "answeredAt": None,
        }
        return self.resolver.insert(DISCUSSIONS, record).value

    def answer(self, discussion_id: Any, answer: Any) -> None:
        text = require_text(answer, "Answer is required", "Jawaban tidak boleh kosong")
        key = parse_discussion_id(discussion_id)
        patch = {"answer": text, "answeredAt": self.clock()}
        if not self.resolver.update(DISCUSSIONS, {"id": key}, patch).value:
            raise DiscussionNotFoundError(key)

    def delete(self, discussion_id: Any) -> None:
        key = parse_discussion_id(discussion_id)
        if not self.resolver.delete(DISCUSSIONS, {"id": key}).value:
            raise DiscussionNotFoundError(key)
