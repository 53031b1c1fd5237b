"""
Smoke tests for the SQL store against a temporary SQLite database.
"""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from kipkuliah.db.models import Discussion
from kipkuliah.domain.records import (
    ASCENDING,
    DISCUSSION_FIELDS,
    DISCUSSIONS,
    NEWEST_FIRST,
    STUDENT_FIELDS,
    STUDENTS,
)
from kipkuliah.repositories.sql_repository import SQLStore, StoreConnectionError, StoreOperationError


def test_connect_creates_schema_and_seeds_once(sqlite_url):
    store = SQLStore.connect(sqlite_url)
    try:
        assert store.seed_if_empty() == [STUDENTS, DISCUSSIONS]
        assert store.collection(STUDENTS).count() == 5
        assert store.collection(DISCUSSIONS).count() == 2
        assert store.seed_if_empty() == []
        assert store.collection(STUDENTS).count() == 5
    finally:
        store.close()


def test_connect_to_unreachable_database_raises(tmp_path):
    with pytest.raises(StoreConnectionError):
        SQLStore.connect(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'db.sqlite'}")


def test_connect_without_url_raises():
    with pytest.raises(StoreConnectionError):
        SQLStore.connect("")


def test_records_expose_wire_fields_only(sql_store):
    student = sql_store.collection(STUDENTS).find_one({"studentId": "2021003"})
    assert set(student) == set(STUDENT_FIELDS)
    assert student["registered"] is False

    discussion = sql_store.collection(DISCUSSIONS).find_one({"id": 1})
    assert set(discussion) == set(DISCUSSION_FIELDS)
    assert discussion["createdAt"] == datetime(2024, 1, 15, tzinfo=timezone.utc)
    assert discussion["createdAt"].tzinfo is not None


def test_find_sorts_both_directions(sql_store):
    discussions = sql_store.collection(DISCUSSIONS)
    assert [d["id"] for d in discussions.find(sort=NEWEST_FIRST)] == [1, 2]
    assert [d["id"] for d in discussions.find(sort=[("createdAt", ASCENDING)])] == [2, 1]


def test_update_and_delete_match_on_discussion_id(sql_store):
    discussions = sql_store.collection(DISCUSSIONS)
    answered_at = datetime(2025, 1, 2, 3, 4, tzinfo=timezone.utc)

    assert discussions.update_one({"id": 2}, {"answer": "Sudah dijawab", "answeredAt": answered_at}) == 1
    updated = discussions.find_one({"id": 2})
    assert updated["answer"] == "Sudah dijawab"
    assert updated["answeredAt"] == answered_at
    assert discussions.update_one({"id": 999}, {"answer": "x"}) == 0

    assert discussions.delete_one({"id": 2}) == 1
    assert discussions.delete_one({"id": 2}) == 0
    assert discussions.count() == 1


def test_insert_one_returns_stored_record(sql_store):
    record = {
        "id": 1735689600000,
        "name": "Rina",
        "email": "",
        "question": "Kapan pencairan dana?",
        "createdAt": datetime(2025, 1, 1, tzinfo=timezone.utc),
        "answer": None,
        "answeredAt": None,
    }
    stored = sql_store.collection(DISCUSSIONS).insert_one(record)
    assert stored == record


def test_unknown_field_is_rejected(sql_store):
    with pytest.raises(ValueError):
        sql_store.collection(STUDENTS).find({"nim": "2021001"})


def test_query_failure_becomes_store_operation_error(sql_store):
    Discussion.__table__.drop(bind=sql_store.engine)
    with pytest.raises(StoreOperationError):
        sql_store.collection(DISCUSSIONS).find()
