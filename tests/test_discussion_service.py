from __future__ import annotations

from datetime import datetime, timezone

import pytest

from kipkuliah.db.models import Discussion
from kipkuliah.domain.ids import DiscussionIdGenerator
from kipkuliah.domain.records import DISCUSSION_FIELDS
from kipkuliah.domain.validation import ValidationError
from kipkuliah.services.discussion_service import DiscussionNotFoundError, DiscussionService

BLANKS = [None, "", "   ", "\n\t", 42]


def _service(ctx, clock=None):
    if clock is None:
        return DiscussionService(ctx.resolver)
    return DiscussionService(ctx.resolver, clock=clock)


def test_create_applies_defaults_and_lists_first(context):
    svc = _service(context)
    created = svc.create(question="How do I renew?")

    assert created["name"] == "Anonymous"
    assert created["email"] == ""
    assert created["answer"] is None
    assert created["question"] == "How do I renew?"
    assert set(created) == set(DISCUSSION_FIELDS)

    listed = svc.list_discussions()
    assert listed[0]["id"] == created["id"]
    assert len(listed) == 3


def test_create_trims_inputs(context):
    created = _service(context).create(name="  Rina ", email=" rina@uin.ac.id ", question="  Kapan?  ")
    assert (created["name"], created["email"], created["question"]) == ("Rina", "rina@uin.ac.id", "Kapan?")


@pytest.mark.parametrize("question", BLANKS)
def test_blank_question_is_rejected_without_state_change(context, question):
    svc = _service(context)
    before = svc.list_discussions()
    with pytest.raises(ValidationError) as info:
        svc.create(name="A", question=question)
    assert info.value.error == "Question is required"
    assert svc.list_discussions() == before


@pytest.mark.parametrize("answer", BLANKS)
def test_blank_answer_is_rejected_without_state_change(context, answer):
    svc = _service(context)
    before = svc.list_discussions()
    with pytest.raises(ValidationError):
        svc.answer(2, answer)
    assert svc.list_discussions() == before


def test_listing_is_newest_first_regardless_of_insertion_order(context):
    stamps = iter(
        [
            datetime(2024, 3, 1, tzinfo=timezone.utc),
            datetime(2024, 2, 1, tzinfo=timezone.utc),
            datetime(2024, 4, 1, tzinfo=timezone.utc),
        ]
    )
    svc = _service(context, clock=lambda: next(stamps))
    march = svc.create(question="march")
    february = svc.create(question="february")
    april = svc.create(question="april")

    ids = [d["id"] for d in svc.list_discussions()]
    assert ids == [april["id"], march["id"], february["id"], 1, 2]


def test_answer_sets_answer_and_timestamp(context, clock):
    svc = _service(context, clock=clock)
    created = svc.create(question="Berapa lama proses verifikasi?")
    svc.answer(created["id"], "  Sekitar dua minggu.  ")

    stored = next(d for d in svc.list_discussions() if d["id"] == created["id"])
    assert stored["answer"] == "Sekitar dua minggu."
    assert stored["answeredAt"] is not None
    assert stored["answeredAt"] > stored["createdAt"]


def test_answer_accepts_path_style_ids(context):
    _service(context).answer("2", "Ya.")
    assert next(d for d in _service(context).list_discussions() if d["id"] == 2)["answer"] == "Ya."


@pytest.mark.parametrize("discussion_id", [999, "999", "abc", "1.5"])
def test_answer_unknown_id_is_not_found(context, discussion_id):
    with pytest.raises(DiscussionNotFoundError):
        _service(context).answer(discussion_id, "jawaban")


def test_delete_twice_removes_exactly_one(context):
    svc = _service(context)
    before = len(svc.list_discussions())
    svc.delete(1)
    with pytest.raises(DiscussionNotFoundError):
        svc.delete(1)
    assert len(svc.list_discussions()) == before - 1


def test_create_survives_database_outage(sql_context, sql_store):
    Discussion.__table__.drop(bind=sql_store.engine)
    svc = _service(sql_context)

    created = svc.create(question="How do I renew?")
    assert created["name"] == "Anonymous"
    assert any(d["id"] == created["id"] for d in svc.list_discussions())


def test_ids_are_unique_within_one_clock_tick():
    ids = DiscussionIdGenerator(clock=lambda: 1_700_000_000.0)
    allocated = [ids.next_id() for _ in range(50)]
    assert allocated[0] == 1_700_000_000_000
    assert len(set(allocated)) == 50
    assert allocated == sorted(allocated)


def test_ids_do_not_go_backwards_when_clock_does():
    ticks = iter([2000.0, 1000.0])
    ids = DiscussionIdGenerator(clock=lambda: next(ticks))
    first, second = ids.next_id(), ids.next_id()
    assert second == first + 1


@pytest.mark.parametrize("discussion_id", ["1_0", " 1 0", "+10", "１０"])
def test_only_plain_digit_ids_are_parsed(memory_context, discussion_id):
    memory_context.memory.collection("discussions").insert_front({"id": 10, "answer": None, "answeredAt": None})
    with pytest.raises(DiscussionNotFoundError):
        _service(memory_context).answer(discussion_id, "jawaban")
    assert memory_context.memory.collection("discussions").find_one({"id": 10})["answer"] is None


def test_padded_digit_id_still_matches(memory_context):
    _service(memory_context).answer(" 2 ", "Ya.")
    assert memory_context.memory.collection("discussions").find_one({"id": 2})["answer"] == "Ya."
