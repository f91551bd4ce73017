from datetime import datetime

import pytest
from pydantic import ValidationError

from footcare.schemas import ConversationEntry


def test_create_patient_assigns_id_and_timestamp(store):
    patient = store.create_patient("Jane Doe", "jane@example.com", "555-0101")

    assert patient.id
    assert isinstance(patient.created_at, datetime)
    assert patient.created_at.tzinfo is not None
    assert store.get_patient(patient.id) == patient


def test_patient_ids_are_unique(store):
    ids = {store.create_patient("p", "e", "1").id for _ in range(200)}
    assert len(ids) == 200


def test_get_missing_records_returns_none(store):
    assert store.get_patient("nope") is None
    assert store.get_session("nope") is None


def test_returned_records_are_copies(store):
    patient = store.create_patient("Jane", "jane@example.com", "555")
    patient.name = "Changed"
    assert store.get_patient(patient.id).name == "Jane"


def test_create_session_defaults(store):
    session = store.create_session(patient_id="p1")

    assert session.issue_category == "general"
    assert session.symptoms == ""
    assert session.diagnosis == ""
    assert session.conversation == []
    assert session.status == "active"
    assert session.created_at == session.updated_at


def test_sessions_listed_newest_first(store):
    first = store.create_session(patient_id="p1")
    second = store.create_session(patient_id="p2")
    third = store.create_session(patient_id="p1")

    assert [s.id for s in store.list_sessions()] == [third.id, second.id, first.id]
    assert [s.id for s in store.list_sessions_for_patient("p1")] == [third.id, first.id]
    assert store.list_sessions_for_patient("unknown") == []


def test_update_session_merges_and_stamps(store):
    session = store.create_session(patient_id="p1")

    updated = store.update_session(
        session.id, {"issue_category": "Bunions", "satisfaction_score": 4}
    )

    assert updated.issue_category == "Bunions"
    assert updated.satisfaction_score == 4
    assert updated.patient_id == "p1"
    assert updated.updated_at >= session.updated_at
    assert store.get_session(session.id) == updated


def test_update_unknown_session_is_noop(store):
    store.create_session(patient_id="p1")
    before = store.list_sessions()

    assert store.update_session("missing", {"status": "completed"}) is None
    assert store.list_sessions() == before


def test_update_rejects_out_of_range_score(store):
    session = store.create_session(patient_id="p1")

    with pytest.raises(ValidationError):
        store.update_session(session.id, {"satisfaction_score": 9})
    assert store.get_session(session.id).satisfaction_score is None


def test_append_conversation(store):
    session = store.create_session(patient_id="p1")
    store.append_conversation(session.id, ConversationEntry(role="assistant", content="hi"))
    store.append_conversation(session.id, ConversationEntry(role="assistant", content="again"))

    conversation = store.get_session(session.id).conversation
    assert [e.content for e in conversation] == ["hi", "again"]
    assert store.append_conversation("missing", ConversationEntry(role="user", content="x")) is None


def test_messages_by_session_oldest_first(store):
    store.create_message("s1", "assistant", "one")
    store.create_message("s2", "assistant", "other")
    store.create_message("s1", "user", "two")

    assert [m.content for m in store.list_messages_for_session("s1")] == ["one", "two"]
