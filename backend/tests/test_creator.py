from datetime import datetime

import pytest

from wordbank.core.creator import create_word, parse_word_payload
from wordbank.core.errors import Conflict, StorageFailure, ValidationFailure
from wordbank.models import Word


def test_create_with_only_word_uses_defaults(store, db_session):
    w = create_word(store, {"word": "  correr "})
    assert w.word == "correr"
    assert w.relevance == "medium"
    assert w.review_count == 0
    assert w.last_review is None
    assert w.description is None
    assert w.id
    assert w.created_at is not None
    assert db_session.query(Word).count() == 1


def test_create_normalizes_optional_fields(store):
    w = create_word(
        store,
        {
            "word": "hablar",
            "description": "  to speak ",
            "example": "   ",
            "type": "verb",
            "relevance": "HIGH",
            "review_count": 12,
            "last_review": "2024-05-01T09:30:00Z",
        },
    )
    assert w.description == "to speak"
    assert w.example is None
    assert w.type == "verb"
    assert w.relevance == "high"
    assert w.review_count == 0
    assert w.last_review == datetime(2024, 5, 1, 9, 30)


def test_unknown_relevance_becomes_medium(store):
    w = create_word(store, {"word": "prisa", "relevance": "urgent"})
    assert w.relevance == "medium"


def test_invalid_last_review_is_dropped(store):
    w = create_word(store, {"word": "ayer", "last_review": "yesterday-ish"})
    assert w.last_review is None


def test_missing_word_is_rejected(store, db_session):
    with pytest.raises(ValidationFailure) as exc:
        create_word(store, {"word": "   ", "description": "nothing"})
    assert exc.value.message == "word is required"
    assert db_session.query(Word).count() == 0


def test_non_object_payload_is_rejected():
    with pytest.raises(ValidationFailure) as exc:
        parse_word_payload(["word"])
    assert exc.value.message == "invalid JSON body"


def test_duplicate_is_case_insensitive(store, db_session):
    first = create_word(store, {"word": "Casa"})

    with pytest.raises(Conflict) as exc:
        create_word(store, {"word": "cASA"})

    assert exc.value.existing_id == first.id
    assert exc.value.to_payload() == {"error": "already exists", "id": first.id}
    assert db_session.query(Word).count() == 1


def test_unique_index_catches_race(store, db_session):
    winner = create_word(store, {"word": "perro"})

    # a concurrent creator that passed its pre-check before the winner committed
    with pytest.raises(Conflict) as exc:
        store.insert_word({"word": "PERRO", "relevance": "medium", "review_count": 0})

    assert exc.value.existing_id == winner.id
    assert db_session.query(Word).count() == 1


def test_storage_error_surfaces_backend_message(store, monkeypatch):
    from sqlalchemy.exc import OperationalError

    def boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(store.db, "query", boom)

    with pytest.raises(StorageFailure) as exc:
        create_word(store, {"word": "gato"})
    assert exc.value.message == "database is locked"


def test_duplicate_check_folds_non_ascii_case(store, db_session):
    first = create_word(store, {"word": "Ñandú"})

    with pytest.raises(Conflict) as exc:
        create_word(store, {"word": "ñANDÚ"})

    assert exc.value.existing_id == first.id
    assert db_session.query(Word).count() == 1


def test_unique_index_folds_non_ascii_case(store, db_session):
    winner = create_word(store, {"word": "Éxito"})

    with pytest.raises(Conflict) as exc:
        store.insert_word({"word": "éxito", "relevance": "medium", "review_count": 0})

    assert exc.value.existing_id == winner.id
