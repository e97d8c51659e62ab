"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os
from datetime import datetime, timedelta

import pytest

# Settings are read at import time, so configure them before importing the app.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["X_API_KEY"] = "test-key"

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from wordbank.core.database import Base, SessionLocal, engine as app_engine, get_db
from wordbank.core.store import WordStore
from wordbank.main import app
from wordbank.models import Word

API_KEY = "test-key"


@pytest.fixture()
def engine():
    Base.metadata.create_all(bind=app_engine)
    try:
        yield app_engine
    finally:
        Base.metadata.drop_all(bind=app_engine)


@pytest.fixture()
def db_session(engine) -> Session:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db_session) -> WordStore:
    return WordStore(db_session)


@pytest.fixture()
def client(db_session):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    return {"x-api-key": API_KEY}


@pytest.fixture()
def add_word(db_session):
    """Insert a word directly, with created_at spaced one minute apart per call."""
    base = datetime(2024, 1, 1, 12, 0, 0)
    counter = {"n": 0}

    def _add(word: str, **kwargs) -> Word:
        counter["n"] += 1
        defaults = {
            "word": word,
            "relevance": "medium",
            "review_count": 0,
            "created_at": base + timedelta(minutes=counter["n"]),
        }
        defaults.update(kwargs)
        w = Word(**defaults)
        db_session.add(w)
        db_session.commit()
        db_session.refresh(w)
        return w

    return _add
