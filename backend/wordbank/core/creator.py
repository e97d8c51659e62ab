from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..models import DEFAULT_RELEVANCE, Word
from .errors import Conflict, ValidationFailure
from .normalize import clean_text, normalize_relevance, parse_datetime
from .store import WordStore

logger = logging.getLogger(__name__)


class WordCreate(BaseModel):
    """Incoming word payload after trimming and coercion."""

    model_config = ConfigDict(extra="ignore")

    word: str
    description: Optional[str] = None
    example: Optional[str] = None
    type: Optional[str] = None
    conjugations: Optional[str] = None
    collocations: Optional[str] = None
    relevance: str = DEFAULT_RELEVANCE
    last_review: Optional[datetime] = None

    @field_validator(
        "word", "description", "example", "type", "conjugations", "collocations",
        mode="before",
    )
    @classmethod
    def _trim(cls, value: Any) -> Optional[str]:
        return clean_text(value)

    @field_validator("relevance", mode="before")
    @classmethod
    def _relevance(cls, value: Any) -> str:
        return normalize_relevance(value)

    @field_validator("last_review", mode="before")
    @classmethod
    def _last_review(cls, value: Any) -> Optional[datetime]:
        # unparseable dates are dropped, not rejected
        return parse_datetime(value)


def parse_word_payload(payload: Any) -> WordCreate:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationFailure("invalid JSON body")

    try:
        return WordCreate.model_validate(payload)
    except ValidationError:
        # every field but ``word`` is coerced, so only a missing word can fail
        raise ValidationFailure("word is required")


def create_word(store: WordStore, payload: Any) -> Word:
    data = parse_word_payload(payload)

    existing = store.find_word(data.word)
    if existing:
        raise Conflict("already exists", existing.id)

    fields = data.model_dump()
    fields["review_count"] = 0
    w = store.insert_word(fields)
    logger.info("created word %r (%s)", w.word, w.id)
    return w
