from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from .errors import ValidationFailure
from .normalize import coerce_bool
from .store import ReviewOutcome, WordStore

logger = logging.getLogger(__name__)


def read_correct_flag(payload: Any) -> bool:
    """Missing or malformed ``correct`` counts as a wrong answer."""
    if not isinstance(payload, dict):
        return False
    return coerce_bool(payload.get("correct"))


def record_review(
    store: WordStore,
    word_id: Optional[str],
    payload: Any,
    now: Optional[datetime] = None,
) -> ReviewOutcome:
    word_id = (word_id or "").strip()
    if not word_id:
        raise ValidationFailure("missing id in path")

    correct = read_correct_flag(payload)
    outcome = store.record_review(word_id, correct, now or datetime.utcnow())
    logger.info(
        "review recorded for %s (correct=%s, count=%s)",
        outcome.id,
        correct,
        outcome.review_count,
    )
    return outcome
