import json
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, field_serializer

from ..core.normalize import to_utc_iso
from ..core.reviews import record_review
from ..core.store import WordStore, get_store

router = APIRouter(prefix="/reviews", tags=["reviews"])


class ReviewIncrementResponse(BaseModel):
    ok: bool
    id: str
    reviewCount: int
    lastReviewedAt: datetime

    @field_serializer("lastReviewedAt")
    def _utc(self, value: datetime) -> str:
        return to_utc_iso(value)


async def read_json_lenient(request: Request) -> Any:
    """Body as JSON, or ``{}`` when it is missing or doesn't parse."""
    raw = await request.body()
    try:
        return json.loads(raw) if raw.strip() else {}
    except ValueError:
        return {}


@router.post("/{word_id}/increment", response_model=ReviewIncrementResponse)
def increment_review(
    word_id: str,
    payload: Any = Depends(read_json_lenient),
    store: WordStore = Depends(get_store),
):
    outcome = record_review(store, word_id, payload)
    return ReviewIncrementResponse(
        ok=True,
        id=outcome.id,
        reviewCount=outcome.review_count,
        lastReviewedAt=outcome.last_review,
    )
