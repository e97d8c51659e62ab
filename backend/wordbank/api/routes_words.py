import json
from datetime import datetime
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import BaseModel, field_serializer

from ..core.creator import create_word
from ..core.errors import ValidationFailure
from ..core.finder import count_words, find_words, first_word
from ..core.normalize import to_utc_iso
from ..core.store import WordStore, get_store

router = APIRouter(prefix="/words", tags=["words"])

LIST_CACHE_CONTROL = "s-maxage=60, stale-while-revalidate=600"
CREATE_CACHE_CONTROL = "no-store"
STRATEGY_HEADER = "X-Search-Strategy"


# ---------- Schemas ----------

class WordOut(BaseModel):
    id: str
    word: str
    description: Optional[str] = None
    example: Optional[str] = None
    type: Optional[str] = None
    relevance: str
    conjugations: Optional[str] = None
    collocations: Optional[str] = None
    review_count: int
    last_review: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_serializer("last_review", "created_at", "updated_at")
    def _utc(self, value: Optional[datetime]) -> Optional[str]:
        return to_utc_iso(value)


class WordCreated(BaseModel):
    item: WordOut


class WordList(BaseModel):
    items: List[WordOut]
    nbHits: int


class WordCount(BaseModel):
    total: int


class FirstWordOut(BaseModel):
    id: str
    word: str
    createdAt: datetime

    @field_serializer("createdAt")
    def _utc(self, value: datetime) -> str:
        return to_utc_iso(value)


# ---------- Helpers ----------

async def read_json_object(request: Request) -> Any:
    """Request body as parsed JSON; an empty body reads as ``{}``."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationFailure("invalid JSON body")


# ---------- Endpoints ----------

@router.post("", response_model=WordCreated, status_code=status.HTTP_201_CREATED)
def create_word_endpoint(
    response: Response,
    payload: Any = Depends(read_json_object),
    store: WordStore = Depends(get_store),
):
    w = create_word(store, payload)
    response.headers["Cache-Control"] = CREATE_CACHE_CONTROL
    return WordCreated(item=WordOut.model_validate(w))


@router.get("", response_model=WordList)
def list_words(
    response: Response,
    q: str = Query("", description="Free-text query; one pair of wrapping quotes is ignored"),
    type_: str = Query("", alias="type"),
    relevance: str = Query(""),
    limit: str = Query("20", description="Clamped to 1..100, defaults to 20"),
    store: WordStore = Depends(get_store),
):
    result = find_words(store, q=q, type_=type_, relevance=relevance, limit=limit)
    response.headers["Cache-Control"] = LIST_CACHE_CONTROL
    response.headers[STRATEGY_HEADER] = result.strategy.value
    return WordList(
        items=[WordOut.model_validate(w) for w in result.items],
        nbHits=result.total,
    )


@router.get("/count", response_model=WordCount)
def count_words_endpoint(
    response: Response,
    q: str = Query(""),
    type_: str = Query("", alias="type"),
    relevance: str = Query(""),
    store: WordStore = Depends(get_store),
):
    total = count_words(store, q=q, type_=type_, relevance=relevance)
    response.headers["Cache-Control"] = LIST_CACHE_CONTROL
    return WordCount(total=total)


@router.get("/first", response_model=Optional[FirstWordOut])
def first_word_endpoint(response: Response, store: WordStore = Depends(get_store)):
    w = first_word(store)
    response.headers["Cache-Control"] = LIST_CACHE_CONTROL
    if not w:
        return None
    return FirstWordOut(id=w.id, word=w.word, createdAt=w.created_at)
