"""SQLAlchemy-backed persistence for words and review events.

``WordStore`` is the only place that talks to the database. Every SQLAlchemy
error is rolled back and re-raised as :class:`StorageFailure` carrying the
driver's message, so handlers never see a raw ``SQLAlchemyError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Depends
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..models import ReviewEvent, Word
from .database import get_db
from .errors import Conflict, NotFound, StorageFailure
from .normalize import escape_like

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"
TS_CONFIG = "simple"


@dataclass(frozen=True)
class SearchFilters:
    type: Optional[str] = None
    relevance: Optional[str] = None


@dataclass(frozen=True)
class ReviewOutcome:
    id: str
    review_count: int
    last_review: datetime


def _storage_failure(exc: SQLAlchemyError) -> StorageFailure:
    orig = getattr(exc, "orig", None)
    return StorageFailure(str(orig) if orig is not None else str(exc))


class WordStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    # ---------- Lookups ----------

    def get_word(self, word_id: str) -> Optional[Word]:
        try:
            return self.db.query(Word).filter(Word.id == word_id).first()
        except SQLAlchemyError as exc:
            raise self._fail(exc)

    def find_word(self, value: str) -> Optional[Word]:
        """Case-insensitive exact match on ``word``."""
        try:
            return (
                self.db.query(Word)
                .filter(func.lower(Word.word) == func.lower(value))
                .first()
            )
        except SQLAlchemyError as exc:
            raise self._fail(exc)

    def first_word(self) -> Optional[Word]:
        try:
            return self.db.query(Word).order_by(Word.created_at.asc()).first()
        except SQLAlchemyError as exc:
            raise self._fail(exc)

    # ---------- Writes ----------

    def insert_word(self, fields: Dict[str, Any]) -> Word:
        w = Word(**fields)
        try:
            self.db.add(w)
            self.db.commit()
        except IntegrityError:
            # lost a race against a concurrent insert of the same word
            self.db.rollback()
            existing = self.find_word(fields["word"])
            raise Conflict("already exists", existing.id if existing else None)
        except SQLAlchemyError as exc:
            raise self._fail(exc)

        self.db.refresh(w)
        return w

    def record_review(self, word_id: str, correct: bool, reviewed_at: datetime) -> ReviewOutcome:
        """Bump the counter and append one event, both in a single transaction."""
        try:
            exists = self.db.query(Word.id).filter(Word.id == word_id).first()
            if exists is None:
                raise NotFound("word not found")

            self.db.query(Word).filter(Word.id == word_id).update(
                {
                    Word.review_count: func.coalesce(Word.review_count, 0) + 1,
                    Word.last_review: reviewed_at,
                    Word.updated_at: reviewed_at,
                },
                synchronize_session=False,
            )
            self.db.add(ReviewEvent(word_id=word_id, correct=correct, created_at=reviewed_at))
            self.db.flush()

            row = (
                self.db.query(Word.id, Word.review_count, Word.last_review)
                .filter(Word.id == word_id)
                .one()
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail(exc)

        return ReviewOutcome(id=row.id, review_count=row.review_count, last_review=row.last_review)

    # ---------- Search ----------

    def ranked_search(self, query: str, filters: SearchFilters, limit: int) -> List[Word]:
        """Full-text search ordered by rank. Only PostgreSQL provides it."""
        dialect = self.db.get_bind().dialect.name
        if dialect != "postgresql":
            raise StorageFailure(f"ranked search is not supported by the {dialect} backend")

        try:
            return self.ranked_query(query, filters, limit).all()
        except SQLAlchemyError as exc:
            raise self._fail(exc)

    def ranked_query(self, query: str, filters: SearchFilters, limit: int) -> Query:
        document = func.to_tsvector(
            TS_CONFIG,
            func.coalesce(Word.word, "") + " " + func.coalesce(Word.description, ""),
        )
        ts_query = func.plainto_tsquery(TS_CONFIG, query)

        q = self._apply_filters(
            self.db.query(Word).filter(document.op("@@")(ts_query)),
            filters,
        )
        return (
            q.order_by(func.ts_rank(document, ts_query).desc(), Word.created_at.asc())
            .limit(limit)
        )

    def list_filtered(
        self, query: str, filters: SearchFilters, limit: int
    ) -> Tuple[List[Word], int]:
        """Substring match on word/description, oldest first, with the pre-limit total."""
        try:
            q = self._pattern_query(query, filters)
            total = q.count()
            rows = q.order_by(Word.created_at.asc()).limit(limit).all()
        except SQLAlchemyError as exc:
            raise self._fail(exc)
        return rows, total

    def count_filtered(self, query: str, filters: SearchFilters) -> int:
        try:
            return self._pattern_query(query, filters).count()
        except SQLAlchemyError as exc:
            raise self._fail(exc)

    # ---------- Helpers ----------

    def _pattern_query(self, query: str, filters: SearchFilters) -> Query:
        q = self.db.query(Word)
        if query:
            pattern = f"%{escape_like(query, LIKE_ESCAPE)}%"
            q = q.filter(
                or_(
                    Word.word.ilike(pattern, escape=LIKE_ESCAPE),
                    Word.description.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return self._apply_filters(q, filters)

    @staticmethod
    def _apply_filters(q: Query, filters: SearchFilters) -> Query:
        if filters.type:
            q = q.filter(Word.type == filters.type)
        if filters.relevance:
            q = q.filter(Word.relevance == filters.relevance)
        return q

    def _fail(self, exc: SQLAlchemyError) -> StorageFailure:
        self.db.rollback()
        failure = _storage_failure(exc)
        logger.error("storage error: %s", failure.message)
        return failure


def get_store(db: Session = Depends(get_db)) -> WordStore:
    return WordStore(db)
