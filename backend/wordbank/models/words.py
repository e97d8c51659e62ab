import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, func

from ..core.database import Base

RELEVANCE_LEVELS = ("low", "medium", "high")
DEFAULT_RELEVANCE = "medium"


def _new_id() -> str:
    return str(uuid.uuid4())


class Word(Base):
    __tablename__ = "words"

    id = Column(String(36), primary_key=True, default=_new_id)
    word = Column(String, nullable=False)

    description = Column(Text, nullable=True)
    example = Column(Text, nullable=True)
    type = Column(String, nullable=True)
    conjugations = Column(Text, nullable=True)
    collocations = Column(Text, nullable=True)

    relevance = Column(String, nullable=False, default=DEFAULT_RELEVANCE)  # low | medium | high

    review_count = Column(Integer, nullable=False, default=0)
    last_review = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# Authoritative case-insensitive uniqueness; the creator's lookup is only a pre-check
Index("uq_words_word_lower", func.lower(Word.word), unique=True)
