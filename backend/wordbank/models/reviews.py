from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from ..core.database import Base


class ReviewEvent(Base):
    """One review attempt against a word. Append-only."""

    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    word_id = Column(String(36), ForeignKey("words.id"), nullable=False, index=True)
    correct = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)
