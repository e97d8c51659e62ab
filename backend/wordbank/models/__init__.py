from .words import Word, RELEVANCE_LEVELS, DEFAULT_RELEVANCE
from .reviews import ReviewEvent


__all__ = [
    "Word",
    "ReviewEvent",
    "RELEVANCE_LEVELS",
    "DEFAULT_RELEVANCE",
]
