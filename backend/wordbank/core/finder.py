from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from ..models import Word
from .errors import StorageFailure
from .normalize import clamp_limit, clean_filter, clean_query
from .store import SearchFilters, WordStore

logger = logging.getLogger(__name__)


class SearchStrategy(str, enum.Enum):
    RANKED = "ranked"
    FALLBACK = "fallback"


@dataclass
class SearchResult:
    items: List[Word]
    total: int
    strategy: SearchStrategy


def build_filters(type_: Any = None, relevance: Any = None) -> SearchFilters:
    return SearchFilters(type=clean_filter(type_), relevance=clean_filter(relevance))


def find_words(
    store: WordStore,
    q: Any = "",
    type_: Any = None,
    relevance: Any = None,
    limit: Any = None,
) -> SearchResult:
    """
    Ranked full-text search when there is a query, pattern match otherwise.
    A ranked search that errors falls back to the pattern match; one that
    merely finds nothing is final.
    """
    query = clean_query(q)
    bound = clamp_limit(limit)
    filters = build_filters(type_, relevance)

    if query:
        try:
            rows = store.ranked_search(query, filters, bound)
        except StorageFailure as exc:
            logger.warning("ranked search failed, using pattern match: %s", exc.message)
        else:
            return SearchResult(items=rows, total=len(rows), strategy=SearchStrategy.RANKED)

    rows, total = store.list_filtered(query, filters, bound)
    return SearchResult(items=rows, total=total, strategy=SearchStrategy.FALLBACK)


def count_words(store: WordStore, q: Any = "", type_: Any = None, relevance: Any = None) -> int:
    return store.count_filtered(clean_query(q), build_filters(type_, relevance))


def first_word(store: WordStore) -> Optional[Word]:
    return store.first_word()
