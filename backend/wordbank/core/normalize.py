"""Normalization rules shared by the word and review handlers."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from ..models import DEFAULT_RELEVANCE, RELEVANCE_LEVELS

DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 100

_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")
_LIKE_SPECIALS = ("\\", "%", "_", ",")
_TRUTHY_STRINGS = {"true", "1", "yes", "on"}

_datetime_adapter = TypeAdapter(datetime)


def clean_text(value: Any) -> Optional[str]:
    """Trim a free-text field; empty or non-scalar input becomes ``None``."""
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return None
    if isinstance(value, bool):
        value = "true" if value else "false"
    text = str(value).strip()
    return text or None


def normalize_relevance(value: Any) -> str:
    text = (clean_text(value) or "").lower()
    return text if text in RELEVANCE_LEVELS else DEFAULT_RELEVANCE


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO date-time string into naive UTC, or ``None`` if it doesn't parse."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = _datetime_adapter.validate_python(value.strip())
        except ValidationError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def to_utc_iso(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 with millisecond precision and a ``Z`` suffix; naive values are UTC."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


def clean_query(raw: Any) -> str:
    """Trim the query and strip a single pair of wrapping double quotes."""
    text = str(raw or "").strip()
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        text = text[1:-1]
    return text


def clamp_limit(raw: Any) -> int:
    match = _LEADING_INT.match(str(raw if raw is not None else ""))
    if not match:
        return DEFAULT_LIMIT

    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > len(str(MAX_LIMIT)):
        # out of range either way; skip int() on arbitrarily long input
        return MIN_LIMIT if sign == "-" else MAX_LIMIT

    limit = int(sign + digits)
    return min(max(limit, MIN_LIMIT), MAX_LIMIT)


def clean_filter(raw: Any) -> Optional[str]:
    return clean_text(raw)


def escape_like(text: str, escape: str = "\\") -> str:
    """Escape LIKE metacharacters and commas so the query matches literally."""
    for char in _LIKE_SPECIALS:
        text = text.replace(char, escape + char)
    return text


def coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_STRINGS
    return False
