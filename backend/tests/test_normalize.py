from datetime import datetime

import pytest

from wordbank.core.normalize import (
    clamp_limit,
    clean_query,
    clean_text,
    coerce_bool,
    escape_like,
    normalize_relevance,
    parse_datetime,
    to_utc_iso,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("9999", 100),
        ("-5", 1),
        ("abc", 20),
        ("0", 1),
        ("12abc", 12),
        (" 7 ", 7),
        ("", 20),
        (None, 20),
        ("000005", 5),
        ("9" * 5000, 100),
        ("-" + "9" * 5000, 1),
    ],
)
def test_clamp_limit(raw, expected):
    assert clamp_limit(raw) == expected


def test_clean_query_strips_one_pair_of_quotes():
    assert clean_query('"run"') == "run"
    assert clean_query('  "run"  ') == "run"
    assert clean_query('""run""') == '"run"'
    assert clean_query('"') == '"'
    assert clean_query('""') == ""
    assert clean_query('run "fast"') == 'run "fast"'


def test_clean_text():
    assert clean_text("  hola ") == "hola"
    assert clean_text("   ") is None
    assert clean_text(None) is None
    assert clean_text(42) == "42"
    assert clean_text({"a": 1}) is None


def test_normalize_relevance():
    assert normalize_relevance("HIGH") == "high"
    assert normalize_relevance(" Low ") == "low"
    assert normalize_relevance("urgent") == "medium"
    assert normalize_relevance(None) == "medium"


def test_parse_datetime_converts_to_naive_utc():
    assert parse_datetime("2024-03-01T10:00:00+02:00") == datetime(2024, 3, 1, 8, 0, 0)
    assert parse_datetime("2024-03-01T10:00:00") == datetime(2024, 3, 1, 10, 0, 0)


def test_parse_datetime_drops_garbage():
    assert parse_datetime("not a date") is None
    assert parse_datetime("") is None
    assert parse_datetime(12) is None


def test_escape_like_escapes_commas_and_wildcards():
    assert escape_like("a,b") == "a\\,b"
    assert escape_like("50%_off") == "50\\%\\_off"
    assert escape_like("back\\slash") == "back\\\\slash"


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, True),
        (False, False),
        (1, True),
        (0, False),
        ("true", True),
        ("YES", True),
        ("false", False),
        ("maybe", False),
        (None, False),
        ([True], False),
    ],
)
def test_coerce_bool(value, expected):
    assert coerce_bool(value) is expected


def test_to_utc_iso_marks_utc():
    assert to_utc_iso(datetime(2024, 6, 1, 8, 0, 0)) == "2024-06-01T08:00:00.000Z"
    assert to_utc_iso(parse_datetime("2024-06-01T10:00:00+02:00")) == "2024-06-01T08:00:00.000Z"
    assert to_utc_iso(None) is None
