from __future__ import annotations

import pytest

from services.search_query import (
    ALL_SEARCH_COLUMNS,
    SearchField,
    build_like_pattern,
    build_search_sql,
    resolve_search_field,
)


@pytest.mark.parametrize("value,expected", [
    ("name", SearchField.NAME),
    ("location", SearchField.LOCATION),
    ("all", SearchField.ALL),
    ("phone", SearchField.ALL),
    ("bogus", SearchField.ALL),
    ("", SearchField.ALL),
    (None, SearchField.ALL),
])
def test_resolve_search_field_fails_open(value, expected):
    assert resolve_search_field(value) is expected


def test_like_pattern_wraps_and_escapes():
    assert build_like_pattern("ada") == "%ada%"
    assert build_like_pattern("") == "%%"
    assert build_like_pattern(None) == "%%"
    assert build_like_pattern("50%_a\\b") == "%50\\%\\_a\\\\b%"


def test_single_field_sql_binds_once():
    sql, params = build_search_sql("ada", "location")
    assert sql.endswith("WHERE location_met LIKE ? ESCAPE '\\'")
    assert params == ("%ada%",)


def test_all_fields_sql_binds_every_column():
    sql, params = build_search_sql("ada", "all")
    for col in ALL_SEARCH_COLUMNS:
        assert f"{col} LIKE ?" in sql
    assert sql.count(" OR ") == len(ALL_SEARCH_COLUMNS) - 1
    assert params == ("%ada%",) * 9


def test_unknown_field_sql_equals_all():
    assert build_search_sql("q", "nope") == build_search_sql("q", "all")
