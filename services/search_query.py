from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

from models.person_record import PERSON_FIELDS


class SearchField(str, Enum):
    NAME = "name"
    EMAIL = "email"
    COMPANY = "company"
    TITLE = "title"
    LOCATION = "location"
    NOTES = "notes"
    ALL = "all"


# Selector -> column for single-field searches.
FIELD_COLUMNS: Dict[SearchField, str] = {
    SearchField.NAME: "name",
    SearchField.EMAIL: "email",
    SearchField.COMPANY: "company",
    SearchField.TITLE: "title",
    SearchField.LOCATION: "location_met",
    SearchField.NOTES: "notes",
}

# Columns ORed together for the "all" selector. phone/tags/linkedin are only reachable here.
ALL_SEARCH_COLUMNS: List[str] = [
    "name",
    "email",
    "company",
    "title",
    "location_met",
    "notes",
    "phone",
    "tags",
    "linkedin",
]

SELECT_PEOPLE_SQL = f"SELECT id, {', '.join(PERSON_FIELDS)} FROM people"

_LIKE_ESCAPE = "\\"


def resolve_search_field(value: Optional[str]) -> SearchField:
    """Map a selector string to a SearchField; anything unrecognized means ALL."""
    try:
        return SearchField(value)
    except ValueError:
        return SearchField.ALL


def build_like_pattern(query: Optional[str]) -> str:
    """Wrap the query in wildcards, escaping LIKE metacharacters so it matches literally."""
    text = query or ""
    for ch in (_LIKE_ESCAPE, "%", "_"):
        text = text.replace(ch, _LIKE_ESCAPE + ch)
    return f"%{text}%"


def build_search_sql(query: Optional[str], field: Optional[str]) -> Tuple[str, Tuple[str, ...]]:
    """Return (sql, params) for a substring search of people.

    A recognized selector targets its single column; "all" (or an unknown
    selector) ORs the pattern across every searchable column, binding it once
    per placeholder.
    """
    selector = resolve_search_field(field)
    pattern = build_like_pattern(query)
    if selector is SearchField.ALL:
        columns = ALL_SEARCH_COLUMNS
    else:
        columns = [FIELD_COLUMNS[selector]]
    where_sql = " OR ".join(f"{col} LIKE ? ESCAPE '{_LIKE_ESCAPE}'" for col in columns)
    sql = f"{SELECT_PEOPLE_SQL} WHERE {where_sql}"
    return sql, tuple(pattern for _ in columns)
