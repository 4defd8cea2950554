from __future__ import annotations

from typing import Iterable, List

from models.person_record import PersonRecord


TABLE_COLUMNS: List[str] = ["id", "name", "title", "company", "email", "phone", "location_met"]


def _cell(value) -> str:
    if value is None:
        return ""
    return str(value).replace("\n", " ")


def format_people_table(people: Iterable[PersonRecord], max_width: int = 30) -> str:
    """Render people as a fixed-width text table (long cells are truncated)."""
    rows = [[_cell(getattr(p, col))[:max_width] for col in TABLE_COLUMNS] for p in people]
    widths = [len(col) for col in TABLE_COLUMNS]
    for row in rows:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], len(value))
    header = "  ".join(col.ljust(widths[i]) for i, col in enumerate(TABLE_COLUMNS))
    lines = [header, "  ".join("-" * w for w in widths)]
    for row in rows:
        lines.append("  ".join(value.ljust(widths[i]) for i, value in enumerate(row)).rstrip())
    lines.append(f"({len(rows)} people)")
    return "\n".join(lines)


def print_people(people: Iterable[PersonRecord]) -> None:
    print(format_people_table(people))
