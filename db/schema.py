from __future__ import annotations

import logging
import sqlite3

from db.errors import SchemaError


PEOPLE_TABLE_SQL = (
    "CREATE TABLE IF NOT EXISTS people (\n"
    "  id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
    "  name TEXT NOT NULL,\n"
    "  title TEXT,\n"
    "  company TEXT,\n"
    "  email TEXT,\n"
    "  phone TEXT,\n"
    "  tags TEXT,\n"
    "  notes TEXT,\n"
    "  date_met TEXT,\n"
    "  location_met TEXT,\n"
    "  linkedin TEXT\n"
    ")"
)


def ensure_schema(conn: sqlite3.Connection) -> None:
    """Create the people table if it does not exist (idempotent)."""
    try:
        conn.execute(PEOPLE_TABLE_SQL)
        conn.commit()
    except sqlite3.Error as e:
        logging.error(f"Schema creation failed: {e}", extra={"op": "ensure_schema", "status": "error", "error": str(e)})
        raise SchemaError(f"Failed to create people table: {e}") from e
