from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from db.errors import StorageError


def get_connection(db_path: str, timeout: Optional[float] = 30.0) -> sqlite3.Connection:
    """Open a SQLite connection with sane pragmas for local use.

    - WAL journal for fewer writer blocks
    - NORMAL synchronous for performance
    - foreign_keys ON to enforce integrity

    The handle may be shared across threads; the repo serializes access to it.
    """
    conn = sqlite3.connect(db_path, timeout=timeout or 30.0, check_same_thread=False)
    # Pragmas
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    conn.execute("PRAGMA foreign_keys=ON;")
    return conn


def open_database(db_path: str, timeout: Optional[float] = 30.0) -> sqlite3.Connection:
    """Create the data directory if needed and open the database file."""
    try:
        Path(db_path).expanduser().parent.mkdir(parents=True, exist_ok=True)
        return get_connection(str(Path(db_path).expanduser()), timeout=timeout)
    except (OSError, sqlite3.Error) as e:
        raise StorageError(f"Failed to open database at {db_path}: {e}") from e
