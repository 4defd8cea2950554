from __future__ import annotations

import logging
import sqlite3
import threading
import time
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Union

from db.errors import NotFound, StorageError
from models.person_record import PERSON_FIELDS, NewPerson, PersonRecord
from services.search_query import SELECT_PEOPLE_SQL, build_search_sql, resolve_search_field
from utils.store_trace import log_op


PersonInput = Union[NewPerson, Mapping[str, Any]]

# SQLite INTEGER is a signed 64-bit value; no stored id can lie outside it.
_SQLITE_INT_MIN = -(2 ** 63)
_SQLITE_INT_MAX = 2 ** 63 - 1


def _row_to_person(row: Sequence[Any]) -> PersonRecord:
    data = {"id": row[0]}
    for idx, key in enumerate(PERSON_FIELDS, start=1):
        data[key] = row[idx]
    return PersonRecord(**data)


def _id_in_range(person_id: int) -> bool:
    return _SQLITE_INT_MIN <= person_id <= _SQLITE_INT_MAX


def _as_new_person(person: PersonInput) -> NewPerson:
    if isinstance(person, NewPerson):
        return person
    return NewPerson.model_validate(dict(person))


class PeopleRepo:
    """CRUD and substring search over the people table.

    Owns the connection it is given; all access goes through one lock so a
    single operation runs against the handle at a time.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self._lock = threading.Lock()

    @contextmanager
    def _guarded(self, op: str) -> Iterator[sqlite3.Cursor]:
        started = time.monotonic()
        with self._lock:
            try:
                yield self.conn.cursor()
            except (sqlite3.Error, UnicodeError) as e:
                # UnicodeError: text the engine cannot encode (e.g. lone surrogates)
                try:
                    self.conn.rollback()
                except sqlite3.Error:
                    pass
                logging.error(
                    f"people.{op} failed: {e}",
                    extra={"op": op, "status": "error", "error": str(e)},
                )
                raise StorageError(str(e)) from e
            finally:
                duration_ms = int((time.monotonic() - started) * 1000)
                logging.debug(f"people.{op}", extra={"op": op, "duration_ms": duration_ms})

    def list_all(self) -> List[PersonRecord]:
        """Return every person in storage order."""
        with self._guarded("list_all") as cur:
            cur.execute(SELECT_PEOPLE_SQL)
            rows = cur.fetchall()
        return [_row_to_person(r) for r in rows]

    def get(self, person_id: int) -> PersonRecord:
        """Return the person with this id or raise NotFound."""
        if not _id_in_range(person_id):
            raise NotFound(person_id)
        with self._guarded("get") as cur:
            cur.execute(f"{SELECT_PEOPLE_SQL} WHERE id = ?", (person_id,))
            row = cur.fetchone()
        if row is None:
            raise NotFound(person_id)
        return _row_to_person(row)

    def search(self, query: Optional[str], field: Optional[str] = "all") -> List[PersonRecord]:
        """Case-insensitive substring search on one column, or on all of them.

        Unknown selectors fall back to "all".
        """
        sql, params = build_search_sql(query, field)
        with self._guarded("search") as cur:
            cur.execute(sql, params)
            rows = cur.fetchall()
        logging.debug(
            f"Search field={resolve_search_field(field).value} matched {len(rows)} people",
            extra={"op": "search", "status": "ok"},
        )
        return [_row_to_person(r) for r in rows]

    def create(self, new_person: PersonInput) -> int:
        """Insert a person; returns the assigned id."""
        person = _as_new_person(new_person)
        placeholders = ", ".join(["?" for _ in PERSON_FIELDS])
        sql = f"INSERT INTO people ({', '.join(PERSON_FIELDS)}) VALUES ({placeholders})"
        started = time.monotonic()
        with self._guarded("create") as cur:
            cur.execute(sql, person.to_row())
            self.conn.commit()
            person_id = int(cur.lastrowid)
        log_op(op="create", person_id=person_id, rows_affected=1, duration_ms=int((time.monotonic() - started) * 1000))
        return person_id

    def update(self, person_id: int, new_person: PersonInput) -> None:
        """Overwrite every field of the person; fields left out are cleared.

        A missing id is not an error: zero rows are updated.
        """
        person = _as_new_person(new_person)
        set_clause = ", ".join([f"{col} = ?" for col in PERSON_FIELDS])
        sql = f"UPDATE people SET {set_clause} WHERE id = ?"
        started = time.monotonic()
        affected = 0
        if _id_in_range(person_id):
            with self._guarded("update") as cur:
                cur.execute(sql, (*person.to_row(), person_id))
                self.conn.commit()
                affected = cur.rowcount
        if affected == 0:
            logging.warning(
                f"Update matched no person with id={person_id}",
                extra={"op": "update", "status": "noop", "person_id": person_id},
            )
        log_op(op="update", person_id=person_id, rows_affected=affected, duration_ms=int((time.monotonic() - started) * 1000))

    def delete(self, person_id: int) -> None:
        """Hard-delete a person. A missing id is not an error."""
        started = time.monotonic()
        affected = 0
        if _id_in_range(person_id):
            with self._guarded("delete") as cur:
                cur.execute("DELETE FROM people WHERE id = ?", (person_id,))
                self.conn.commit()
                affected = cur.rowcount
        if affected == 0:
            logging.warning(
                f"Delete matched no person with id={person_id}",
                extra={"op": "delete", "status": "noop", "person_id": person_id},
            )
        log_op(op="delete", person_id=person_id, rows_affected=affected, duration_ms=int((time.monotonic() - started) * 1000))
