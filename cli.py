import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from config.settings import get_settings
from db import schema
from db.connection import open_database
from db.errors import NotFound, StoreError
from db.repos.people_repo import PeopleRepo
from models.person_record import PERSON_FIELDS
from services.reporting import print_people
from services.search_query import SearchField
from utils.logging_setup import init_logging


class InvalidPayload(Exception):
    """Person input that is not a JSON object."""


def _open_repo(args) -> PeopleRepo:
    settings = get_settings()
    conn = open_database(args.db, timeout=settings.sqlite_timeout_seconds)
    try:
        schema.ensure_schema(conn)
    except StoreError:
        conn.close()
        raise
    return PeopleRepo(conn)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _person_payload(args) -> Dict[str, Any]:
    """Collect person fields from --input JSON and/or per-field flags (flags win)."""
    payload: Dict[str, Any] = {}
    if getattr(args, "input", None):
        data = json.loads(Path(args.input).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise InvalidPayload("Input JSON must be an object")
        payload.update(data)
    for key in PERSON_FIELDS:
        value = getattr(args, key, None)
        if value is not None:
            payload[key] = value
    return payload


def cmd_bootstrap(args):
    conn = open_database(args.db, timeout=get_settings().sqlite_timeout_seconds)
    try:
        schema.ensure_schema(conn)
    finally:
        conn.close()
    print("Schema ready")


def cmd_list(args):
    repo = _open_repo(args)
    try:
        people = repo.list_all()
    finally:
        repo.conn.close()
    if args.table:
        print_people(people)
    else:
        _print_json([p.model_dump() for p in people])


def cmd_get(args):
    repo = _open_repo(args)
    try:
        person = repo.get(args.id)
    finally:
        repo.conn.close()
    _print_json(person.model_dump())


def cmd_search(args):
    repo = _open_repo(args)
    try:
        people = repo.search(args.query, args.field)
    finally:
        repo.conn.close()
    if args.table:
        print_people(people)
    else:
        _print_json([p.model_dump() for p in people])


def cmd_add(args):
    payload = _person_payload(args)
    repo = _open_repo(args)
    try:
        person_id = repo.create(payload)
    finally:
        repo.conn.close()
    _print_json({"id": person_id})


def cmd_update(args):
    # Full overwrite: fields not given are cleared
    payload = _person_payload(args)
    repo = _open_repo(args)
    try:
        repo.update(args.id, payload)
    finally:
        repo.conn.close()
    print(f"Updated person id={args.id}")


def cmd_delete(args):
    repo = _open_repo(args)
    try:
        repo.delete(args.id)
    finally:
        repo.conn.close()
    print(f"Deleted person id={args.id}")


def _add_person_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--input", help="Path to JSON file with person fields (object)")
    p.add_argument("--name", help="Full name (required unless given in --input)")
    p.add_argument("--title")
    p.add_argument("--company")
    p.add_argument("--email")
    p.add_argument("--phone")
    p.add_argument("--tags", help="Free-text tags, e.g. 'mentor; ml'")
    p.add_argument("--notes")
    p.add_argument("--date-met", dest="date_met")
    p.add_argument("--location-met", dest="location_met")
    p.add_argument("--linkedin")


def main():
    settings = get_settings()
    init_logging(settings.log_level)
    parser = argparse.ArgumentParser(description="People store CLI")
    parser.add_argument("--db", default=settings.db_path, help="Path to SQLite DB (default from settings)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_boot = sub.add_parser("bootstrap", help="Create the people table")
    p_boot.set_defaults(func=cmd_bootstrap)

    p_list = sub.add_parser("list", help="List all people")
    p_list.add_argument("--table", action="store_true", help="Print a text table instead of JSON")
    p_list.set_defaults(func=cmd_list)

    p_get = sub.add_parser("get", help="Show one person by id")
    p_get.add_argument("--id", type=int, required=True)
    p_get.set_defaults(func=cmd_get)

    p_search = sub.add_parser("search", help="Substring search on one field or all fields")
    p_search.add_argument("--query", "-q", default="", help="Text to look for (case-insensitive)")
    p_search.add_argument(
        "--field", "-f", default=SearchField.ALL.value,
        help="One of: " + ", ".join(f.value for f in SearchField) + " (unknown values search all fields)",
    )
    p_search.add_argument("--table", action="store_true", help="Print a text table instead of JSON")
    p_search.set_defaults(func=cmd_search)

    p_add = sub.add_parser("add", help="Create a person")
    _add_person_flags(p_add)
    p_add.set_defaults(func=cmd_add)

    p_upd = sub.add_parser("update", help="Replace all fields of a person")
    p_upd.add_argument("--id", type=int, required=True)
    _add_person_flags(p_upd)
    p_upd.set_defaults(func=cmd_update)

    p_del = sub.add_parser("delete", help="Delete a person by id")
    p_del.add_argument("--id", type=int, required=True)
    p_del.set_defaults(func=cmd_delete)

    args = parser.parse_args()
    try:
        args.func(args)
    except NotFound as e:
        print(f"Person not found: id={e.person_id}", file=sys.stderr)
        sys.exit(1)
    except (json.JSONDecodeError, ValidationError, InvalidPayload) as e:
        print(f"Invalid person: {e}", file=sys.stderr)
        sys.exit(2)
    except StoreError as e:
        print(f"Storage error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
