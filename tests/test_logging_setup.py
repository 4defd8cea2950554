from __future__ import annotations

import logging

from utils.logging_setup import SafeExtraFormatter


def _format(extra=None) -> str:
    formatter = SafeExtraFormatter(fmt="%(message)s op=%(op)s person_id=%(person_id)s status=%(status)s")
    record = logging.LogRecord("people", logging.WARNING, __file__, 1, "Delete matched nothing", None, None)
    for key, value in (extra or {}).items():
        setattr(record, key, value)
    return formatter.format(record)


def test_formatter_fills_missing_extras():
    assert _format() == "Delete matched nothing op=- person_id=- status=-"


def test_formatter_keeps_supplied_extras():
    out = _format({"op": "delete", "person_id": 7, "status": "noop"})
    assert out == "Delete matched nothing op=delete person_id=7 status=noop"
