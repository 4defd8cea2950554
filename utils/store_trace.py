from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


def _ensure_parent_dir(path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass


def log_op(
    *,
    op: str,
    person_id: Optional[int],
    status: str = "ok",
    duration_ms: Optional[int] = None,
    rows_affected: Optional[int] = None,
    error: Optional[str] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Append a single JSON line describing a store mutation if tracing is enabled.

    Controlled by STORE_TRACE / STORE_TRACE_PATH in config/settings.py
    """
    from config.settings import get_settings
    # Tests may monkeypatch env between calls
    get_settings.cache_clear()
    settings = get_settings()
    if not settings.store_trace:
        return

    log_path = Path(settings.store_trace_path)
    _ensure_parent_dir(log_path)

    payload: Dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "op": op,
        "person_id": person_id,
        "status": status,
        "duration_ms": duration_ms,
        "rows_affected": rows_affected,
        "error": error,
    }
    run_id = os.getenv("RUN_ID")
    if run_id:
        payload["run_id"] = run_id

    if extras:
        payload["extras"] = extras

    try:
        with log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(payload, ensure_ascii=False) + "\n")
    except OSError:
        # Never break the store on trace failures
        return
