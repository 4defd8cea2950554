from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _as_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Storage
    app_data_dir: str
    db_path: str
    sqlite_timeout_seconds: float

    # Logging
    log_level: str

    # Mutation trace (JSONL)
    store_trace: bool = False
    store_trace_path: str = "logs/store_ops.jsonl"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    app_data_dir = os.getenv("APP_DATA_DIR", "data")
    db_path = os.getenv("DB_PATH") or str(Path(app_data_dir) / "people.db")
    return Settings(
        app_data_dir=app_data_dir,
        db_path=db_path,
        sqlite_timeout_seconds=float(os.getenv("SQLITE_TIMEOUT", "30")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        store_trace=_as_bool(os.getenv("STORE_TRACE", "false")),
        store_trace_path=os.getenv("STORE_TRACE_PATH", "logs/store_ops.jsonl"),
    )
