from __future__ import annotations

from typing import Optional


class StoreError(Exception):
    """Base class for failures raised by the people store."""


class NotFound(StoreError):
    """No person row exists for the requested id."""

    def __init__(self, person_id: int, message: Optional[str] = None):
        self.person_id = person_id
        super().__init__(message or f"Person not found: id={person_id}")


class StorageError(StoreError):
    """Underlying SQLite failure; carries the engine's message."""


class SchemaError(StoreError):
    """The people table could not be created at startup."""
