from __future__ import annotations

from pydantic import BaseModel, ConfigDict


# Column order for inserts/updates (everything except the id).
PERSON_FIELDS: list[str] = [
    "name",
    "title",
    "company",
    "email",
    "phone",
    "tags",
    "notes",
    "date_met",
    "location_met",
    "linkedin",
]


class NewPerson(BaseModel):
    """Create/update payload: every person field except the store-assigned id."""

    name: str
    title: str | None = None
    company: str | None = None
    email: str | None = None
    phone: str | None = None
    tags: str | None = None  # free text, delimiter is up to the caller
    notes: str | None = None
    date_met: str | None = None
    location_met: str | None = None
    linkedin: str | None = None

    model_config = ConfigDict(extra="ignore")

    def to_row(self) -> tuple:
        return tuple(getattr(self, f) for f in PERSON_FIELDS)


class PersonRecord(NewPerson):
    """App/DB record shape: a stored person row."""

    id: int
