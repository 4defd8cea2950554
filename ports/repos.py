from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol, Union, runtime_checkable

from models.person_record import NewPerson, PersonRecord


@runtime_checkable
class PeopleRepoPort(Protocol):
    def list_all(self) -> List[PersonRecord]:
        ...

    def get(self, person_id: int) -> PersonRecord:
        ...

    def search(self, query: Optional[str], field: Optional[str] = "all") -> List[PersonRecord]:
        ...

    def create(self, new_person: Union[NewPerson, Mapping[str, Any]]) -> int:
        ...

    def update(self, person_id: int, new_person: Union[NewPerson, Mapping[str, Any]]) -> None:
        ...

    def delete(self, person_id: int) -> None:
        ...
