from .person_record import NewPerson, PersonRecord, PERSON_FIELDS

__all__ = [
    "NewPerson",
    "PersonRecord",
    "PERSON_FIELDS",
]
