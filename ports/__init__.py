from .repos import PeopleRepoPort

__all__ = [
    "PeopleRepoPort",
]
