"""Persistence mirror interface shared by all backends."""

from typing import Protocol, runtime_checkable

from store import User


class PersistenceError(RuntimeError):
    """The mirror is unreachable or rejected an operation."""


@runtime_checkable
class MirrorProtocol(Protocol):
    """Durable copy of the user records, addressed by the ``id`` field.

    Implementations raise ``PersistenceError`` on any backend failure.
    """

    kind: str

    def fetch_all(self) -> list[User]:
        ...

    def insert(self, user: User) -> None:
        ...

    def update(self, user: User) -> None:
        ...

    def delete_by_id(self, user_id: int) -> bool:
        """Remove the document; return False if none matched."""
        ...

    def close(self) -> None:
        ...
