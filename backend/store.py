"""
Users Record Store
In-memory collection of user records plus the id allocator.
One lock guards the record list and the counter; every operation,
reads included, holds it for its full read-modify-write.

Mutations accept an optional ``persist`` hook. It runs under the lock
after the existence check and before memory changes, so a hook that
raises leaves the store (and the id counter) untouched.
"""

import logging
import threading
from dataclasses import asdict, dataclass, replace
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)

FIRST_ID = 1


class RecordNotFound(LookupError):
    """No live record carries the requested id."""

    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


@dataclass
class User:
    id: int
    name: str
    age: int

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Decode a stored document. Raises KeyError/TypeError rather than coercing."""
        user_id, name, age = data["id"], data.get("name", ""), data.get("age", 0)
        if not _is_int(user_id) or not _is_int(age):
            raise TypeError(f"id and age must be integers, got {user_id!r} and {age!r}")
        if not isinstance(name, str):
            raise TypeError(f"name must be a string, got {name!r}")
        return cls(id=user_id, name=name, age=age)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


PersistHook = Optional[Callable[[User], None]]


class RecordStore:
    """Authoritative in-memory user set. Returned records are copies."""

    def __init__(self, first_id: int = FIRST_ID):
        self._users: list[User] = []
        self._next_id = first_id
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    # ── Internal helpers (caller holds the lock) ───────────────────────

    def _index(self, user_id: int) -> int:
        for i, user in enumerate(self._users):
            if user.id == user_id:
                return i
        raise RecordNotFound(user_id)

    # ── Reads ──────────────────────────────────────────────────────────

    def list_all(self) -> list[User]:
        with self._lock:
            return [replace(u) for u in self._users]

    def get(self, user_id: int) -> User:
        with self._lock:
            return replace(self._users[self._index(user_id)])

    # ── Mutations ──────────────────────────────────────────────────────

    def create(self, name: str, age: int, persist: PersistHook = None) -> User:
        """Assign the next id and append. The counter only advances on success."""
        with self._lock:
            user = User(id=self._next_id, name=name, age=age)
            if persist is not None:
                persist(replace(user))
            self._users.append(user)
            self._next_id += 1
            return replace(user)

    def update(self, user_id: int, name: str, age: int, persist: PersistHook = None) -> User:
        """Replace name/age in place; the id never changes."""
        with self._lock:
            current = self._users[self._index(user_id)]
            updated = replace(current, name=name, age=age)
            if persist is not None:
                persist(replace(updated))
            current.name = name
            current.age = age
            return replace(current)

    def delete(self, user_id: int, persist: PersistHook = None) -> None:
        with self._lock:
            i = self._index(user_id)
            if persist is not None:
                persist(replace(self._users[i]))
            del self._users[i]

    def bulk_load(self, users: Iterable[User]) -> int:
        """Seed records with their existing ids. Returns how many were added.

        Ids already live are skipped. The counter is raised past the
        highest loaded id so later creates cannot collide.
        """
        loaded = 0
        with self._lock:
            live = {u.id for u in self._users}
            for user in users:
                if user.id in live:
                    logger.warning("bulk_load: duplicate id %s skipped", user.id)
                    continue
                self._users.append(replace(user))
                live.add(user.id)
                loaded += 1
            if live:
                self._next_id = max(self._next_id, max(live) + 1)
        return loaded
