"""
User operations: the Record Store plus optional write-through to the mirror.

Ordering is the same for every mirrored mutation: existence check, mirror
write, then memory. All of it happens under the store lock, so mirror
latency serializes requests.
"""

import logging
from typing import Optional

from repositories import MirrorProtocol, PersistenceError
from store import RecordStore, User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        store: RecordStore,
        mirror: Optional[MirrorProtocol] = None,
        mirror_updates: bool = False,
    ):
        self.store = store
        self.mirror = mirror
        self.mirror_updates = mirror_updates and mirror is not None

    @property
    def mirror_kind(self) -> str:
        return self.mirror.kind if self.mirror is not None else "none"

    def _call_mirror(self, action: str, fn, *args):
        try:
            return fn(*args)
        except PersistenceError:
            logger.error("Mirror %s failed", action, exc_info=True)
            raise
        except Exception as e:
            logger.error("Mirror %s failed", action, exc_info=True)
            raise PersistenceError(f"Mirror {action} failed: {e}") from e

    # ── Startup ────────────────────────────────────────────────────────

    def load_from_mirror(self) -> int:
        """Seed the store from the mirror. Errors propagate and abort startup."""
        if self.mirror is None:
            return 0
        users = self._call_mirror("fetch_all", self.mirror.fetch_all)
        loaded = self.store.bulk_load(users)
        logger.info(
            "Loaded %d user(s) from %s mirror; next id %d",
            loaded, self.mirror_kind, self.store.next_id,
        )
        return loaded

    # ── Reads (memory only) ────────────────────────────────────────────

    def list_users(self) -> list[User]:
        return self.store.list_all()

    def get_user(self, user_id: int) -> User:
        return self.store.get(user_id)

    # ── Mutations ──────────────────────────────────────────────────────

    def create_user(self, name: str, age: int) -> User:
        persist = None
        if self.mirror is not None:
            persist = lambda u: self._call_mirror("insert", self.mirror.insert, u)
        user = self.store.create(name, age, persist=persist)
        logger.info("Created user %s", user)
        return user

    def update_user(self, user_id: int, name: str, age: int) -> User:
        """Update name/age. Reaches the mirror only when update mirroring is on."""
        persist = None
        if self.mirror_updates:
            persist = lambda u: self._call_mirror("update", self.mirror.update, u)
        user = self.store.update(user_id, name, age, persist=persist)
        logger.info("Updated user %s", user)
        return user

    def delete_user(self, user_id: int) -> None:
        persist = None
        if self.mirror is not None:
            persist = self._delete_from_mirror
        self.store.delete(user_id, persist=persist)
        logger.info("Deleted user %d", user_id)

    def _delete_from_mirror(self, user: User) -> None:
        removed = self._call_mirror("delete", self.mirror.delete_by_id, user.id)
        if not removed:
            logger.warning("User %d was not present in the %s mirror", user.id, self.mirror_kind)
