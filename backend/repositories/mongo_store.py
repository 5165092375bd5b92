"""
MongoDB implementation of MirrorProtocol.
Documents live in UsersDB.Users (configurable) and are addressed by the
``id`` field, not Mongo's native ``_id``.
"""

import logging
from typing import Optional

import pymongo
from pymongo import MongoClient
from pymongo.errors import OperationFailure, PyMongoError

from store import User

from .base import PersistenceError

logger = logging.getLogger(__name__)


class MongoMirror:
    """Write-through mirror backed by a pymongo collection."""

    kind = "mongo"

    def __init__(
        self,
        client: MongoClient,
        db_name: str = "UsersDB",
        collection_name: str = "Users",
        startup_timeout: Optional[float] = None,
    ):
        self.client = client
        self.collection = client[db_name][collection_name]
        self.startup_timeout = startup_timeout

    @classmethod
    def connect(
        cls,
        uri: str,
        db_name: str = "UsersDB",
        collection_name: str = "Users",
        startup_timeout: float = 100.0,
    ) -> "MongoMirror":
        """Open a client and verify the server answers within ``startup_timeout`` seconds."""
        client = None
        try:
            client = MongoClient(uri, serverSelectionTimeoutMS=int(startup_timeout * 1000))
            with pymongo.timeout(startup_timeout):
                client.admin.command("ping")
        except PyMongoError as e:
            if client is not None:
                client.close()
            raise PersistenceError(f"Could not connect to MongoDB: {e}") from e
        logger.info("Connected to MongoDB at %s (%s.%s)", uri, db_name, collection_name)
        return cls(client, db_name, collection_name, startup_timeout)

    def fetch_all(self) -> list[User]:
        """Scan the collection, then ensure the unique ``id`` index.

        The index is best-effort: a collection that already holds duplicate
        ids still loads, and the store drops the duplicates.
        """
        try:
            with pymongo.timeout(self.startup_timeout):
                docs = list(self.collection.find({}, {"_id": 0}))
                try:
                    self.collection.create_index("id", unique=True)
                except OperationFailure as e:
                    logger.warning("Unique index on %s.id not created: %s", self.collection.name, e)
        except PyMongoError as e:
            raise PersistenceError(f"Startup scan failed: {e}") from e
        try:
            return [User.from_dict(d) for d in docs]
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Malformed user document: {e}") from e

    def insert(self, user: User) -> None:
        try:
            self.collection.insert_one(user.to_dict())
        except PyMongoError as e:
            raise PersistenceError(f"Insert of user {user.id} failed: {e}") from e

    def update(self, user: User) -> None:
        try:
            self.collection.replace_one({"id": user.id}, user.to_dict(), upsert=True)
        except PyMongoError as e:
            raise PersistenceError(f"Update of user {user.id} failed: {e}") from e

    def delete_by_id(self, user_id: int) -> bool:
        try:
            result = self.collection.delete_one({"id": user_id})
        except PyMongoError as e:
            raise PersistenceError(f"Delete of user {user_id} failed: {e}") from e
        return result.deleted_count > 0

    def close(self) -> None:
        self.client.close()
