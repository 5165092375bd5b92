"""
File-based implementation of MirrorProtocol.
Keeps the user array in a single JSON file, rewritten atomically on each change.
"""

import json
import logging
import threading
from pathlib import Path

from store import User

from .base import PersistenceError

logger = logging.getLogger(__name__)


class FileMirror:
    """JSON-file mirror for local development and tests."""

    kind = "file"

    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _read(self) -> list[dict]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, list):
            raise PersistenceError(f"{self.path} does not hold a JSON array")
        return data

    def _write(self, docs: list[dict]) -> None:
        tmp = self.path.with_suffix(".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(docs, f, ensure_ascii=False, indent=2)
            tmp.replace(self.path)
        except OSError as e:
            raise PersistenceError(f"Cannot write {self.path}: {e}") from e

    def fetch_all(self) -> list[User]:
        with self._lock:
            docs = self._read()
        try:
            return [User.from_dict(d) for d in docs]
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Malformed record in {self.path}: {e}") from e

    def insert(self, user: User) -> None:
        with self._lock:
            docs = self._read()
            if any(d.get("id") == user.id for d in docs):
                raise PersistenceError(f"Duplicate id {user.id}")
            docs.append(user.to_dict())
            self._write(docs)

    def update(self, user: User) -> None:
        with self._lock:
            docs = self._read()
            for d in docs:
                if d.get("id") == user.id:
                    d.update(user.to_dict())
                    break
            else:
                # upsert, same as MongoMirror
                docs.append(user.to_dict())
            self._write(docs)

    def delete_by_id(self, user_id: int) -> bool:
        with self._lock:
            docs = self._read()
            kept = [d for d in docs if d.get("id") != user_id]
            if len(kept) == len(docs):
                return False
            self._write(kept)
            return True

    def close(self) -> None:
        pass
