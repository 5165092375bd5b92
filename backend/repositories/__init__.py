"""Persistence mirrors: abstract interface and implementations."""

from typing import Optional

from .base import MirrorProtocol, PersistenceError
from .file_store import FileMirror


def build_mirror(settings) -> Optional[MirrorProtocol]:
    """Instantiate the mirror selected by USERS_MIRROR, or None for memory-only."""
    if settings.USERS_MIRROR == "file":
        return FileMirror(settings.MIRROR_FILE)
    if settings.USERS_MIRROR == "mongo":
        from .mongo_store import MongoMirror
        return MongoMirror.connect(
            settings.MONGO_URI,
            settings.MONGO_DB,
            settings.MONGO_COLLECTION,
            settings.MIRROR_STARTUP_TIMEOUT,
        )
    return None


__all__ = ["MirrorProtocol", "PersistenceError", "FileMirror", "build_mirror"]
