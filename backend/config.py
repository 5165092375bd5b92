"""
Users API configuration.
Single source of truth for environment and app settings.
"""

import math
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


def _number(raw, default):
    """Parse a positive number from env; fall back to the default when unset or invalid."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(value) or value <= 0:
        return default
    return value


def get_settings():
    """Return app settings (use as FastAPI Depends or call directly)."""
    return Settings()


class Settings:
    """Application settings loaded from environment."""

    # App
    APP_TITLE: str = "Users API"
    APP_VERSION: str = "1.0.0"
    ALLOWED_ORIGIN: str = "*"
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Mirror: "none" | "mongo" | "file"
    USERS_MIRROR: Literal["none", "mongo", "file"] = "none"
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "UsersDB"
    MONGO_COLLECTION: str = "Users"
    MIRROR_FILE: Path
    MIRROR_STARTUP_TIMEOUT: float = 100.0
    MIRROR_UPDATES: bool = False

    def __init__(self):
        self.APP_TITLE = (os.environ.get("APP_TITLE") or "Users API").strip()
        self.APP_VERSION = (os.environ.get("APP_VERSION") or "1.0.0").strip()
        self.ALLOWED_ORIGIN = (os.environ.get("ALLOWED_ORIGIN") or "*").strip()
        self.HOST = (os.environ.get("HOST") or "0.0.0.0").strip()
        self.PORT = int(_number(os.environ.get("PORT"), 8080))
        self.LOG_LEVEL = (os.environ.get("LOG_LEVEL") or "INFO").upper()
        mirror = (os.environ.get("USERS_MIRROR") or "none").lower()
        self.USERS_MIRROR = mirror if mirror in ("none", "mongo", "file") else "none"
        self.MONGO_URI = (os.environ.get("MONGO_URI") or "mongodb://localhost:27017").strip()
        self.MONGO_DB = (os.environ.get("MONGO_DB") or "UsersDB").strip()
        self.MONGO_COLLECTION = (os.environ.get("MONGO_COLLECTION") or "Users").strip()
        self.MIRROR_FILE = Path(os.environ.get("MIRROR_FILE") or "data/users.json")
        self.MIRROR_STARTUP_TIMEOUT = _number(os.environ.get("MIRROR_STARTUP_TIMEOUT"), 100.0)
        self.MIRROR_UPDATES = (os.environ.get("MIRROR_UPDATES") or "").lower() in _TRUTHY
