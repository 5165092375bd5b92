"""Application services."""

from .users import UserService

__all__ = ["UserService"]
