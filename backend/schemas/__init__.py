"""Pydantic schemas for API request bodies."""

from .requests import UserPayload, UserRef

__all__ = [
    "UserPayload",
    "UserRef",
]
