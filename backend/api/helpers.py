"""Shared helpers for API routes."""

import re
from typing import Optional

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_id(raw: Optional[str]) -> Optional[int]:
    """Decode a base-10 id. Returns None for missing or malformed input."""
    if raw is None or not _INT_RE.fullmatch(raw):
        return None
    return int(raw)
