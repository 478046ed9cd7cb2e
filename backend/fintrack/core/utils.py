"""
Core utilities for FinTrack backend.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4


def new_record_id() -> str:
    """Generate an opaque, store-assigned record id."""
    return uuid4().hex


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def is_record_id(value: str) -> bool:
    """True if value has the shape of an id issued by new_record_id.

    Stores check this before using an id as a file name or document path.
    """
    return value.isascii() and value.isalnum()
