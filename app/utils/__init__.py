"""
Utility functions
"""

import uuid
from datetime import UTC, datetime


def utcnow() -> datetime:
    """Current time as an aware UTC datetime (naive values are rejected on insert)."""
    return datetime.now(UTC)


def new_id() -> str:
    """Generate an opaque identifier for new rows."""
    return str(uuid.uuid4())


__all__ = [
    "new_id",
    "utcnow",
]
