"""
UTC datetime types for response schemas.

Timestamps are aware UTC datetimes (see app.utils.utcnow); these annotated
types render them with a 'Z' suffix so the dashboard never has to guess the
timezone.
"""

from datetime import datetime
from typing import Annotated

from pydantic import PlainSerializer


def format_utc(dt: datetime | None) -> str | None:
    """Render a naive-UTC datetime as ISO 8601 with a 'Z' suffix."""
    if dt is None:
        return None
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


# Usage: created_at: UTCDatetime
UTCDatetime = Annotated[datetime, PlainSerializer(format_utc, return_type=str)]

# Nullable variant, e.g. closed_at on a report that is still open
UTCDatetimeOptional = Annotated[datetime | None, PlainSerializer(format_utc, return_type=str | None)]
