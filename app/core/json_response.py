"""
JSON responses for the admin API.

All datetime objects are serialized with a 'Z' suffix to indicate UTC, and
failures share one envelope: {"success": false, "error": ..., "fields": [...]}.
"""

import json
from datetime import datetime
from typing import Any

from fastapi.responses import JSONResponse


class UTCDateTimeEncoder(json.JSONEncoder):
    """JSON encoder that serializes datetime objects with Z suffix."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.strftime("%Y-%m-%dT%H:%M:%SZ")
        return super().default(obj)


class UTCJSONResponse(JSONResponse):
    """JSON response that serializes all datetimes with UTC Z suffix."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            cls=UTCDateTimeEncoder,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("utf-8")

    @classmethod
    def failure(cls, status_code: int, message: str, fields: list[str] | None = None) -> "UTCJSONResponse":
        """Build the standard failure envelope."""
        content: dict[str, Any] = {"success": False, "error": message}
        if fields:
            content["fields"] = fields
        return cls(status_code=status_code, content=content)
