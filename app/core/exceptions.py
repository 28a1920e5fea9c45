"""
Admin pipeline exceptions.

All exceptions use preset status codes and messages so that call sites never
pick them. The handler registered in app.main renders every AdminAPIError as
the standard ``{"success": false, "error": ...}`` envelope.

Authentication and authorization failures deliberately share one status
code and one message: a caller cannot tell "not logged in" from "not an
admin".
"""

from fastapi import HTTPException, status

UNAUTHORIZED_MESSAGE = "Unauthorized"


class AdminAPIError(HTTPException):
    """Base class for errors surfaced by the admin endpoints."""

    def __init__(self, status_code: int, message: str, fields: list[str] | None = None) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.message = message
        self.fields = fields or []


# ── Authentication / authorization ────────────────────────────────────────────


class AuthenticationError(AdminAPIError):
    """No valid session. Never says whether the credential was absent, expired or malformed."""

    def __init__(self) -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, UNAUTHORIZED_MESSAGE)


class AuthorizationError(AdminAPIError):
    """Valid session, but the identity is not an administrator."""

    def __init__(self) -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, UNAUTHORIZED_MESSAGE)


# ── Input ─────────────────────────────────────────────────────────────────────


class ValidationError(AdminAPIError):
    def __init__(self, message: str = "Missing required fields", fields: list[str] | None = None) -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, message, fields)


# ── Backing store ─────────────────────────────────────────────────────────────


class BackendError(AdminAPIError):
    """A store procedure or update failed, or matched no row."""

    def __init__(self, message: str) -> None:
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


class AuditError(Exception):
    """The audit insert failed. Only ever logged, never returned to a caller."""
