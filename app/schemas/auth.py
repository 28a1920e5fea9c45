"""
Identity types used by the admin pipeline.

AuthSession and IdentityRecord are what the backing store hands back;
Identity is the request-scoped caller resolved from them. None of these are
cached across requests.
"""

from pydantic import BaseModel, Field


class AuthSession(BaseModel):
    """A session obtained by exchanging a request credential."""

    user_id: str
    email: str | None = None


class IdentityRecord(BaseModel):
    """Full identity as stored: contact address plus role claims."""

    id: str
    email: str | None = None
    roles: list[str] = Field(default_factory=list)


class Identity(BaseModel):
    """The caller of the current request."""

    id: str
    address: str | None = None
    is_admin: bool = False
