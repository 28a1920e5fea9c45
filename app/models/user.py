"""
SQLModel-based User models with inheritance for security

This module defines the Users database model using SQLModel, which combines
SQLAlchemy and Pydantic functionality. The inheritance structure is:

UserBase (shared public fields)
    ├─> Users (database table, adds internal/sensitive fields)
    └─> ModeratedUserResponse (API schema, defined in app/schemas)

Users is owned by the identity service; the admin pipeline only reads the
contact address and role claims, and changes moderation state through the
store procedures in app.services.moderation_store.
"""

from datetime import datetime

from sqlalchemy import JSON, Column, Index, text
from sqlmodel import Field, SQLModel

from app.config import UserStatus
from app.utils import new_id, utcnow


class UserBase(SQLModel):
    """
    Base model with shared public fields for Users.

    These fields are safe to expose to admins and are shared between:
    - The database table (Users)
    - API response schemas (ModeratedUserResponse)
    """

    # Moderation state: active -> warned -> shadow_banned -> banned
    status: str = Field(default=UserStatus.ACTIVE, max_length=20)
    warning_count: int = Field(default=0)
    ban_reason: str | None = Field(default=None, max_length=500)
    banned_at: datetime | None = Field(default=None)


class Users(UserBase, table=True):
    """
    Database table for users with internal and sensitive fields.

    Internal/sensitive fields (should NOT be exposed via public API):
    - email: Privacy-sensitive, also used for the admin allow-list
    - roles: Role claims (e.g. "admin", "super_admin")
    """

    __tablename__ = "users"

    __table_args__ = (
        Index("idx_users_email", "email"),
        Index("idx_users_status", "status"),
    )

    # Primary key (opaque id issued by the identity service)
    user_id: str = Field(default_factory=new_id, primary_key=True, max_length=36)

    # Contact info (privacy-sensitive)
    email: str | None = Field(default=None, max_length=255)

    # Role claims attached to the identity
    roles: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    created_at: datetime = Field(
        default_factory=utcnow, sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")}
    )

    # Note: Relationships are intentionally omitted.
    # Foreign keys are sufficient for queries, and omitting relationships avoids:
    # - Circular import issues
    # - Accidental eager loading
    # - Unwanted auto-serialization in API responses
