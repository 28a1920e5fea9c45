"""
SQLModel-based UserWarning model

One row per warning issued to a user. The mobile client polls unacknowledged
warnings to show the warning banner; the admin pipeline only ever inserts.
"""

from datetime import datetime

from sqlalchemy import ForeignKeyConstraint, Index, text
from sqlmodel import Field, SQLModel

from app.utils import new_id, utcnow


class UserWarnings(SQLModel, table=True):
    """
    Warnings issued to users by admins.

    Fields:
    - id: Primary key
    - user_id: User being warned
    - reason: Reason shown to the user
    - acknowledged: Set by the client once the user has seen the warning
    - created_at: When the warning was issued
    """

    __tablename__ = "user_warnings"

    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"],
            ["users.user_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_user_warnings_user_id",
        ),
        Index("idx_user_warnings_user_id", "user_id"),
    )

    # Primary key
    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)

    # User being warned
    user_id: str = Field(max_length=36)

    reason: str = Field(max_length=500)
    acknowledged: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")}
    )
