"""
SQLModel-based ContentAsset models

Photos and videos uploaded by users go through admin review before they are
shown to others. The inheritance structure is:

ContentAssetBase (shared public fields)
    ├─> ContentAssets (database table, adds keys and timestamps)
    └─> ContentAssetResponse (API schema, defined in app/schemas)
"""

from datetime import datetime

from sqlalchemy import ForeignKeyConstraint, Index, text
from sqlmodel import Field, SQLModel

from app.config import ContentStatus, ContentType
from app.utils import new_id, utcnow


class ContentAssetBase(SQLModel):
    """
    Base model with shared public fields for ContentAssets.
    """

    # Owner
    user_id: str = Field(max_length=36)

    # Asset: type is "photo" or "video"; url is what the profile references
    type: str = Field(default=ContentType.PHOTO, max_length=20)
    url: str = Field(max_length=1000)

    # Review: pending, approved, rejected
    status: str = Field(default=ContentStatus.PENDING, max_length=20)
    reason: str | None = Field(default=None, max_length=500)
    review_note: str | None = Field(default=None, max_length=1000)
    reviewed_by: str | None = Field(default=None, max_length=36)
    reviewed_at: datetime | None = Field(default=None)


class ContentAssets(ContentAssetBase, table=True):
    """
    Database table for user content assets.
    """

    __tablename__ = "content_assets"

    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"],
            ["users.user_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_content_assets_user_id",
        ),
        ForeignKeyConstraint(
            ["reviewed_by"],
            ["users.user_id"],
            ondelete="SET NULL",
            onupdate="CASCADE",
            name="fk_content_assets_reviewed_by",
        ),
        Index("idx_content_assets_status", "status"),
        Index("idx_content_assets_user_id", "user_id"),
    )

    # Primary key
    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")}
    )
