"""
SQLModel-based Profile model

Only the photo gallery is modelled here: rejecting a photo asset removes it
from its owner's gallery. The rest of the profile belongs to the app.
"""

from sqlalchemy import JSON, Column, ForeignKeyConstraint
from sqlmodel import Field, SQLModel


class Profiles(SQLModel, table=True):
    """
    Public profile gallery of a user.

    Fields:
    - user_id: Owner (one profile per user)
    - photos: Ordered list of photo URLs
    - primary_photo_idx: Index into photos of the photo shown first
    """

    __tablename__ = "profiles"

    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"],
            ["users.user_id"],
            ondelete="CASCADE",
            onupdate="CASCADE",
            name="fk_profiles_user_id",
        ),
    )

    user_id: str = Field(primary_key=True, max_length=36)

    photos: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    primary_photo_idx: int = Field(default=0)
