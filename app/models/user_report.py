"""
SQLModel-based UserReport models with inheritance for security

This module defines the UserReports database model using SQLModel. The
inheritance structure is:

UserReportBase (shared public fields)
    ├─> UserReports (database table, adds keys and timestamps)
    └─> UserReportResponse (API schema, defined in app/schemas)

Reports are filed by app users against other users. Admins close them out
with exactly one of two verbs: resolve (action taken) or close (no action).
"""

from datetime import datetime

from sqlalchemy import ForeignKeyConstraint, Index, text
from sqlmodel import Field, SQLModel

from app.config import ReportStatus
from app.utils import new_id, utcnow


class UserReportBase(SQLModel):
    """
    Base model with shared public fields for UserReports.
    """

    # References
    reporter_id: str | None = Field(default=None, max_length=36)
    reported_user_id: str | None = Field(default=None, max_length=36)

    # Report details
    reason: str | None = Field(default=None, max_length=500)

    # Status: open, resolved, closed
    status: str = Field(default=ReportStatus.OPEN, max_length=20)
    resolution: str | None = Field(default=None, max_length=1000)
    closed_at: datetime | None = Field(default=None)


class UserReports(UserReportBase, table=True):
    """
    Database table for user reports.
    """

    __tablename__ = "user_reports"

    __table_args__ = (
        ForeignKeyConstraint(
            ["reporter_id"],
            ["users.user_id"],
            ondelete="SET NULL",
            onupdate="CASCADE",
            name="fk_user_reports_reporter_id",
        ),
        ForeignKeyConstraint(
            ["reported_user_id"],
            ["users.user_id"],
            ondelete="SET NULL",
            onupdate="CASCADE",
            name="fk_user_reports_reported_user_id",
        ),
        Index("idx_user_reports_status", "status"),
        Index("idx_user_reports_reported_user_id", "reported_user_id"),
    )

    # Primary key
    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")}
    )
