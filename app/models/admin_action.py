"""
SQLModel-based AdminAction model for audit logging

This module defines the AdminActions database model for tracking every
privileged moderation mutation:
- User warnings, bans and shadow bans
- Report resolution and closure

Rows are append-only. Retention is an external policy.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Index, text
from sqlmodel import Column, Field, SQLModel

from app.utils import new_id, utcnow


class AdminActions(SQLModel, table=True):
    """
    Audit log for admin moderation actions.

    It stores:
    - Who performed the action (admin_id)
    - What type of action (action, see AdminActionType)
    - Which entity it was applied to (target_type + target_id)
    - JSON payload with the action's inputs (reason, isHardBan, resolution...)
    - Where the request came from (ip_address, user_agent)

    target_id is not a foreign key: it may reference a user or a report.
    """

    __tablename__ = "admin_actions"

    __table_args__ = (
        Index("idx_admin_actions_admin_id", "admin_id"),
        Index("idx_admin_actions_target", "target_type", "target_id"),
        Index("idx_admin_actions_created_at", "created_at"),
        Index("idx_admin_actions_action", "action"),
    )

    # Primary key
    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)

    # Admin who performed the action
    admin_id: str = Field(max_length=36)

    # Action verb, e.g. "warn_user", "shadow_ban_user", "close_report"
    action: str = Field(max_length=50)

    # Target entity
    target_type: str = Field(max_length=20)
    target_id: str = Field(max_length=36)

    # Examples:
    # - warn_user: {"reason": "spam"}
    # - ban_user / shadow_ban_user: {"reason": "...", "isHardBan": true}
    # - resolve_report / close_report: {"status": "resolved", "resolution": "..."}
    payload: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    # Request origin
    ip_address: str | None = Field(default=None, max_length=45)
    user_agent: str | None = Field(default=None, max_length=255)

    # Timestamp (indexed for pruning queries)
    created_at: datetime = Field(
        default_factory=utcnow, sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")}
    )
