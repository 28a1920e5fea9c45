"""
Pydantic schemas for the moderation admin endpoints.

Request bodies use the dashboard's camelCase field names. Every field is
optional at the schema level: presence and emptiness are checked by the
moderation executor so that a missing field is reported as a 400 with the
field name, and so that "isHardBan": false is distinguishable from an
omitted isHardBan.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool

from app.schemas.base import UTCDatetime, UTCDatetimeOptional

# ===== Requests =====


class WarnUserRequest(BaseModel):
    """Body of POST /admin/warn-user."""

    model_config = ConfigDict(populate_by_name=True)

    target_id: str | None = Field(
        default=None, validation_alias=AliasChoices("targetId", "userId", "target_id")
    )
    reason: str | None = Field(default=None, max_length=500)


class BanUserRequest(BaseModel):
    """Body of POST /admin/ban-user."""

    model_config = ConfigDict(populate_by_name=True)

    target_id: str | None = Field(
        default=None, validation_alias=AliasChoices("targetId", "userId", "target_id")
    )
    reason: str | None = Field(default=None, max_length=500)
    is_hard_ban: StrictBool | None = Field(
        default=None, validation_alias=AliasChoices("isHardBan", "is_hard_ban")
    )


class UpdateReportRequest(BaseModel):
    """Body of POST /admin/update-report."""

    model_config = ConfigDict(populate_by_name=True)

    report_id: str | None = Field(
        default=None, validation_alias=AliasChoices("reportId", "report_id")
    )
    action: str | None = None
    resolution: str | None = Field(default=None, max_length=1000)


class ModerateContentRequest(BaseModel):
    """Body of POST /admin/moderate-content."""

    model_config = ConfigDict(populate_by_name=True)

    asset_id: str | None = Field(
        default=None, validation_alias=AliasChoices("assetId", "asset_id")
    )
    action: str | None = None
    # Only stored on rejection
    reason: str | None = Field(default=None, max_length=500)
    review_note: str | None = Field(
        default=None,
        max_length=1000,
        validation_alias=AliasChoices("reviewNote", "review_note"),
    )


# ===== Responses =====


class ActionResponse(BaseModel):
    """Envelope returned by every successful moderation action."""

    success: bool = True
    data: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Envelope returned by every failed admin request."""

    success: bool = False
    error: str
    fields: list[str] = Field(default_factory=list)


class UserReportResponse(BaseModel):
    """A report after an admin closed it out."""

    id: str
    reporter_id: str | None
    reported_user_id: str | None
    reason: str | None
    status: str
    resolution: str | None
    closed_at: UTCDatetimeOptional
    created_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class ContentAssetResponse(BaseModel):
    """A content asset after an admin reviewed it."""

    id: str
    user_id: str
    type: str
    url: str
    status: str
    reason: str | None
    review_note: str | None
    reviewed_by: str | None
    reviewed_at: UTCDatetimeOptional
    created_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class AdminActionResponse(BaseModel):
    """A single audit trail entry."""

    id: str
    admin_id: str
    action: str
    target_type: str
    target_id: str
    payload: dict[str, Any]
    ip_address: str | None
    user_agent: str | None
    created_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class AdminActionListResponse(BaseModel):
    """Paginated audit trail, with activity counts over the same filters."""

    total: int
    page: int
    per_page: int
    last_24h: int = 0
    last_7d: int = 0
    unique_admins: int = 0
    items: list[AdminActionResponse]


class AdminIdentityResponse(BaseModel):
    """The authorized caller, as seen by the admin dashboard."""

    id: str
    address: str | None
    is_admin: bool
