"""
Pydantic schemas for API responses and requests
"""

from app.models.user import UserBase  # Re-export from models
from app.schemas.auth import AuthSession, Identity, IdentityRecord
from app.schemas.moderation import (
    ActionResponse,
    AdminActionListResponse,
    AdminActionResponse,
    AdminIdentityResponse,
    BanUserRequest,
    ContentAssetResponse,
    ErrorResponse,
    ModerateContentRequest,
    UpdateReportRequest,
    UserReportResponse,
    WarnUserRequest,
)

__all__ = [
    "ActionResponse",
    "AdminActionListResponse",
    "AdminActionResponse",
    "AdminIdentityResponse",
    "AuthSession",
    "BanUserRequest",
    "ContentAssetResponse",
    "ErrorResponse",
    "Identity",
    "IdentityRecord",
    "ModerateContentRequest",
    "UpdateReportRequest",
    "UserBase",
    "UserReportResponse",
    "WarnUserRequest",
]
