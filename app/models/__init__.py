"""
SQLModel models for the tables the admin pipeline touches.

For modifications:
1. Edit the appropriate model file in app/models/
2. Create an Alembic migration to reflect the changes
"""

from app.models.admin_action import AdminActions
from app.models.content_asset import ContentAssetBase, ContentAssets
from app.models.profile import Profiles
from app.models.user import Users
from app.models.user_report import UserReports
from app.models.user_warning import UserWarnings

__all__ = [
    "AdminActions",
    "ContentAssetBase",
    "ContentAssets",
    "Profiles",
    "UserReports",
    "UserWarnings",
    "Users",
]
