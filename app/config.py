"""
Application Configuration
Uses Pydantic Settings for environment-based configuration
"""

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra env vars like MARIADB_* used by docker-compose
    )

    # Application
    PROJECT_NAME: str = "Moderation Admin API"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development", pattern="^(development|staging|production)$")
    DEBUG: bool = Field(default=False)
    API_V1_STR: str = "/api/v1"

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # CORS
    # Allow str because it can be a comma-separated string in .env
    CORS_ORIGINS: str | list[str] = Field(default=["http://localhost:3001"])

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 5
    DB_ECHO: bool = False

    # Administrators
    # Comma-separated contact addresses always treated as admins.
    # Kept as the raw string; parsed on every authorization check.
    ADMIN_EMAILS: str = ""

    # Audit trail
    AUDIT_LOG_PAGE_SIZE: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"
    # "console" or "json". Outside development output is always JSON.
    LOG_FORMAT: str = "console"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v


# Create global settings instance

load_dotenv()
settings = Settings()  # type: ignore[call-arg]


class ModerationVerb:
    """Entry-point verbs accepted by the moderation executor"""

    WARN_USER = "warn_user"
    BAN_USER = "ban_user"
    UPDATE_REPORT = "update_report"
    MODERATE_CONTENT = "moderate_content"


class AdminActionType:
    """Admin action type constants for audit logging"""

    WARN_USER = "warn_user"
    BAN_USER = "ban_user"
    SHADOW_BAN_USER = "shadow_ban_user"
    RESOLVE_REPORT = "resolve_report"
    CLOSE_REPORT = "close_report"
    APPROVE_CONTENT = "approve_content"
    REJECT_CONTENT = "reject_content"


class TargetType:
    """Kinds of entity an admin action can be applied to"""

    USER = "user"
    REPORT = "report"
    CONTENT = "content"


class UserStatus:
    """Moderation status of a user account, ordered by severity"""

    ACTIVE = "active"
    WARNED = "warned"
    SHADOW_BANNED = "shadow_banned"
    BANNED = "banned"

    SEVERITY = {
        ACTIVE: 0,
        WARNED: 1,
        SHADOW_BANNED: 2,
        BANNED: 3,
    }


class ReportStatus:
    """User report status constants"""

    OPEN = "open"
    RESOLVED = "resolved"
    CLOSED = "closed"


class ReportAction:
    """Actions an admin can take on an open report"""

    RESOLVE = "resolve"
    CLOSE = "close"

    STATUSES = {
        RESOLVE: ReportStatus.RESOLVED,
        CLOSE: ReportStatus.CLOSED,
    }

    AUDIT_ACTIONS = {
        RESOLVE: AdminActionType.RESOLVE_REPORT,
        CLOSE: AdminActionType.CLOSE_REPORT,
    }

    DEFAULT_RESOLUTIONS = {
        RESOLVE: "Report reviewed and action taken by admin.",
        CLOSE: "Report reviewed - no action needed.",
    }


class AdminRole:
    """Role claims that grant administrator status"""

    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    ALL = frozenset({ADMIN, SUPER_ADMIN})


class ContentStatus:
    """Review status of a user-submitted content asset"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ContentType:
    """Content asset types"""

    PHOTO = "photo"
    VIDEO = "video"


class ContentAction:
    """Actions an admin can take on a content asset"""

    APPROVE = "approve"
    REJECT = "reject"

    STATUSES = {
        APPROVE: ContentStatus.APPROVED,
        REJECT: ContentStatus.REJECTED,
    }

    AUDIT_ACTIONS = {
        APPROVE: AdminActionType.APPROVE_CONTENT,
        REJECT: AdminActionType.REJECT_CONTENT,
    }
