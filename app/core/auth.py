"""
Authentication dependencies for FastAPI route protection.

This module provides:
- Extracting the session credential from a request (cookie or bearer header)
- Resolving the caller's identity from that credential
- The require_admin dependency that gates every admin endpoint

Identity and admin status are resolved from scratch on every request.
"""

import ipaddress
from typing import Annotated, Protocol

from fastapi import Cookie, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.database import get_db
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.logging import get_logger, set_admin_context
from app.core.permissions import AdminAuthorizer
from app.schemas.auth import AuthSession, Identity
from app.services.moderation_store import ModerationStore

logger = get_logger(__name__)


class SessionExchange(Protocol):
    async def authenticate_session(self, credential: str | None) -> AuthSession | None: ...


async def resolve_identity(store: SessionExchange, credential: str | None) -> Identity | None:
    """
    Resolve the caller's identity from a session credential.

    Returns None when there is no valid session, whatever the cause
    (no credential, bad or expired token, unknown user, exchange failure).
    """
    try:
        session = await store.authenticate_session(credential)
    except Exception as e:
        logger.warning("session_exchange_failed", error=str(e))
        return None

    if session is None:
        return None

    return Identity(id=session.user_id, address=session.email)


async def get_session_credential(
    access_token: Annotated[str | None, Cookie()] = None,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(HTTPBearer(auto_error=False))
    ] = None,
) -> str | None:
    """
    Extract the session credential from the request.

    The access_token cookie takes precedence; the Authorization: Bearer
    header is accepted for API clients.
    """
    if access_token:
        return access_token
    if credentials:
        return credentials.credentials
    return None


def get_store(db: Annotated[AsyncSession, Depends(get_db)]) -> ModerationStore:
    """Backing store bound to the request's database session."""
    return ModerationStore(db)


def get_authorizer() -> AdminAuthorizer:
    """Admin authorizer built from the current ADMIN_EMAILS configuration."""
    return AdminAuthorizer(settings.ADMIN_EMAILS)


async def require_admin(
    credential: Annotated[str | None, Depends(get_session_credential)],
    store: Annotated[ModerationStore, Depends(get_store)],
    authorizer: Annotated[AdminAuthorizer, Depends(get_authorizer)],
) -> Identity:
    """
    Require the caller to be an authenticated administrator.

    Raises:
        AuthenticationError: 401 if there is no valid session
        AuthorizationError: 401 (same body) if the caller is not an admin
    """
    identity = await resolve_identity(store, credential)
    if identity is None:
        raise AuthenticationError()

    if not await authorizer.is_admin(store, identity.id):
        logger.info("admin_access_denied", identity_id=identity.id)
        raise AuthorizationError()

    set_admin_context(identity.id)
    return identity.model_copy(update={"is_admin": True})


def get_client_ip(request: Request) -> str:
    """
    Extract client IP address from request.

    Checks X-Forwarded-For header first (for proxies/load balancers),
    falls back to direct client IP when the header is absent or its first
    entry is not an IP address.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, take the first (client)
        candidate = forwarded.split(",")[0].strip()
        try:
            return str(ipaddress.ip_address(candidate))
        except ValueError:
            logger.warning("invalid_forwarded_for", value=candidate[:64])
    return request.client.host if request.client else "unknown"


def get_user_agent(request: Request) -> str:
    """Extract User-Agent header from request (or "unknown" if not present)."""
    return request.headers.get("User-Agent", "unknown")


# Type aliases for dependency injection
AdminIdentity = Annotated[Identity, Depends(require_admin)]
Store = Annotated[ModerationStore, Depends(get_store)]
