"""
Administrator authorization.

An identity is an administrator if EITHER:
- its contact address is on the configured allow-list (ADMIN_EMAILS), or
- its role claims include "admin" or "super_admin".

Each signal is a pure predicate, testable on its own. AdminAuthorizer
combines them and is the single point of truth for privilege: it fails
closed, so a lookup error or a missing identity means "not an admin".
"""

from collections.abc import Iterable
from typing import Protocol

from app.config import AdminRole
from app.core.logging import get_logger
from app.schemas.auth import IdentityRecord

logger = get_logger(__name__)


class IdentityLookup(Protocol):
    async def get_identity_by_id(self, identity_id: str) -> IdentityRecord | None: ...


def parse_admin_emails(raw: str | Iterable[str] | None) -> frozenset[str]:
    """
    Normalize an allow-list into a set of lower-cased addresses.

    Accepts the comma-separated configuration string or an iterable of
    addresses. Entries are trimmed and lower-cased; empty entries are dropped.
    """
    if not raw:
        return frozenset()
    entries = raw.split(",") if isinstance(raw, str) else raw
    return frozenset(e.strip().lower() for e in entries if e and e.strip())


def email_in_allow_list(email: str | None, allow_list: Iterable[str]) -> bool:
    """True if the address, case-insensitively, is on the allow-list."""
    if not email:
        return False
    return email.strip().lower() in allow_list


def has_admin_role(roles: Iterable[str] | None) -> bool:
    """True if the role claims include an administrator role."""
    if not roles:
        return False
    return any(role in AdminRole.ALL for role in roles)


class AdminAuthorizer:
    """
    Decides administrator status for an identity id.

    The allow-list is given at construction time (the raw configuration
    string or a list) and is re-parsed on every check.
    """

    def __init__(self, admin_emails: str | Iterable[str] | None) -> None:
        self.admin_emails = admin_emails

    async def is_admin(self, store: IdentityLookup, identity_id: str | None) -> bool:
        if not identity_id:
            return False

        try:
            record = await store.get_identity_by_id(identity_id)
        except Exception as e:
            logger.warning("admin_lookup_failed", identity_id=identity_id, error=str(e))
            return False

        if record is None:
            logger.info("admin_lookup_missing", identity_id=identity_id)
            return False

        allow_list = parse_admin_emails(self.admin_emails)
        return email_in_allow_list(record.email, allow_list) or has_admin_role(record.roles)
