"""
Backing store for the admin pipeline.

This is the narrow surface the pipeline consumes:
- Session exchange and identity lookup
- Transactional moderation procedures (warn, ban)
- Conditional report update
- Content review (with gallery cleanup on rejection)
- Audit record insert

Each procedure commits on its own: it either applies completely or raises
BackendError with nothing persisted. Status escalation lives here, not in
the executor: callers request a transition and trust the returned record.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import ColumnElement, case, desc, distinct, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import ContentStatus, ContentType, UserStatus
from app.core.exceptions import AuditError, BackendError
from app.core.logging import get_logger
from app.core.security import verify_access_token
from app.models.admin_action import AdminActions
from app.models.content_asset import ContentAssets
from app.models.profile import Profiles
from app.models.user import Users
from app.models.user_report import UserReports
from app.models.user_warning import UserWarnings
from app.schemas.auth import AuthSession, IdentityRecord
from app.utils import utcnow

logger = get_logger(__name__)


def escalate(current: str, requested: str) -> str:
    """
    Return the status a user ends up in after requesting a transition.

    Moderation status only moves towards more severe states; requesting a
    milder state than the current one leaves the user where they are.
    """
    severity = UserStatus.SEVERITY
    if severity.get(requested, 0) > severity.get(current, 0):
        return requested
    return current


def remove_photo(photos: list[str], primary_idx: int, url: str) -> tuple[list[str], int]:
    """
    Drop a photo from a gallery and keep the primary index pointing at a photo.

    Removing the primary photo, or one before it, shifts the primary index
    back by one. An empty gallery gets index 0.
    """
    if url not in photos:
        return photos, primary_idx

    removed_idx = photos.index(url)
    remaining = [p for p in photos if p != url]
    if removed_idx <= primary_idx:
        primary_idx = max(0, primary_idx - 1)

    return remaining, max(0, min(primary_idx, len(remaining) - 1))


class ModerationStore:
    """SQLAlchemy-backed implementation of the admin pipeline's store."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ===== Identity =====

    async def authenticate_session(self, credential: str | None) -> AuthSession | None:
        """Exchange a session credential for a session, or None if there is none."""
        if not credential:
            return None

        user_id = verify_access_token(credential)
        if user_id is None:
            return None

        result = await self.db.execute(select(Users).where(Users.user_id == user_id))  # type: ignore[arg-type]
        user = result.scalar_one_or_none()
        if user is None:
            return None

        return AuthSession(user_id=user.user_id, email=user.email)

    async def get_identity_by_id(self, identity_id: str) -> IdentityRecord | None:
        """Fetch the full identity record (contact address and role claims)."""
        result = await self.db.execute(select(Users).where(Users.user_id == identity_id))  # type: ignore[arg-type]
        user = result.scalar_one_or_none()
        if user is None:
            return None

        return IdentityRecord(id=user.user_id, email=user.email, roles=list(user.roles or []))

    # ===== Moderation procedures =====

    @asynccontextmanager
    async def _procedure(self, name: str, target_id: str) -> AsyncIterator[None]:
        """Run a block as one all-or-nothing unit, mapping failures to BackendError."""
        try:
            yield
            await self.db.commit()
        except BackendError:
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("store_procedure_failed", procedure=name, target_id=target_id, error=str(e))
            raise BackendError(f"{name} failed") from e

    async def _lock_user(self, user_id: str) -> Users:
        result = await self.db.execute(
            select(Users).where(Users.user_id == user_id).with_for_update()  # type: ignore[arg-type]
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise BackendError("User not found")
        return user

    async def apply_warn(self, target_id: str, reason: str) -> dict[str, Any]:
        """
        Record a warning against a user and escalate them to at least "warned".

        Returns:
            The user's post-transition moderation state plus the new warning id
        """
        async with self._procedure("admin_warn_user", target_id):
            user = await self._lock_user(target_id)

            warning = UserWarnings(user_id=user.user_id, reason=reason)
            self.db.add(warning)

            user.warning_count += 1
            user.status = escalate(user.status, UserStatus.WARNED)

        return {
            "user_id": user.user_id,
            "status": user.status,
            "warning_count": user.warning_count,
            "warning_id": warning.id,
        }

    async def apply_ban(self, target_id: str, reason: str, is_hard_ban: bool) -> dict[str, Any]:
        """
        Ban (hard) or shadow-ban (soft) a user.

        A shadow ban never downgrades an existing hard ban.
        """
        requested = UserStatus.BANNED if is_hard_ban else UserStatus.SHADOW_BANNED

        async with self._procedure("admin_ban_user", target_id):
            user = await self._lock_user(target_id)

            user.status = escalate(user.status, requested)
            user.ban_reason = reason
            user.banned_at = utcnow()

        return {
            "user_id": user.user_id,
            "status": user.status,
            "is_hard_ban": is_hard_ban,
            "ban_reason": user.ban_reason,
            "banned_at": user.banned_at,
        }

    async def update_report(
        self,
        report_id: str,
        status: str,
        resolution: str,
        closed_at: datetime,
    ) -> UserReports:
        """
        Close out a report in a single conditional update.

        Raises:
            BackendError: if no report has this id, or the update fails
        """
        async with self._procedure("update_report", report_id):
            result = await self.db.execute(
                update(UserReports)
                .where(UserReports.id == report_id)  # type: ignore[arg-type]
                .values(status=status, resolution=resolution, closed_at=closed_at)
            )
            if result.rowcount == 0:
                raise BackendError("Report not found")

        result = await self.db.execute(
            select(UserReports)
            .where(UserReports.id == report_id)  # type: ignore[arg-type]
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def moderate_content(
        self,
        asset_id: str,
        status: str,
        reviewer_id: str,
        reviewed_at: datetime,
        reason: str | None = None,
        review_note: str | None = None,
    ) -> ContentAssets:
        """
        Record an admin's review of a content asset.

        A rejected photo is also removed from its owner's profile gallery, in
        the same transaction. Approving never touches the gallery.

        Raises:
            BackendError: if no asset has this id, or the update fails
        """
        async with self._procedure("moderate_content", asset_id):
            result = await self.db.execute(
                select(ContentAssets).where(ContentAssets.id == asset_id).with_for_update()  # type: ignore[arg-type]
            )
            asset = result.scalar_one_or_none()
            if asset is None:
                raise BackendError("Content asset not found")

            asset.status = status
            asset.reviewed_by = reviewer_id
            asset.reviewed_at = reviewed_at
            if review_note:
                asset.review_note = review_note
            if reason:
                asset.reason = reason

            if status == ContentStatus.REJECTED and asset.type == ContentType.PHOTO:
                await self._remove_from_gallery(asset.user_id, asset.url)

        return asset

    async def _remove_from_gallery(self, user_id: str, url: str) -> None:
        result = await self.db.execute(
            select(Profiles).where(Profiles.user_id == user_id).with_for_update()  # type: ignore[arg-type]
        )
        profile = result.scalar_one_or_none()
        if profile is None:
            return

        photos, primary_idx = remove_photo(list(profile.photos or []), profile.primary_photo_idx, url)
        profile.photos = photos
        profile.primary_photo_idx = primary_idx
        logger.info("profile_photo_removed", user_id=user_id, remaining=len(photos))

    # ===== Audit trail =====

    async def insert_audit_record(self, record: AdminActions) -> None:
        """
        Append one audit record in its own commit.

        Raises:
            AuditError: if the insert fails
        """
        try:
            self.db.add(record)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise AuditError(str(e)) from e

    async def list_audit_records(
        self,
        offset: int,
        limit: int,
        action: str | None = None,
        target_type: str | None = None,
        target_id: str | None = None,
        admin_id: str | None = None,
    ) -> tuple[int, list[AdminActions]]:
        """Return (total, page) of audit records, newest first."""
        query = select(AdminActions).where(
            *_audit_filters(action, target_type, target_id, admin_id)
        )

        count_query = select(func.count()).select_from(query.subquery())
        total_result = await self.db.execute(count_query)
        total = total_result.scalar() or 0

        query = query.order_by(desc(AdminActions.created_at)).offset(offset).limit(limit)  # type: ignore[arg-type]
        result = await self.db.execute(query)

        return total, list(result.scalars().all())

    async def summarize_audit_records(
        self,
        now: datetime,
        action: str | None = None,
        target_type: str | None = None,
        target_id: str | None = None,
        admin_id: str | None = None,
    ) -> dict[str, int]:
        """Counts for the audit page header: last 24h, last 7 days, distinct admins."""
        day_ago = now - timedelta(hours=24)
        week_ago = now - timedelta(days=7)

        query = select(
            func.count(case((AdminActions.created_at >= day_ago, 1))),  # type: ignore[operator]
            func.count(case((AdminActions.created_at >= week_ago, 1))),  # type: ignore[operator]
            func.count(distinct(AdminActions.admin_id)),
        ).where(*_audit_filters(action, target_type, target_id, admin_id))

        result = await self.db.execute(query)
        last_24h, last_7d, unique_admins = result.one()

        return {
            "last_24h": last_24h or 0,
            "last_7d": last_7d or 0,
            "unique_admins": unique_admins or 0,
        }


def _audit_filters(
    action: str | None,
    target_type: str | None,
    target_id: str | None,
    admin_id: str | None,
) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if action:
        conditions.append(AdminActions.action == action)  # type: ignore[arg-type]
    if target_type:
        conditions.append(AdminActions.target_type == target_type)  # type: ignore[arg-type]
    if target_id:
        conditions.append(AdminActions.target_id == target_id)  # type: ignore[arg-type]
    if admin_id:
        conditions.append(AdminActions.admin_id == admin_id)  # type: ignore[arg-type]
    return conditions
