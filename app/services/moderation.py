"""
Moderation action executor.

Validates a moderation request, applies it through the backing store and
describes what should be written to the audit trail. Validation always
happens before the store is touched.

Entry-point verbs (ModerationVerb) map to audit actions (AdminActionType):
- warn_user      -> warn_user
- ban_user       -> ban_user (hard) / shadow_ban_user (soft)
- update_report  -> resolve_report / close_report
- moderate_content -> approve_content / reject_content
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from app.config import (
    AdminActionType,
    ContentAction,
    ContentStatus,
    ModerationVerb,
    ReportAction,
    TargetType,
)
from app.core.exceptions import ValidationError
from app.models.content_asset import ContentAssets
from app.models.user_report import UserReports
from app.schemas.auth import Identity
from app.schemas.moderation import ContentAssetResponse, UserReportResponse
from app.utils import utcnow


class ModerationBackend(Protocol):
    async def apply_warn(self, target_id: str, reason: str) -> dict[str, Any]: ...

    async def apply_ban(self, target_id: str, reason: str, is_hard_ban: bool) -> dict[str, Any]: ...

    async def update_report(
        self, report_id: str, status: str, resolution: str, closed_at: datetime
    ) -> UserReports: ...

    async def moderate_content(
        self,
        asset_id: str,
        status: str,
        reviewer_id: str,
        reviewed_at: datetime,
        reason: str | None = None,
        review_note: str | None = None,
    ) -> ContentAssets: ...


@dataclass
class ActionOutcome:
    """Result of a successful moderation action and the audit entry it calls for."""

    action: str
    target_type: str
    target_id: str
    data: dict[str, Any]
    payload: dict[str, Any] = field(default_factory=dict)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _require(parameters: Mapping[str, Any], *names: str) -> None:
    missing = [name for name in names if _is_blank(parameters.get(name))]
    if missing:
        raise ValidationError("Missing required fields", missing)


Handler = Callable[[Identity, str, Mapping[str, Any]], Awaitable[ActionOutcome]]


class ModerationExecutor:
    """Applies the fixed catalog of moderation verbs."""

    def __init__(self, store: ModerationBackend) -> None:
        self.store = store
        self._handlers: dict[str, Handler] = {
            ModerationVerb.WARN_USER: self._warn_user,
            ModerationVerb.BAN_USER: self._ban_user,
            ModerationVerb.UPDATE_REPORT: self._update_report,
            ModerationVerb.MODERATE_CONTENT: self._moderate_content,
        }

    async def execute(
        self,
        verb: str,
        admin: Identity,
        target_id: str | None,
        parameters: Mapping[str, Any],
    ) -> ActionOutcome:
        """
        Validate and apply one moderation verb.

        Args:
            verb: One of the ModerationVerb constants
            admin: The authorized caller
            target_id: User id (warn/ban), report id (update_report) or asset id
                (moderate_content)
            parameters: Verb-specific inputs (reason, is_hard_ban, action,
                resolution, review_note)

        Raises:
            ValidationError: input is missing or malformed; the store was not called
            BackendError: the store rejected or failed the mutation
        """
        handler = self._handlers.get(verb)
        if handler is None:
            raise ValidationError("Unknown moderation action", ["verb"])

        return await handler(admin, target_id or "", parameters)

    async def _warn_user(
        self, admin: Identity, target_id: str, parameters: Mapping[str, Any]
    ) -> ActionOutcome:
        _require({"target_id": target_id, **parameters}, "target_id", "reason")
        reason = parameters["reason"]

        data = await self.store.apply_warn(target_id, reason)

        return ActionOutcome(
            action=AdminActionType.WARN_USER,
            target_type=TargetType.USER,
            target_id=target_id,
            data=data,
            payload={"reason": reason},
        )

    async def _ban_user(
        self, admin: Identity, target_id: str, parameters: Mapping[str, Any]
    ) -> ActionOutcome:
        # is_hard_ban=False is valid; only absence is an error
        _require({"target_id": target_id, **parameters}, "target_id", "reason", "is_hard_ban")
        is_hard_ban = parameters["is_hard_ban"]
        if not isinstance(is_hard_ban, bool):
            raise ValidationError("isHardBan must be a boolean", ["is_hard_ban"])
        reason = parameters["reason"]

        data = await self.store.apply_ban(target_id, reason, is_hard_ban)

        return ActionOutcome(
            action=AdminActionType.BAN_USER if is_hard_ban else AdminActionType.SHADOW_BAN_USER,
            target_type=TargetType.USER,
            target_id=target_id,
            data=data,
            payload={"reason": reason, "isHardBan": is_hard_ban},
        )

    async def _update_report(
        self, admin: Identity, report_id: str, parameters: Mapping[str, Any]
    ) -> ActionOutcome:
        _require({"report_id": report_id, **parameters}, "report_id", "action")
        action = parameters["action"]
        if action not in ReportAction.STATUSES:
            raise ValidationError("Invalid action", ["action"])

        status = ReportAction.STATUSES[action]
        resolution = parameters.get("resolution") or ReportAction.DEFAULT_RESOLUTIONS[action]

        report = await self.store.update_report(report_id, status, resolution, closed_at=utcnow())

        return ActionOutcome(
            action=ReportAction.AUDIT_ACTIONS[action],
            target_type=TargetType.REPORT,
            target_id=report_id,
            data=UserReportResponse.model_validate(report).model_dump(),
            payload={"status": status, "resolution": resolution},
        )

    async def _moderate_content(
        self, admin: Identity, asset_id: str, parameters: Mapping[str, Any]
    ) -> ActionOutcome:
        _require({"asset_id": asset_id, **parameters}, "asset_id", "action")
        action = parameters["action"]
        if action not in ContentAction.STATUSES:
            raise ValidationError("Invalid action", ["action"])

        status = ContentAction.STATUSES[action]
        reason = parameters.get("reason") if status == ContentStatus.REJECTED else None
        review_note = parameters.get("review_note")

        asset = await self.store.moderate_content(
            asset_id,
            status,
            reviewer_id=admin.id,
            reviewed_at=utcnow(),
            reason=reason,
            review_note=review_note,
        )

        payload: dict[str, Any] = {"status": status}
        if reason:
            payload["reason"] = reason
        if review_note:
            payload["reviewNote"] = review_note

        return ActionOutcome(
            action=ContentAction.AUDIT_ACTIONS[action],
            target_type=TargetType.CONTENT,
            target_id=asset_id,
            data=ContentAssetResponse.model_validate(asset).model_dump(),
            payload=payload,
        )
