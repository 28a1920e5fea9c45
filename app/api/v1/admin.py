"""
Admin API endpoints for user and report moderation.

Every endpoint requires an authenticated administrator (see
app.core.auth.require_admin) and provides:
- User moderation (warn, ban, shadow ban)
- Report triage (resolve, close)
- Content review (approve, reject)
- Audit trail listing with activity counts
- The caller's own admin identity

Moderation endpoints run the same sequence: resolve identity, authorize,
execute the verb through the backing store, then append to the audit trail.
The audit write is best-effort and never changes the response.
"""

from collections.abc import Mapping
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import AuditLogFilterParams, PaginationParams
from app.config import ModerationVerb
from app.core.auth import AdminIdentity, Store, get_client_ip, get_user_agent
from app.core.exceptions import AdminAPIError, BackendError
from app.core.logging import get_logger
from app.schemas.auth import Identity
from app.schemas.moderation import (
    ActionResponse,
    AdminActionListResponse,
    AdminActionResponse,
    AdminIdentityResponse,
    BanUserRequest,
    ErrorResponse,
    ModerateContentRequest,
    UpdateReportRequest,
    WarnUserRequest,
)
from app.services.audit import AuditLogger
from app.services.moderation import ModerationExecutor
from app.services.moderation_store import ModerationStore
from app.utils import utcnow

logger = get_logger(__name__)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
    401: {"model": ErrorResponse, "description": "Not an authenticated administrator"},
    500: {"model": ErrorResponse, "description": "Backing store failure"},
}

router = APIRouter(prefix="/admin", tags=["admin"], responses=ERROR_RESPONSES)


async def run_moderation_action(
    verb: str,
    admin: Identity,
    target_id: str | None,
    parameters: Mapping[str, Any],
    store: ModerationStore,
    request: Request,
) -> ActionResponse:
    """
    Execute a moderation verb and record it.

    Any unexpected exception is converted to a generic 500 so no internal
    detail reaches the caller.
    """
    executor = ModerationExecutor(store)
    try:
        outcome = await executor.execute(verb, admin, target_id, parameters)
    except AdminAPIError as e:
        logger.info("admin_action_rejected", verb=verb, target_id=target_id, error=e.message)
        raise
    except Exception as e:
        logger.exception("admin_action_crashed", verb=verb, target_id=target_id)
        raise BackendError("Internal server error") from e

    logger.info(
        "admin_action_applied",
        action=outcome.action,
        target_type=outcome.target_type,
        target_id=outcome.target_id,
    )

    audit = AuditLogger(store, ip_address=get_client_ip(request), user_agent=get_user_agent(request))
    await audit.record(
        admin_id=admin.id,
        action=outcome.action,
        target_type=outcome.target_type,
        target_id=outcome.target_id,
        payload=outcome.payload,
    )

    return ActionResponse(success=True, data=outcome.data)


# ===== User Moderation =====


@router.post("/warn-user", response_model=ActionResponse)
async def warn_user(
    body: WarnUserRequest,
    admin: AdminIdentity,
    store: Store,
    request: Request,
) -> ActionResponse:
    """
    Issue a warning to a user.

    Records a warning the user will see in the app and escalates an
    active user to "warned".
    """
    return await run_moderation_action(
        ModerationVerb.WARN_USER,
        admin,
        body.target_id,
        {"reason": body.reason},
        store,
        request,
    )


@router.post("/ban-user", response_model=ActionResponse)
async def ban_user(
    body: BanUserRequest,
    admin: AdminIdentity,
    store: Store,
    request: Request,
) -> ActionResponse:
    """
    Ban a user.

    isHardBan=true bans outright; isHardBan=false shadow-bans (the user can
    still use the app but is hidden from others). isHardBan must be given.
    """
    return await run_moderation_action(
        ModerationVerb.BAN_USER,
        admin,
        body.target_id,
        {"reason": body.reason, "is_hard_ban": body.is_hard_ban},
        store,
        request,
    )


# ===== Report Triage =====


@router.post("/update-report", response_model=ActionResponse)
async def update_report(
    body: UpdateReportRequest,
    admin: AdminIdentity,
    store: Store,
    request: Request,
) -> ActionResponse:
    """
    Resolve or close a user report.

    action="resolve" marks the report resolved (action taken);
    action="close" closes it with no action. Without a resolution text a
    default message for the action is stored.
    """
    return await run_moderation_action(
        ModerationVerb.UPDATE_REPORT,
        admin,
        body.report_id,
        {"action": body.action, "resolution": body.resolution},
        store,
        request,
    )


# ===== Content Review =====


@router.post("/moderate-content", response_model=ActionResponse)
async def moderate_content(
    body: ModerateContentRequest,
    admin: AdminIdentity,
    store: Store,
    request: Request,
) -> ActionResponse:
    """
    Approve or reject an uploaded photo or video.

    action="approve" makes the asset visible; action="reject" hides it and,
    for a photo, removes it from the owner's profile gallery. reason is only
    stored on rejection; reviewNote is an internal note for other admins.
    """
    return await run_moderation_action(
        ModerationVerb.MODERATE_CONTENT,
        admin,
        body.asset_id,
        {"action": body.action, "reason": body.reason, "review_note": body.review_note},
        store,
        request,
    )


# ===== Audit Trail =====


@router.get("/actions", response_model=AdminActionListResponse)
async def list_admin_actions(
    _: AdminIdentity,
    store: Store,
    pagination: Annotated[PaginationParams, Depends()],
    filters: Annotated[AuditLogFilterParams, Depends()],
) -> AdminActionListResponse:
    """
    List audit trail entries, newest first.

    The activity counts (last 24 hours, last 7 days, distinct admins) cover
    every entry matching the filters, not just the current page.
    """
    filter_kwargs = {
        "action": filters.action,
        "target_type": filters.target_type,
        "target_id": filters.target_id,
        "admin_id": filters.admin_id,
    }
    try:
        total, records = await store.list_audit_records(
            offset=pagination.offset, limit=pagination.per_page, **filter_kwargs
        )
        counts = await store.summarize_audit_records(utcnow(), **filter_kwargs)
    except Exception as e:
        logger.exception("admin_actions_list_failed")
        raise BackendError("Internal server error") from e

    return AdminActionListResponse(
        total=total,
        page=pagination.page,
        per_page=pagination.per_page,
        last_24h=counts["last_24h"],
        last_7d=counts["last_7d"],
        unique_admins=counts["unique_admins"],
        items=[AdminActionResponse.model_validate(r) for r in records],
    )


@router.get("/me", response_model=AdminIdentityResponse)
async def get_admin_me(admin: AdminIdentity) -> AdminIdentityResponse:
    """Return the calling administrator's identity."""
    return AdminIdentityResponse(id=admin.id, address=admin.address, is_admin=admin.is_admin)
