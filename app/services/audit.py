"""Best-effort audit logging for admin actions."""

from typing import Any, Protocol

from app.core.logging import get_logger
from app.models.admin_action import AdminActions

logger = get_logger(__name__)


class AuditStore(Protocol):
    async def insert_audit_record(self, record: AdminActions) -> None: ...


class AuditLogger:
    """
    Appends one AdminActions row per successful moderation mutation.

    Called only after the mutation has committed. A failed insert is logged
    and swallowed: the mutation has already happened and its success is what
    the caller sees. There is no retry; the entry is lost.
    """

    def __init__(
        self,
        store: AuditStore,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.store = store
        self.ip_address = ip_address
        self.user_agent = user_agent

    async def record(
        self,
        admin_id: str,
        action: str,
        target_type: str,
        target_id: str,
        payload: dict[str, Any] | None = None,
    ) -> None:
        entry = AdminActions(
            admin_id=admin_id,
            action=action,
            target_type=target_type,
            target_id=target_id,
            payload=payload or {},
            ip_address=self.ip_address[:45] if self.ip_address else None,
            user_agent=self.user_agent[:255] if self.user_agent else None,
        )
        try:
            await self.store.insert_audit_record(entry)
        except Exception as e:
            logger.error(
                "admin_action_log_failed",
                action=action,
                target_type=target_type,
                target_id=target_id,
                error=str(e),
            )
            return

        logger.info("admin_action_logged", action=action, target_type=target_type, target_id=target_id)
