"""
Structured logging configuration using structlog.

Every line emitted while serving an admin request carries the request id
and, once authorization has succeeded, the acting admin's id. Audit
failures are only ever visible here, so they must be greppable: log calls
use a fixed event name plus keyword fields, e.g.

    logger.error("admin_action_log_failed", action="ban_user", target_id="u1")
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any, cast

import structlog
from structlog.types import EventDict, Processor

from app.config import settings

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def add_request_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    request_id = request_id_ctx.get(None)
    if request_id:
        event_dict.setdefault("request_id", request_id)
    return event_dict


def use_json_output() -> bool:
    """Console output only for local development with LOG_FORMAT != json."""
    return not (settings.ENVIRONMENT == "development" and settings.LOG_FORMAT != "json")


def build_processors(json_output: bool) -> list[Processor]:
    """Processor chain shared by both renderers, ending in the chosen one."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_request_id,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def configure_logging() -> None:
    """Configure structlog and the stdlib root logger. Called once at startup."""
    structlog.configure(
        processors=build_processors(use_json_output()),
        wrapper_class=structlog.make_filtering_bound_logger(logging.NOTSET),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    if settings.ENVIRONMENT != "development":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__)
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


def set_request_context(request_id: str) -> None:
    """Start a request: drop context left by a previous one and set its id."""
    structlog.contextvars.clear_contextvars()
    request_id_ctx.set(request_id)


def set_admin_context(admin_id: str) -> None:
    """Attach the authorized admin's id to subsequent logs in this request."""
    structlog.contextvars.bind_contextvars(admin_id=admin_id)


def clear_request_context() -> None:
    """Clear context variables after request completes."""
    request_id_ctx.set(None)
    structlog.contextvars.clear_contextvars()
