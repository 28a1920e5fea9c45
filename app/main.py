"""
FastAPI Application - Moderation Admin API
Privileged moderation actions (warn, ban, report triage) with an audit trail
"""

import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.core.exceptions import AdminAPIError
from app.core.json_response import UTCJSONResponse
from app.core.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup and shutdown events"""
    configure_logging()
    logger.info(
        "api_starting",
        environment=settings.ENVIRONMENT,
        database=settings.DATABASE_URL.split("@")[1] if "@" in settings.DATABASE_URL else "configured",
    )
    yield
    logger.info("api_stopping")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Moderation and administration API: warnings, bans and report triage",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_id_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag every log line of a request with its id and echo it back."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    set_request_context(request_id)
    try:
        response = await call_next(request)
    finally:
        clear_request_context()
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(AdminAPIError)
async def admin_api_error_handler(request: Request, exc: AdminAPIError) -> UTCJSONResponse:
    """Render pipeline errors as the standard failure envelope."""
    return UTCJSONResponse.failure(exc.status_code, exc.message, exc.fields)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> UTCJSONResponse:
    """Malformed request bodies are input errors (400), not 422s."""
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    return UTCJSONResponse.failure(status.HTTP_400_BAD_REQUEST, "Invalid request body", fields)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint - API information"""
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint"""
    return {"status": "healthy"}


# Import and include routers
from app.api.v1 import router as api_v1_router  # noqa: E402

app.include_router(api_v1_router, prefix=settings.API_V1_STR)
