"""
API v1 Router
"""

from fastapi import APIRouter

from app.api.v1 import admin

router = APIRouter()

# Include all endpoint routers
router.include_router(admin.router)

__all__ = ["router"]
