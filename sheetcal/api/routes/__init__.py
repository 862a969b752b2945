"""API Routes Package

This module aggregates all route handlers into a single router
that can be included in the main FastAPI application.
"""

from fastapi import APIRouter

from .events import router as events_router
from .status import router as status_router


def build_api_router(prefix: str = "/api") -> APIRouter:
    """Create the main API router mounted under ``prefix``."""
    api_router = APIRouter(prefix=prefix)

    # Include all sub-routers
    api_router.include_router(status_router, tags=["status"])
    api_router.include_router(events_router, prefix="/event", tags=["events"])
    return api_router


__all__ = ["build_api_router"]
