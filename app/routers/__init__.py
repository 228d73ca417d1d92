"""API routers."""

from app.routers.admin import router as admin_router
from app.routers.applications import router as applications_router

__all__ = ["admin_router", "applications_router"]
