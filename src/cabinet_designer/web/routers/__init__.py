"""API routers for the REST API."""

from cabinet_designer.web.routers.layouts import router as layouts_router
from cabinet_designer.web.routers.sessions import router as sessions_router
from cabinet_designer.web.routers.validate import router as validate_router

__all__ = [
    "layouts_router",
    "sessions_router",
    "validate_router",
]
