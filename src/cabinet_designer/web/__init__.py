"""FastAPI REST API for the cabinet designer.

This module exposes layout script replay, validation, carcass parts lists
and server-held editing sessions over HTTP.

Usage:
    uvicorn cabinet_designer.web:app --reload
"""

from cabinet_designer.web.app import app, create_app

__all__ = ["app", "create_app"]
