"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from cabinet_designer.application.config import LayoutStep


class ScriptRequest(BaseModel):
    """Request carrying a complete layout script."""

    config: dict[str, Any] = Field(..., description="Layout script JSON")


class CreateSessionRequest(BaseModel):
    """Request for opening an editing session.

    Without a script the session starts on the default empty carcass.
    """

    config: dict[str, Any] | None = Field(
        default=None, description="Optional layout script to seed the session with"
    )


class StepRequest(BaseModel):
    """Request for applying one editing step to a session."""

    step: LayoutStep = Field(..., description="Editing step, discriminated by action")
