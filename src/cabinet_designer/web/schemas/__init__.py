"""Pydantic schemas for the REST API."""

from cabinet_designer.web.schemas.requests import (
    CreateSessionRequest,
    ScriptRequest,
    StepRequest,
)
from cabinet_designer.web.schemas.responses import (
    BuildResponseSchema,
    CabinetSchema,
    DividerSchema,
    HistorySchema,
    LayoutSchema,
    PartSchema,
    PartsListSchema,
    RodSchema,
    SectionSchema,
    SessionSchema,
    StepOutcomeSchema,
    StepResultSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "CreateSessionRequest",
    "ScriptRequest",
    "StepRequest",
    # Responses
    "BuildResponseSchema",
    "CabinetSchema",
    "DividerSchema",
    "HistorySchema",
    "LayoutSchema",
    "PartSchema",
    "PartsListSchema",
    "RodSchema",
    "SectionSchema",
    "SessionSchema",
    "StepOutcomeSchema",
    "StepResultSchema",
    "ValidationResultSchema",
]
