"""Application layer - editing sessions, layout scripts and use cases."""

from .commands import ListCarcassPartsCommand, RunLayoutScriptCommand
from .dtos import DimensionsInput, LayoutScriptResult, StepOutcome
from .session import DesignSession, DragState, InteractionState, RemovalPreview, ToolMode

__all__ = [
    "DesignSession",
    "DimensionsInput",
    "DragState",
    "InteractionState",
    "LayoutScriptResult",
    "ListCarcassPartsCommand",
    "RemovalPreview",
    "RunLayoutScriptCommand",
    "StepOutcome",
    "ToolMode",
]
