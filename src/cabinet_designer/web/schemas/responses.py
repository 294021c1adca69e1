"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class CabinetSchema(BaseModel):
    """Outer and interior carcass dimensions."""

    width: float = Field(..., description="Outer width in mm")
    height: float = Field(..., description="Outer height in mm")
    depth: float = Field(..., description="Outer depth in mm")
    base: float = Field(..., description="Plinth height in mm")
    interior_width: float = Field(..., description="Width between the side panels")
    interior_height: float = Field(..., description="Height between bottom and top panels")


class DividerSchema(BaseModel):
    """A shelf (h) or stand (v) in interior coordinates."""

    id: int
    type: str = Field(..., description="'h' for shelves, 'v' for stands")
    pos: float = Field(..., description="Leading edge on the perpendicular axis")
    start: float
    end: float


class RodSchema(BaseModel):
    """A hanging rod."""

    id: int
    x: float
    y: float
    length: float
    section_id: int = Field(..., description="Index into the current sections")


class SectionSchema(BaseModel):
    """A free interior rectangle left by the dividers."""

    x: float
    y: float
    w: float
    h: float


class PartSchema(BaseModel):
    """One line of the bill of materials."""

    name: str
    w: float
    h: float
    d: float


class StepOutcomeSchema(BaseModel):
    """Outcome of one editing step."""

    index: int
    action: str
    success: bool
    message: str


class LayoutSchema(BaseModel):
    """Complete layout of one cabinet."""

    cabinet: CabinetSchema
    dividers: list[DividerSchema] = Field(default_factory=list)
    rods: list[RodSchema] = Field(default_factory=list)
    sections: list[SectionSchema] = Field(default_factory=list)
    parts: list[PartSchema] = Field(default_factory=list)


class BuildResponseSchema(BaseModel):
    """Response for replaying a layout script."""

    all_steps_succeeded: bool = Field(..., description="False when any step was rejected")
    layout: LayoutSchema
    steps: list[StepOutcomeSchema] = Field(default_factory=list)


class PartsListSchema(BaseModel):
    """Response for the parts of an empty carcass."""

    parts: list[PartSchema]


class ValidationResultSchema(BaseModel):
    """Response for layout script validation."""

    is_valid: bool = Field(..., description="Whether the script is valid")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors with their JSON paths"
    )


class HistorySchema(BaseModel):
    """Undo/redo state of a session."""

    can_undo: bool
    can_redo: bool
    length: int
    index: int


class SessionSchema(BaseModel):
    """Current state of an editing session."""

    session_id: str
    layout: LayoutSchema
    history: HistorySchema


class StepResultSchema(BaseModel):
    """Response for applying one step to a session."""

    outcome: StepOutcomeSchema
    session: SessionSchema
