"""Pydantic models for layout script configuration files.

A layout script describes a carcass, optional engine overrides and an ordered
list of editing steps that are replayed against a design session:

    {
        "schema_version": "1.0",
        "cabinet": {"width": 800, "height": 1800, "depth": 500, "base": 100},
        "steps": [
            {"action": "add_divider", "orientation": "h", "pos": 890, "start": 0, "end": 768},
            {"action": "add_rod", "section": 1}
        ]
    }
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from cabinet_designer.domain.constants import (
    BASE_LIMITS,
    DEFAULT_BASE,
    DEFAULT_DEPTH,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    DEPTH_LIMITS,
    HEIGHT_LIMITS,
    WIDTH_LIMITS,
)
from cabinet_designer.domain.services.divider_engine import (
    MAX_DIVIDE_COUNT,
    MIN_DIVIDE_COUNT,
)
from cabinet_designer.domain.services.rod_engine import MAX_BULK_RODS, MIN_BULK_RODS
from cabinet_designer.domain.value_objects import Orientation

# Supported schema versions for layout scripts
# Version 1.0: Carcass, engine constants, history size and editing steps
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

MAX_HISTORY_SIZE = 500


class CabinetDimensionsConfig(BaseModel):
    """Outer carcass dimensions in millimeters."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=DEFAULT_WIDTH, ge=WIDTH_LIMITS[0], le=WIDTH_LIMITS[1])
    height: float = Field(default=DEFAULT_HEIGHT, ge=HEIGHT_LIMITS[0], le=HEIGHT_LIMITS[1])
    depth: float = Field(default=DEFAULT_DEPTH, ge=DEPTH_LIMITS[0], le=DEPTH_LIMITS[1])
    base: float = Field(default=DEFAULT_BASE, ge=BASE_LIMITS[0], le=BASE_LIMITS[1])


class EngineConstantsConfig(BaseModel):
    """Overrides for the engine's clearances and tolerances.

    Unset fields keep the engine defaults.
    """

    model_config = ConfigDict(extra="forbid")

    panel_thickness: float | None = Field(default=None, gt=0, le=50)
    min_section: float | None = Field(default=None, gt=0)
    min_rod_length: float | None = Field(default=None, gt=0)
    rod_diameter: float | None = Field(default=None, gt=0)
    rod_height_from_bottom: float | None = Field(default=None, gt=0)
    rod_inset: float | None = Field(default=None, ge=0)
    rod_edge_clearance: float | None = Field(default=None, ge=0)
    rod_top_clearance: float | None = Field(default=None, ge=0)
    rod_fallback_ratio: float | None = Field(default=None, gt=0, lt=1)
    rod_min_spacing: float | None = Field(default=None, gt=0)
    divider_hit_tolerance: float | None = Field(default=None, ge=0)
    rod_hit_tolerance: float | None = Field(default=None, ge=0)


class HistoryConfig(BaseModel):
    """Undo/redo history settings."""

    model_config = ConfigDict(extra="forbid")

    max_size: int = Field(default=50, ge=1, le=MAX_HISTORY_SIZE)


# =============================================================================
# Steps
# =============================================================================


class _StepBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


class AddDividerStep(_StepBase):
    """Insert a divider with an explicit position and span."""

    action: Literal["add_divider"]
    orientation: Orientation
    pos: float
    start: float = Field(..., ge=0)
    end: float = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_span(self) -> "AddDividerStep":
        if self.end <= self.start:
            raise ValueError("end must be greater than start")
        return self


class AddShelfStep(_StepBase):
    """Insert a shelf across the section under a point."""

    action: Literal["add_shelf"]
    x: float
    y: float


class AddStandStep(_StepBase):
    """Insert a stand across the section under a point."""

    action: Literal["add_stand"]
    x: float
    y: float


class MoveDividerStep(_StepBase):
    action: Literal["move_divider"]
    divider_id: int = Field(..., ge=1)
    pos: float


class RemoveDividerStep(_StepBase):
    action: Literal["remove_divider"]
    divider_id: int = Field(..., ge=1)


class DivideSectionStep(_StepBase):
    """Split a section into equal parts."""

    action: Literal["divide_section"]
    section: int = Field(..., ge=0)
    orientation: Orientation
    count: int = Field(..., ge=MIN_DIVIDE_COUNT, le=MAX_DIVIDE_COUNT)


class AddRodStep(_StepBase):
    """Add a rod; y defaults to the standard mount height."""

    action: Literal["add_rod"]
    section: int = Field(..., ge=0)
    y: float | None = None


class AddRodsStep(_StepBase):
    action: Literal["add_rods"]
    section: int = Field(..., ge=0)
    count: int = Field(..., ge=MIN_BULK_RODS, le=MAX_BULK_RODS)


class MoveRodStep(_StepBase):
    action: Literal["move_rod"]
    rod_id: int = Field(..., ge=1)
    x: float
    y: float


class RemoveRodStep(_StepBase):
    action: Literal["remove_rod"]
    rod_id: int = Field(..., ge=1)


class ResizeStep(_StepBase):
    """Change carcass dimensions; out-of-range values are clamped."""

    action: Literal["resize"]
    width: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    depth: float | None = Field(default=None, gt=0)
    base: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def validate_any_dimension(self) -> "ResizeStep":
        if all(v is None for v in (self.width, self.height, self.depth, self.base)):
            raise ValueError("resize needs at least one of width, height, depth or base")
        return self


class UndoStep(_StepBase):
    action: Literal["undo"]


class RedoStep(_StepBase):
    action: Literal["redo"]


LayoutStep = Annotated[
    Union[
        AddDividerStep,
        AddShelfStep,
        AddStandStep,
        MoveDividerStep,
        RemoveDividerStep,
        DivideSectionStep,
        AddRodStep,
        AddRodsStep,
        MoveRodStep,
        RemoveRodStep,
        ResizeStep,
        UndoStep,
        RedoStep,
    ],
    Field(discriminator="action"),
]


class LayoutConfiguration(BaseModel):
    """Root model of a layout script.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        cabinet: Outer carcass dimensions
        constants: Optional engine overrides
        history: Undo/redo history settings
        steps: Editing steps, replayed in order
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    cabinet: CabinetDimensionsConfig = Field(default_factory=CabinetDimensionsConfig)
    constants: EngineConstantsConfig = Field(default_factory=EngineConstantsConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    steps: list[LayoutStep] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept known versions and newer minor versions of a known major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
