"""Layout constants for the cabinet designer engine.

This module provides:
- Carcass dimension limits (width, height, depth, plinth)
- LayoutConstants, the tunable clearances and tolerances used by the engine

All values are in millimeters.
"""

from __future__ import annotations

from dataclasses import dataclass


# Allowed outer dimensions as (minimum, maximum)
WIDTH_LIMITS: tuple[float, float] = (132.0, 2000.0)
HEIGHT_LIMITS: tuple[float, float] = (132.0, 3000.0)
DEPTH_LIMITS: tuple[float, float] = (100.0, 1000.0)
BASE_LIMITS: tuple[float, float] = (60.0, 200.0)

DIMENSION_LIMITS: dict[str, tuple[float, float]] = {
    "width": WIDTH_LIMITS,
    "height": HEIGHT_LIMITS,
    "depth": DEPTH_LIMITS,
    "base": BASE_LIMITS,
}

# Default carcass used by a fresh design session
DEFAULT_WIDTH = 800.0
DEFAULT_HEIGHT = 1800.0
DEFAULT_DEPTH = 500.0
DEFAULT_BASE = 100.0


@dataclass(frozen=True)
class LayoutConstants:
    """Clearances and tolerances for divider and rod placement.

    Attributes:
        panel_thickness: Material thickness of every wall and divider.
        min_section: Minimum clear span on either side of a divider.
        min_rod_length: Narrowest section that can hold a rod.
        rod_diameter: Diameter of a hanging rod (bill of materials only).
        rod_height_from_bottom: Default mount height of a rod.
        rod_inset: Horizontal gap between a rod end and the section edge.
        rod_edge_clearance: Vertical gap kept between a rod and section edges.
        rod_top_clearance: Clearance kept above a rod placed at default height.
        rod_fallback_ratio: Fraction of section height used when a requested
            rod height does not fit.
        rod_min_spacing: Section height needed per rod for bulk insertion.
        divider_hit_tolerance: Pick distance for find_divider_at.
        rod_hit_tolerance: Pick distance for find_rod_at.
        max_history: Capacity of the undo/redo history.
    """

    panel_thickness: float = 16.0
    min_section: float = 100.0
    min_rod_length: float = 300.0
    rod_diameter: float = 12.0
    rod_height_from_bottom: float = 1800.0
    rod_inset: float = 20.0
    rod_edge_clearance: float = 50.0
    rod_top_clearance: float = 200.0
    rod_fallback_ratio: float = 0.8
    rod_min_spacing: float = 100.0
    divider_hit_tolerance: float = 8.0
    rod_hit_tolerance: float = 10.0
    max_history: int = 50

    def __post_init__(self) -> None:
        if self.panel_thickness <= 0:
            raise ValueError("panel_thickness must be positive")
        if self.min_section <= 0:
            raise ValueError("min_section must be positive")
        if self.min_rod_length <= 2 * self.rod_inset:
            raise ValueError("min_rod_length must exceed twice the rod inset")
        if not 0 < self.rod_fallback_ratio < 1:
            raise ValueError("rod_fallback_ratio must be between 0 and 1")
        if self.max_history < 1:
            raise ValueError("max_history must be at least 1")

    @property
    def min_divider_gap(self) -> float:
        """Smallest pos-to-pos distance between two facing dividers."""
        return self.panel_thickness + self.min_section


DEFAULT_CONSTANTS = LayoutConstants()
