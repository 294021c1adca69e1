"""The cabinet aggregate: carcass dimensions, dividers, rods and sections."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .constants import DEFAULT_CONSTANTS, DIMENSION_LIMITS, LayoutConstants
from .entities import CabinetState, Divider, NearestShelves, Part, Rod
from .services.divider_engine import DividerConstraintEngine
from .services.resize_adapter import ResizeAdapter
from .services.rod_engine import RodPlacementEngine
from .services.section_partitioner import SectionPartitioner
from .value_objects import Limits, Orientation, SectionRect, clamp

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Cabinet:
    """A carcass and the layout of its interior.

    Sections are derived from the dividers and must never be edited
    directly. Every mutation entry point returns True on success and False
    when it was rejected, in which case nothing changed.

    Attributes:
        width: Outer width in millimeters.
        height: Outer height in millimeters, plinth included.
        depth: Outer depth in millimeters.
        base: Plinth height in millimeters.
        constants: Clearances and tolerances used by the engine.
        dividers: Shelves and stands in insertion order. The order matters for
            partitioning.
        rods: Hanging rods.
        sections: Free regions of the interior, recomputed by update_sections.
        partitioned_interior: Interior (width, height) the current sections
            were computed for.
    """

    width: float
    height: float
    depth: float
    base: float
    constants: LayoutConstants = DEFAULT_CONSTANTS
    dividers: list[Divider] = field(default_factory=list)
    rods: list[Rod] = field(default_factory=list)
    sections: list[SectionRect] = field(init=False, default_factory=list)
    partitioned_interior: tuple[float, float] | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        for name, (lower, upper) in DIMENSION_LIMITS.items():
            value = getattr(self, name)
            if not lower <= value <= upper:
                raise ValueError(f"{name} must be between {lower:g} and {upper:g}, got {value:g}")

        self._partitioner = SectionPartitioner(self.constants)
        self._divider_engine = DividerConstraintEngine(self.constants)
        self._rod_engine = RodPlacementEngine(self.constants)
        self._resize_adapter = ResizeAdapter(self.constants)
        self._next_id = self._first_free_id()
        self.update_sections()

    # -- derived geometry --------------------------------------------------

    @property
    def interior_width(self) -> float:
        """Width between the side walls."""
        return self.width - 2 * self.constants.panel_thickness

    @property
    def interior_height(self) -> float:
        """Height between top and bottom panels, above the plinth."""
        return self.height - self.base - 2 * self.constants.panel_thickness

    def extent_along(self, orientation: Orientation) -> float:
        """Interior size on the axis a divider of this orientation moves on."""
        if Orientation(orientation) is Orientation.VERTICAL:
            return self.interior_width
        return self.interior_height

    def extent_across(self, orientation: Orientation) -> float:
        """Interior size on the axis a divider of this orientation spans."""
        if Orientation(orientation) is Orientation.VERTICAL:
            return self.interior_height
        return self.interior_width

    def next_id(self) -> int:
        """Allocate an identifier for a new divider or rod."""
        allocated = self._next_id
        self._next_id += 1
        return allocated

    def _first_free_id(self) -> int:
        ids = [d.id for d in self.dividers] + [r.id for r in self.rods]
        return max(ids, default=0) + 1

    def update_sections(self) -> None:
        """Recompute sections from the dividers, then re-anchor rods."""
        self.sections = self._partitioner.partition(
            self.interior_width, self.interior_height, self.dividers
        )
        self.partitioned_interior = (self.interior_width, self.interior_height)
        self.refresh_rod_affinities()

    def refresh_rod_affinities(self) -> None:
        """Point every rod at the section it now lies in."""
        self._rod_engine.refresh_rod_affinities(self)

    def update_interior_dimensions(self) -> None:
        """Adapt the layout after width, height or base were changed."""
        self._resize_adapter.update_interior_dimensions(self)

    def resolve_divider_conflicts(self) -> None:
        self._resize_adapter.resolve_divider_conflicts(self)

    def resize(
        self,
        width: float | None = None,
        height: float | None = None,
        depth: float | None = None,
        base: float | None = None,
    ) -> bool:
        """Change carcass dimensions, clamped to their allowed ranges.

        Always succeeds; dividers that no longer fit may be dropped.
        """
        requested = {"width": width, "height": height, "depth": depth, "base": base}
        for name, value in requested.items():
            if value is not None:
                lower, upper = DIMENSION_LIMITS[name]
                setattr(self, name, clamp(value, lower, upper))

        self.update_interior_dimensions()
        return True

    # -- queries -----------------------------------------------------------

    def find_section_index(self, x: float, y: float) -> int | None:
        for index, section in enumerate(self.sections):
            if section.contains(x, y):
                return index
        return None

    def find_section_at(self, x: float, y: float) -> SectionRect | None:
        index = self.find_section_index(x, y)
        return None if index is None else self.sections[index]

    def section_has_rods(self, section_index: int) -> bool:
        return any(rod.section_id == section_index for rod in self.rods)

    def get_divider(self, divider_id: int) -> Divider | None:
        return next((d for d in self.dividers if d.id == divider_id), None)

    def get_rod(self, rod_id: int) -> Rod | None:
        return next((r for r in self.rods if r.id == rod_id), None)

    def find_divider_at(
        self, x: float, y: float, tolerance: float | None = None
    ) -> Divider | None:
        return self._divider_engine.find_divider_at(self, x, y, tolerance)

    def find_rod_at(self, x: float, y: float, tolerance: float | None = None) -> Rod | None:
        return self._rod_engine.find_rod_at(self, x, y, tolerance)

    def get_divider_limits(self, divider: Divider) -> Limits:
        return self._divider_engine.get_divider_limits(self, divider)

    def find_dependent_dividers(self, divider: Divider) -> list[Divider]:
        return self._divider_engine.find_dependent_dividers(self, divider)

    def find_nearest_shelves_to_rod(self, rod: Rod) -> NearestShelves:
        return self._rod_engine.find_nearest_shelves_to_rod(self, rod)

    def get_all_parts(self) -> list[Part]:
        """Bill of materials: carcass panels, then dividers, then rods."""
        thickness = self.constants.panel_thickness
        parts = [
            Part("Left side", thickness, self.height, self.depth),
            Part("Right side", thickness, self.height, self.depth),
            Part("Bottom", self.interior_width, thickness, self.depth),
            Part("Top", self.interior_width, thickness, self.depth),
            Part("Base", self.interior_width, self.base, thickness),
        ]

        counters = {Orientation.HORIZONTAL: 0, Orientation.VERTICAL: 0}
        for divider in self.dividers:
            counters[divider.orientation] += 1
            name = f"{divider.orientation.label} {counters[divider.orientation]}"
            if divider.is_vertical:
                parts.append(Part(name, thickness, divider.length, self.depth))
            else:
                parts.append(Part(name, divider.length, thickness, self.depth))

        diameter = self.constants.rod_diameter
        for number, rod in enumerate(self.rods, start=1):
            parts.append(Part(f"Rod {number}", rod.length, diameter, diameter))

        return parts

    # -- divider mutations -------------------------------------------------

    def can_add_divider(
        self, orientation: Orientation, pos: float, start: float, end: float
    ) -> bool:
        return self._divider_engine.can_add_divider(self, orientation, pos, start, end)

    def add_divider(
        self, orientation: Orientation, pos: float, start: float, end: float
    ) -> bool:
        return self._divider_engine.add_divider(self, orientation, pos, start, end)

    def divide_section(self, section_index: int, orientation: Orientation, count: int) -> bool:
        return self._divider_engine.divide_section(self, section_index, orientation, count)

    def move_divider(self, divider_id: int, new_pos: float) -> bool:
        return self._divider_engine.move_divider(self, divider_id, new_pos)

    def remove_divider(self, divider_id: int) -> bool:
        return self._divider_engine.remove_divider(self, divider_id)

    # -- rod mutations -----------------------------------------------------

    def add_rod(self, section_index: int, y: float | None = None) -> bool:
        return self._rod_engine.add_rod(self, section_index, y)

    def add_rods(self, section_index: int, count: int) -> bool:
        return self._rod_engine.add_rods(self, section_index, count)

    def move_rod(self, rod_id: int, new_x: float, new_y: float) -> bool:
        return self._rod_engine.move_rod(self, rod_id, new_x, new_y)

    def remove_rod(self, rod_id: int) -> bool:
        return self._rod_engine.remove_rod(self, rod_id)

    # -- snapshots ---------------------------------------------------------

    def get_state(self) -> CabinetState:
        """Snapshot the cabinet; the result shares nothing with it."""
        return CabinetState(
            width=self.width,
            height=self.height,
            depth=self.depth,
            base=self.base,
            dividers=tuple(d.copy() for d in self.dividers),
            rods=tuple(r.copy() for r in self.rods),
        )

    def set_state(self, state: CabinetState) -> None:
        """Restore a snapshot and re-derive sections.

        The id allocator never moves backwards, so ids stay unique across
        undo and redo.
        """
        self.width = state.width
        self.height = state.height
        self.depth = state.depth
        self.base = state.base
        self.dividers = [d.copy() for d in state.dividers]
        self.rods = [r.copy() for r in state.rods]
        self._next_id = max(self._next_id, self._first_free_id())
        self.update_sections()
