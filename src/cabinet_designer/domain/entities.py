"""Domain entities for the cabinet layout engine."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from .value_objects import Orientation, ranges_overlap


@dataclass
class Divider:
    """A shelf (horizontal) or stand (vertical) panel inside the carcass.

    Attributes:
        orientation: Shelf or stand.
        pos: Leading edge on the perpendicular axis. The panel occupies
            [pos, pos + panel_thickness).
        start: Beginning of the span along the parallel axis.
        end: End of the span along the parallel axis.
        id: Identifier, unique within a cabinet for the divider's lifetime.
    """

    orientation: Orientation
    pos: float
    start: float
    end: float
    id: int

    def __post_init__(self) -> None:
        self.orientation = Orientation(self.orientation)

    @property
    def is_vertical(self) -> bool:
        return self.orientation is Orientation.VERTICAL

    @property
    def length(self) -> float:
        """Physical length of the panel along its span."""
        return self.end - self.start

    def span_overlaps(self, other: "Divider") -> bool:
        """Check whether the spans of two dividers overlap."""
        return ranges_overlap(self.start, self.end, other.start, other.end)

    def copy(self) -> "Divider":
        return replace(self)


@dataclass
class Rod:
    """A hanging rail confined to one section.

    Attributes:
        id: Identifier, unique within a cabinet.
        x: Left end in interior coordinates.
        y: Vertical centre line in interior coordinates.
        length: Rail length.
        section_id: Index into the cabinet's current sections. Only valid
            until the next partition refresh.
    """

    id: int
    x: float
    y: float
    length: float
    section_id: int

    @property
    def center_x(self) -> float:
        return self.x + self.length / 2

    def copy(self) -> "Rod":
        return replace(self)


@dataclass(frozen=True)
class Part:
    """A line of the bill of materials."""

    name: str
    w: float
    h: float
    d: float


@dataclass(frozen=True)
class NearestShelves:
    """Closest shelves above and below a rod.

    Distances are math.inf when there is no shelf on that side.
    """

    upper_shelf: Divider | None = None
    lower_shelf: Divider | None = None
    upper_distance: float = math.inf
    lower_distance: float = math.inf


@dataclass(frozen=True)
class CabinetState:
    """Snapshot of everything needed to rebuild a cabinet.

    Sections are not stored; they are derived again on restore.
    """

    width: float
    height: float
    depth: float
    base: float
    dividers: tuple[Divider, ...] = field(default_factory=tuple)
    rods: tuple[Rod, ...] = field(default_factory=tuple)

    def clone(self) -> "CabinetState":
        """Deep copy: dividers and rods are copied field by field."""
        return CabinetState(
            width=self.width,
            height=self.height,
            depth=self.depth,
            base=self.base,
            dividers=tuple(d.copy() for d in self.dividers),
            rods=tuple(r.copy() for r in self.rods),
        )
