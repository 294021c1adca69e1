"""Geometry value objects for the cabinet interior.

Interior coordinates have their origin at the top-left corner of the usable
cavity, with x growing to the right and y growing downward.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Orientation(str, Enum):
    """Orientation of a divider panel."""

    HORIZONTAL = "h"
    VERTICAL = "v"

    @property
    def perpendicular(self) -> "Orientation":
        """The orientation crossing this one."""
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL

    @property
    def label(self) -> str:
        """Human-readable name of a divider with this orientation."""
        return "Shelf" if self is Orientation.HORIZONTAL else "Stand"


def ranges_overlap(a1: float, a2: float, b1: float, b2: float) -> bool:
    """Check whether half-open ranges [a1, a2) and [b1, b2) overlap."""
    return max(a1, b1) < min(a2, b2)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper], preferring lower when they cross."""
    return max(lower, min(upper, value))


@dataclass(frozen=True)
class SectionRect:
    """A free rectangular region of the interior."""

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def area(self) -> float:
        return self.w * self.h

    def contains(self, x: float, y: float) -> bool:
        """Check whether the point lies inside (left/top edges inclusive)."""
        return self.x <= x < self.right and self.y <= y < self.bottom

    def along(self, orientation: Orientation) -> tuple[float, float]:
        """Span on the axis a divider of this orientation is positioned on.

        A vertical divider is positioned along x, a horizontal one along y.
        """
        if orientation is Orientation.VERTICAL:
            return self.x, self.right
        return self.y, self.bottom

    def across(self, orientation: Orientation) -> tuple[float, float]:
        """Span on the axis a divider of this orientation runs along."""
        if orientation is Orientation.VERTICAL:
            return self.y, self.bottom
        return self.x, self.right

    def distance_to(self, x: float, y: float) -> float:
        """Euclidean distance from a point to the rectangle (0 when inside)."""
        dx = max(self.x - x, 0.0, x - self.right)
        dy = max(self.y - y, 0.0, y - self.bottom)
        return (dx * dx + dy * dy) ** 0.5


@dataclass(frozen=True)
class Limits:
    """Allowed range for a divider position."""

    min: float
    max: float

    def clamp(self, value: float) -> float:
        return clamp(value, self.min, self.max)

    @property
    def is_empty(self) -> bool:
        return self.min > self.max
