"""Divider insertion, movement and removal rules.

This module validates and applies every divider mutation of a cabinet:
- Insertion of a single shelf or stand into a section
- Bulk division of a section into equal parts
- Moving a divider within its limits, dragging joined dividers along
- Removing a divider together with every divider anchored to it

Mutations report failure through their return value and leave the cabinet
untouched when they fail.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..constants import DEFAULT_CONSTANTS, LayoutConstants
from ..entities import Divider
from ..value_objects import Limits, Orientation, ranges_overlap

if TYPE_CHECKING:
    from ..cabinet import Cabinet

logger = logging.getLogger(__name__)

# Allowed number of dividers for a bulk section division
MIN_DIVIDE_COUNT = 2
MAX_DIVIDE_COUNT = 5


class DividerConstraintEngine:
    """Validates and applies divider mutations on a cabinet."""

    def __init__(self, constants: LayoutConstants = DEFAULT_CONSTANTS) -> None:
        self.constants = constants

    # -- insertion ---------------------------------------------------------

    def can_add_divider(
        self,
        cabinet: Cabinet,
        orientation: Orientation,
        pos: float,
        start: float,
        end: float,
    ) -> bool:
        """Check whether a divider can be inserted without breaking clearances.

        The target section is the one containing the point one unit before the
        divider position, at the middle of its span, which lies inside the
        section the divider is meant to split.
        """
        orientation = Orientation(orientation)
        middle = (start + end) / 2
        if orientation is Orientation.VERTICAL:
            index = cabinet.find_section_index(pos - 1, middle)
        else:
            index = cabinet.find_section_index(middle, pos - 1)

        if index is None:
            logger.debug(f"Rejected {orientation.label.lower()} at {pos}: no section")
            return False

        if orientation is Orientation.VERTICAL and cabinet.section_has_rods(index):
            logger.debug(f"Rejected stand at {pos}: section {index} holds rods")
            return False

        section = cabinet.sections[index]
        lo, hi = section.along(orientation)
        before = pos - lo
        after = hi - pos - self.constants.panel_thickness
        if before < self.constants.min_section or after < self.constants.min_section:
            logger.debug(
                f"Rejected {orientation.label.lower()} at {pos}: "
                f"sub-sections {before:.1f} / {after:.1f} below minimum"
            )
            return False
        return True

    def add_divider(
        self,
        cabinet: Cabinet,
        orientation: Orientation,
        pos: float,
        start: float,
        end: float,
    ) -> bool:
        """Insert a divider when the constraints allow it."""
        orientation = Orientation(orientation)
        if not self.can_add_divider(cabinet, orientation, pos, start, end):
            return False

        cabinet.dividers.append(
            Divider(
                orientation=orientation,
                pos=pos,
                start=start,
                end=end,
                id=cabinet.next_id(),
            )
        )
        cabinet.update_sections()
        return True

    def divide_section(
        self,
        cabinet: Cabinet,
        section_index: int,
        orientation: Orientation,
        count: int,
    ) -> bool:
        """Split a section into count + 1 equal parts with count dividers.

        Args:
            cabinet: Cabinet to modify.
            section_index: Index of the section in the current partition.
            orientation: Shelves (horizontal) or stands (vertical).
            count: Number of dividers to insert, between 2 and 5.

        Returns:
            True when all dividers were inserted, False when nothing changed.
        """
        orientation = Orientation(orientation)
        if not 0 <= section_index < len(cabinet.sections):
            return False
        if not MIN_DIVIDE_COUNT <= count <= MAX_DIVIDE_COUNT:
            return False
        if orientation is Orientation.VERTICAL and cabinet.section_has_rods(section_index):
            logger.debug(f"Rejected divide of section {section_index}: holds rods")
            return False

        thickness = self.constants.panel_thickness
        section = cabinet.sections[section_index]
        lo, hi = section.along(orientation)
        span_start, span_end = section.across(orientation)
        part = (hi - lo - count * thickness) / (count + 1)
        if part < self.constants.min_section:
            logger.debug(
                f"Rejected divide of section {section_index} into {count + 1}: "
                f"parts of {part:.1f} below minimum"
            )
            return False

        for i in range(1, count + 1):
            cabinet.dividers.append(
                Divider(
                    orientation=orientation,
                    pos=lo + i * part + (i - 1) * thickness,
                    start=span_start,
                    end=span_end,
                    id=cabinet.next_id(),
                )
            )
        cabinet.update_sections()
        return True

    # -- movement ----------------------------------------------------------

    def get_divider_limits(self, cabinet: Cabinet, divider: Divider) -> Limits:
        """Range a divider may be moved in.

        Bounded by the walls and by every other divider of the same
        orientation whose span overlaps this one.
        """
        thickness = self.constants.panel_thickness
        min_section = self.constants.min_section
        lower = min_section
        upper = cabinet.extent_along(divider.orientation) - min_section - thickness

        for other in cabinet.dividers:
            if other.id == divider.id or other.orientation is not divider.orientation:
                continue
            if not other.span_overlaps(divider):
                continue
            if other.pos < divider.pos:
                lower = max(lower, other.pos + thickness + min_section)
            else:
                upper = min(upper, other.pos - min_section - thickness)

        return Limits(lower, upper)

    def move_divider(self, cabinet: Cabinet, divider_id: int, new_pos: float) -> bool:
        """Move a divider as close to new_pos as its limits allow.

        Perpendicular dividers joined to the moved edge follow it. Returns
        False only when the divider does not exist.
        """
        divider = cabinet.get_divider(divider_id)
        if divider is None:
            return False

        old_pos = divider.pos
        divider.pos = self.get_divider_limits(cabinet, divider).clamp(new_pos)
        self._update_connected_dividers(cabinet, divider, old_pos)
        cabinet.update_sections()
        return True

    def _update_connected_dividers(
        self, cabinet: Cabinet, moved: Divider, old_pos: float
    ) -> None:
        """Keep joined corners attached after a divider moved."""
        thickness = self.constants.panel_thickness
        tolerance = thickness / 2

        for divider in cabinet.dividers:
            if divider.id == moved.id:
                continue
            if divider.orientation is not moved.orientation.perpendicular:
                continue
            if not ranges_overlap(
                moved.start, moved.end, divider.pos - tolerance, divider.pos + tolerance
            ):
                continue

            if abs(divider.start - old_pos) < tolerance:
                divider.start = moved.pos
            elif abs(divider.end - old_pos) < tolerance:
                divider.end = moved.pos
            elif abs(divider.start - (old_pos + thickness)) < tolerance:
                divider.start = moved.pos + thickness
            elif abs(divider.end - (old_pos + thickness)) < tolerance:
                divider.end = moved.pos + thickness

    # -- removal -----------------------------------------------------------

    def find_dependent_dividers(self, cabinet: Cabinet, parent: Divider) -> list[Divider]:
        """Collect every divider anchored, directly or transitively, to parent.

        Depth-first traversal over the joins. The parent itself is never part
        of the result.
        """
        dependents: list[Divider] = []
        seen = {parent.id}
        processed: set[int] = set()
        stack = [parent]

        while stack:
            divider = stack.pop()
            if divider.id in processed:
                continue
            processed.add(divider.id)

            for candidate in cabinet.dividers:
                if candidate.id in seen:
                    continue
                if self._is_anchored_to(candidate, divider):
                    seen.add(candidate.id)
                    dependents.append(candidate)
                    stack.append(candidate)

        return dependents

    def _is_anchored_to(self, candidate: Divider, anchor: Divider) -> bool:
        """Check whether candidate ends on one of the anchor's faces."""
        if candidate.orientation is not anchor.orientation.perpendicular:
            return False

        tolerance = self.constants.panel_thickness
        faces = (anchor.pos, anchor.pos + self.constants.panel_thickness)
        touches = any(
            abs(endpoint - face) < tolerance
            for endpoint in (candidate.start, candidate.end)
            for face in faces
        )
        crosses = ranges_overlap(
            anchor.start, anchor.end, candidate.pos - tolerance, candidate.pos + tolerance
        )
        return touches and crosses

    def remove_divider(self, cabinet: Cabinet, divider_id: int) -> bool:
        """Remove a divider and all of its dependents in one step."""
        divider = cabinet.get_divider(divider_id)
        if divider is None:
            return False

        doomed = {divider.id}
        doomed.update(d.id for d in self.find_dependent_dividers(cabinet, divider))
        cabinet.dividers[:] = [d for d in cabinet.dividers if d.id not in doomed]
        if len(doomed) > 1:
            logger.debug(f"Removed divider {divider_id} with {len(doomed) - 1} dependents")
        cabinet.update_sections()
        return True

    # -- queries -----------------------------------------------------------

    def find_divider_at(
        self, cabinet: Cabinet, x: float, y: float, tolerance: float | None = None
    ) -> Divider | None:
        """Return the first divider within tolerance of a point."""
        if tolerance is None:
            tolerance = self.constants.divider_hit_tolerance

        for divider in cabinet.dividers:
            if divider.is_vertical:
                across, along = x, y
            else:
                across, along = y, x
            if abs(across - divider.pos) <= tolerance and divider.start <= along <= divider.end:
                return divider
        return None
