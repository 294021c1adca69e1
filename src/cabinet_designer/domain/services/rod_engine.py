"""Hanging rod placement rules.

Rods always span their section horizontally, inset from both sides; only the
mount height is free. A rod's section index is a back-reference into the
current partition, so it is refreshed every time the sections change.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..constants import DEFAULT_CONSTANTS, LayoutConstants
from ..entities import NearestShelves, Rod
from ..value_objects import Orientation, SectionRect, clamp

if TYPE_CHECKING:
    from ..cabinet import Cabinet

logger = logging.getLogger(__name__)

# Allowed number of rods for bulk insertion into one section
MIN_BULK_RODS = 1
MAX_BULK_RODS = 3


class RodPlacementEngine:
    """Validates and applies rod mutations on a cabinet."""

    def __init__(self, constants: LayoutConstants = DEFAULT_CONSTANTS) -> None:
        self.constants = constants

    def default_height(self, cabinet: Cabinet) -> float:
        """Interior y of a rod mounted at the standard height.

        The standard height is measured from the floor and capped so the rod
        keeps the top clearance below the carcass top.
        """
        standard = min(
            self.constants.rod_height_from_bottom,
            cabinet.height - cabinet.base - self.constants.rod_top_clearance,
        )
        return cabinet.interior_height - standard + cabinet.base

    def _fits_vertically(self, section: SectionRect, y: float) -> bool:
        clearance = self.constants.rod_edge_clearance
        return section.y + clearance <= y <= section.bottom - clearance

    def add_rod(self, cabinet: Cabinet, section_index: int, y: float | None = None) -> bool:
        """Add a rod spanning a section.

        Args:
            cabinet: Cabinet to modify.
            section_index: Index of the section in the current partition.
            y: Requested mount line. Defaults to the standard height; a value
                too close to the section edges is replaced by a fixed fraction
                of the section height.

        Returns:
            True when the rod was added.
        """
        if not 0 <= section_index < len(cabinet.sections):
            return False

        section = cabinet.sections[section_index]
        if section.w < self.constants.min_rod_length:
            logger.debug(f"Rejected rod in section {section_index}: too narrow ({section.w:.1f})")
            return False

        if y is None:
            y = self.default_height(cabinet)
        if not self._fits_vertically(section, y):
            y = section.y + section.h * self.constants.rod_fallback_ratio

        inset = self.constants.rod_inset
        cabinet.rods.append(
            Rod(
                id=cabinet.next_id(),
                x=section.x + inset,
                y=y,
                length=section.w - 2 * inset,
                section_id=section_index,
            )
        )
        return True

    def add_rods(self, cabinet: Cabinet, section_index: int, count: int) -> bool:
        """Add count evenly spaced rods to a section (1 to 3)."""
        if not MIN_BULK_RODS <= count <= MAX_BULK_RODS:
            return False
        if not 0 <= section_index < len(cabinet.sections):
            return False

        section = cabinet.sections[section_index]
        if section.h < count * self.constants.rod_min_spacing:
            logger.debug(f"Rejected {count} rods in section {section_index}: too low")
            return False
        if section.w < self.constants.min_rod_length:
            return False

        spacing = section.h / (count + 1)
        for i in range(1, count + 1):
            self.add_rod(cabinet, section_index, section.y + spacing * i)
        return True

    def move_rod(self, cabinet: Cabinet, rod_id: int, new_x: float, new_y: float) -> bool:
        """Move a rod, letting it adopt whichever section it lands in."""
        rod = cabinet.get_rod(rod_id)
        if rod is None:
            return False

        index = cabinet.find_section_index(new_x + rod.length / 2, new_y)
        if index is None:
            return False

        section = cabinet.sections[index]
        inset = self.constants.rod_inset
        clearance = self.constants.rod_edge_clearance
        rod.length = section.w - 2 * inset
        rod.x = clamp(new_x, section.x + inset, section.right - rod.length - inset)
        rod.y = clamp(new_y, section.y + clearance, section.bottom - clearance)
        rod.section_id = index
        return True

    def remove_rod(self, cabinet: Cabinet, rod_id: int) -> bool:
        for index, rod in enumerate(cabinet.rods):
            if rod.id == rod_id:
                del cabinet.rods[index]
                return True
        return False

    def find_rod_at(
        self, cabinet: Cabinet, x: float, y: float, tolerance: float | None = None
    ) -> Rod | None:
        if tolerance is None:
            tolerance = self.constants.rod_hit_tolerance

        for rod in cabinet.rods:
            if (
                rod.x - tolerance <= x <= rod.x + rod.length + tolerance
                and abs(y - rod.y) <= tolerance
            ):
                return rod
        return None

    def find_nearest_shelves_to_rod(self, cabinet: Cabinet, rod: Rod) -> NearestShelves:
        """Find the closest shelves above and below a rod.

        Only shelves whose span covers the rod's horizontal centre count.
        """
        upper = lower = None
        upper_distance = lower_distance = float("inf")

        for divider in cabinet.dividers:
            if divider.orientation is not Orientation.HORIZONTAL:
                continue
            if not divider.start <= rod.center_x <= divider.end:
                continue

            distance = abs(divider.pos - rod.y)
            if divider.pos < rod.y and distance < upper_distance:
                upper, upper_distance = divider, distance
            elif divider.pos > rod.y and distance < lower_distance:
                lower, lower_distance = divider, distance

        return NearestShelves(
            upper_shelf=upper,
            lower_shelf=lower,
            upper_distance=upper_distance,
            lower_distance=lower_distance,
        )

    def refresh_rod_affinities(self, cabinet: Cabinet) -> None:
        """Re-anchor every rod to the current sections.

        Must run right after the sections are recomputed. A rod whose centre
        no longer lies in any section (for example because a shelf now covers
        it) moves into the nearest section wide enough to hold a rod; when
        there is none the rod is dropped.
        """
        inset = self.constants.rod_inset
        clearance = self.constants.rod_edge_clearance
        kept: list[Rod] = []

        for rod in cabinet.rods:
            index = cabinet.find_section_index(rod.center_x, rod.y)
            if index is None:
                index = self._nearest_rod_section(cabinet, rod)
                if index is None:
                    logger.warning(f"Dropped rod {rod.id}: no section can hold it")
                    continue
                section = cabinet.sections[index]
                rod.y = clamp(rod.y, section.y + clearance, section.bottom - clearance)
                logger.info(f"Re-anchored orphaned rod {rod.id} into section {index}")

            section = cabinet.sections[index]
            rod.section_id = index
            rod.x = section.x + inset
            rod.length = section.w - 2 * inset
            kept.append(rod)

        cabinet.rods[:] = kept

    def _nearest_rod_section(self, cabinet: Cabinet, rod: Rod) -> int | None:
        candidates = [
            (section.distance_to(rod.center_x, rod.y), index)
            for index, section in enumerate(cabinet.sections)
            if section.w >= self.constants.min_rod_length
        ]
        if not candidates:
            return None
        return min(candidates)[1]
