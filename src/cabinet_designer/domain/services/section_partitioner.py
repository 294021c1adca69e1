"""Section partitioning for cabinet interiors.

This module derives the free rectangular sections of a cabinet interior from
its divider list. Sections are never stored independently: they are a pure
function of the interior size and the dividers, recomputed after every
divider mutation.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..constants import DEFAULT_CONSTANTS, LayoutConstants
from ..entities import Divider
from ..value_objects import Orientation, SectionRect, ranges_overlap

logger = logging.getLogger(__name__)


class SectionPartitioner:
    """Splits the interior into sections, one divider at a time."""

    def __init__(self, constants: LayoutConstants = DEFAULT_CONSTANTS) -> None:
        self.constants = constants

    def partition(
        self,
        interior_width: float,
        interior_height: float,
        dividers: Iterable[Divider],
    ) -> list[SectionRect]:
        """Compute the sections left free by the dividers.

        Algorithm:
        1. Start with a single section covering the whole interior
        2. For each divider, in list order, split every section it crosses:
           the divider position lies strictly inside the section on the
           divider's own axis, and the divider span overlaps the section on
           the other axis
        3. The far half of a split starts after the panel thickness

        The result depends on divider order when dividers are not independent,
        so callers must pass them in insertion order.

        Args:
            interior_width: Usable width inside the side walls.
            interior_height: Usable height between top and bottom panels.
            dividers: Dividers in insertion order.

        Returns:
            Sections in a stable order; a single full section when there are
            no dividers.
        """
        sections = [SectionRect(0.0, 0.0, interior_width, interior_height)]

        for divider in dividers:
            sections = [
                piece
                for section in sections
                for piece in self._split(section, divider)
            ]

        logger.debug(f"Partitioned interior into {len(sections)} sections")
        return sections

    def _split(self, section: SectionRect, divider: Divider) -> list[SectionRect]:
        """Split one section by a divider, or pass it through unchanged."""
        lo, hi = section.along(divider.orientation)
        span_lo, span_hi = section.across(divider.orientation)

        crosses = lo < divider.pos < hi and ranges_overlap(
            divider.start, divider.end, span_lo, span_hi
        )
        if not crosses:
            return [section]

        thickness = self.constants.panel_thickness
        if divider.orientation is Orientation.VERTICAL:
            return [
                SectionRect(section.x, section.y, divider.pos - section.x, section.h),
                SectionRect(
                    divider.pos + thickness,
                    section.y,
                    section.right - divider.pos - thickness,
                    section.h,
                ),
            ]
        return [
            SectionRect(section.x, section.y, section.w, divider.pos - section.y),
            SectionRect(
                section.x,
                divider.pos + thickness,
                section.w,
                section.bottom - divider.pos - thickness,
            ),
        ]
