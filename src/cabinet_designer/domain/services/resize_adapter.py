"""Adaptation of an existing layout to new carcass dimensions.

The outermost sections absorb a change of width, height or plinth height:
dividers keep their absolute position until the new interior squeezes them
below the minimum clearance. When the space becomes too tight for two facing
dividers, the earlier one is dropped. Resizing never fails.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..constants import DEFAULT_CONSTANTS, LayoutConstants
from ..entities import Divider
from ..value_objects import Orientation

if TYPE_CHECKING:
    from ..cabinet import Cabinet

logger = logging.getLogger(__name__)


class ResizeAdapter:
    """Re-maps dividers after the carcass dimensions changed."""

    def __init__(self, constants: LayoutConstants = DEFAULT_CONSTANTS) -> None:
        self.constants = constants

    def update_interior_dimensions(self, cabinet: Cabinet) -> None:
        """Fit every divider into the current interior and re-partition.

        Call after changing width, height or base directly on the cabinet.
        """
        previous = cabinet.partitioned_interior
        for divider in cabinet.dividers:
            self._fit_divider(cabinet, divider, previous)

        self.resolve_divider_conflicts(cabinet)
        cabinet.update_sections()

    def _fit_divider(
        self,
        cabinet: Cabinet,
        divider: Divider,
        previous: tuple[float, float] | None,
    ) -> None:
        thickness = self.constants.panel_thickness
        min_section = self.constants.min_section
        extent = cabinet.extent_along(divider.orientation)
        span_extent = cabinet.extent_across(divider.orientation)

        # A span ending on the far wall stays attached to it
        if previous is not None:
            old_width, old_height = previous
            old_span_extent = old_height if divider.is_vertical else old_width
            if abs(divider.end - old_span_extent) < thickness / 2:
                divider.end = span_extent

        divider.end = min(divider.end, span_extent)
        divider.start = min(divider.start, divider.end)

        divider.pos = min(divider.pos, extent - thickness)
        if divider.pos < min_section:
            divider.pos = min_section
        if extent - divider.pos - thickness < min_section:
            divider.pos = extent - min_section - thickness

    def resolve_divider_conflicts(self, cabinet: Cabinet) -> None:
        """Separate neighbouring dividers that ended up too close together.

        For each orientation, dividers are sorted by position and every
        adjacent pair is checked, whatever their spans. When the later one is
        closer than the minimum gap it is pushed away; when that would run it
        into the far wall, the earlier divider is dropped instead.
        """
        gap = self.constants.min_divider_gap

        for orientation in (Orientation.VERTICAL, Orientation.HORIZONTAL):
            extent = cabinet.extent_along(orientation)
            ordered = sorted(
                (d for d in cabinet.dividers if d.orientation is orientation),
                key=lambda d: d.pos,
            )
            dropped: set[int] = set()

            for current, neighbour in zip(ordered, ordered[1:]):
                if neighbour.pos - current.pos >= gap:
                    continue

                pushed = current.pos + gap
                if pushed + gap <= extent:
                    neighbour.pos = pushed
                else:
                    dropped.add(current.id)
                    logger.warning(
                        f"Dropped {orientation.label.lower()} {current.id}: "
                        f"no room left after resize"
                    )

            if dropped:
                cabinet.dividers[:] = [d for d in cabinet.dividers if d.id not in dropped]
