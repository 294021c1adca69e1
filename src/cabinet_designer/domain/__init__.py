"""Domain layer - the layout and constraint engine."""

from .cabinet import Cabinet
from .constants import DEFAULT_CONSTANTS, DIMENSION_LIMITS, LayoutConstants
from .entities import CabinetState, Divider, NearestShelves, Part, Rod
from .history import HistoryInfo, HistoryManager
from .services import (
    DividerConstraintEngine,
    ResizeAdapter,
    RodPlacementEngine,
    SectionPartitioner,
)
from .value_objects import Limits, Orientation, SectionRect, ranges_overlap

__all__ = [
    "Cabinet",
    "CabinetState",
    "DEFAULT_CONSTANTS",
    "DIMENSION_LIMITS",
    "Divider",
    "DividerConstraintEngine",
    "HistoryInfo",
    "HistoryManager",
    "LayoutConstants",
    "Limits",
    "NearestShelves",
    "Orientation",
    "Part",
    "ResizeAdapter",
    "Rod",
    "RodPlacementEngine",
    "SectionPartitioner",
    "SectionRect",
    "ranges_overlap",
]
