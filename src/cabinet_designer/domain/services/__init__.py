"""Domain services implementing the layout rules."""

from .divider_engine import DividerConstraintEngine
from .resize_adapter import ResizeAdapter
from .rod_engine import RodPlacementEngine
from .section_partitioner import SectionPartitioner

__all__ = [
    "DividerConstraintEngine",
    "ResizeAdapter",
    "RodPlacementEngine",
    "SectionPartitioner",
]
