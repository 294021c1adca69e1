"""Infrastructure layer - output formatters."""

from .formatters import (
    JsonReportFormatter,
    LayoutDiagramFormatter,
    PartsListFormatter,
    SectionTableFormatter,
    StepReportFormatter,
)

__all__ = [
    "JsonReportFormatter",
    "LayoutDiagramFormatter",
    "PartsListFormatter",
    "SectionTableFormatter",
    "StepReportFormatter",
]
