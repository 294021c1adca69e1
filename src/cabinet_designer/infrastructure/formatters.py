"""Output formatters for cabinet layouts."""

from __future__ import annotations

import json
import math
from dataclasses import asdict
from typing import Any

from cabinet_designer.application.dtos import LayoutScriptResult, StepOutcome
from cabinet_designer.domain import Cabinet, Part


class PartsListFormatter:
    """Formats the bill of materials as a table.

    Identical panels are grouped onto one line with a quantity.
    """

    def format(self, parts: list[Part]) -> str:
        if not parts:
            return "No parts in list."

        lines = [
            "PARTS LIST",
            "=" * 70,
            f"{'Part':<20} {'Width':<10} {'Height':<10} {'Depth':<10} {'Qty':<6}",
            "-" * 70,
        ]

        for name, part, quantity in self._group(parts):
            lines.append(
                f"{name:<20} {part.w:<10.1f} {part.h:<10.1f} {part.d:<10.1f} {quantity:<6}"
            )

        panel_area = sum(p.w * p.h for p in parts if not p.name.startswith("Rod"))
        rod_length = sum(p.w for p in parts if p.name.startswith("Rod"))
        lines.append("-" * 70)
        lines.append(f"{'TOTAL':<20} {len(parts)} parts")
        lines.append(f"{'':<20} panel face area {panel_area / 1_000_000:.2f} m2")
        if rod_length:
            lines.append(f"{'':<20} rod length {rod_length / 1000:.2f} m")

        return "\n".join(lines)

    def _group(self, parts: list[Part]) -> list[tuple[str, Part, int]]:
        """Merge consecutive parts of the same kind and size."""
        grouped: list[tuple[str, Part, int]] = []
        for part in parts:
            kind = part.name.rsplit(" ", 1)[0] if part.name[-1].isdigit() else part.name
            if grouped:
                last_kind, last_part, quantity = grouped[-1]
                same_size = (last_part.w, last_part.h, last_part.d) == (part.w, part.h, part.d)
                if same_size and last_kind == kind:
                    grouped[-1] = (last_kind, last_part, quantity + 1)
                    continue
            grouped.append((kind, part, 1))
        return grouped


class SectionTableFormatter:
    """Formats the free sections of a cabinet."""

    def format(self, cabinet: Cabinet) -> str:
        lines = [
            "SECTIONS",
            "=" * 70,
            f"{'#':<4} {'X':<10} {'Y':<10} {'Width':<10} {'Height':<10} {'Rods':<6}",
            "-" * 70,
        ]
        for index, section in enumerate(cabinet.sections):
            rods = sum(1 for rod in cabinet.rods if rod.section_id == index)
            lines.append(
                f"{index:<4} {section.x:<10.1f} {section.y:<10.1f} "
                f"{section.w:<10.1f} {section.h:<10.1f} {rods:<6}"
            )
        lines.append("-" * 70)
        lines.append(
            f"Interior: {cabinet.interior_width:g} x {cabinet.interior_height:g} mm, "
            f"{len(cabinet.sections)} sections"
        )
        return "\n".join(lines)


class LayoutDiagramFormatter:
    """Formats ASCII diagrams of cabinet layouts.

    Interior coordinates are scaled onto a character grid; shelves are drawn
    with "-", stands with "|", crossings with "+" and rods with "=".
    """

    def format(self, cabinet: Cabinet, width: int = 60, height: int = 30) -> str:
        """Generate an ASCII diagram of the cabinet interior."""
        if cabinet is None:
            return "No cabinet to display."

        lines = [
            "CABINET LAYOUT DIAGRAM",
            "=" * width,
            "",
        ]

        grid = [[" " for _ in range(width)] for _ in range(height)]
        self._draw_box(grid, 0, 0, width - 1, height - 1)

        scale_x = (width - 2) / cabinet.interior_width
        scale_y = (height - 2) / cabinet.interior_height

        def column(x: float) -> int:
            return min(max(1 + math.floor(x * scale_x), 1), width - 2)

        def row(y: float) -> int:
            return min(max(1 + math.floor(y * scale_y), 1), height - 2)

        for divider in cabinet.dividers:
            if divider.is_vertical:
                x = column(divider.pos)
                for y in range(row(divider.start), row(divider.end - 1) + 1):
                    grid[y][x] = "+" if grid[y][x] == "-" else "|"
            else:
                y = row(divider.pos)
                for x in range(column(divider.start), column(divider.end - 1) + 1):
                    grid[y][x] = "+" if grid[y][x] == "|" else "-"

        for rod in cabinet.rods:
            y = row(rod.y)
            for x in range(column(rod.x), column(rod.x + rod.length) + 1):
                if grid[y][x] == " ":
                    grid[y][x] = "="

        for grid_row in grid:
            lines.append("".join(grid_row))

        lines.append("")
        lines.append(
            f"Dimensions: {cabinet.width:g} W x {cabinet.height:g} H x {cabinet.depth:g} D mm "
            f"(base {cabinet.base:g})"
        )
        shelves = sum(1 for d in cabinet.dividers if not d.is_vertical)
        stands = len(cabinet.dividers) - shelves
        lines.append(f"Sections: {len(cabinet.sections)}")
        lines.append(f"Shelves: {shelves}  Stands: {stands}  Rods: {len(cabinet.rods)}")

        return "\n".join(lines)

    def _draw_box(
        self, grid: list[list[str]], x1: int, y1: int, x2: int, y2: int
    ) -> None:
        grid[y1][x1] = "+"
        grid[y1][x2] = "+"
        grid[y2][x1] = "+"
        grid[y2][x2] = "+"

        for x in range(x1 + 1, x2):
            grid[y1][x] = "-"
            grid[y2][x] = "-"

        for y in range(y1 + 1, y2):
            grid[y][x1] = "|"
            grid[y][x2] = "|"


class StepReportFormatter:
    """Formats the outcome of every step of a layout script."""

    def format(self, outcomes: list[StepOutcome]) -> str:
        if not outcomes:
            return "No steps."

        lines = ["STEPS", "=" * 70]
        for outcome in outcomes:
            status = "ok" if outcome.success else "REJECTED"
            lines.append(
                f"{outcome.index:>3}  {outcome.action:<16} {status:<9} {outcome.message}"
            )
        failed = sum(1 for outcome in outcomes if not outcome.success)
        lines.append("-" * 70)
        lines.append(f"{len(outcomes) - failed} applied, {failed} rejected")
        return "\n".join(lines)


class JsonReportFormatter:
    """Exports a cabinet layout as JSON."""

    def format(self, cabinet: Cabinet, outcomes: list[StepOutcome] | None = None) -> str:
        return json.dumps(self.to_dict(cabinet, outcomes), indent=2)

    def to_dict(
        self, cabinet: Cabinet, outcomes: list[StepOutcome] | None = None
    ) -> dict[str, Any]:
        """Plain-data view of the layout, shared by the JSON report and the API."""
        data: dict[str, Any] = {
            "cabinet": {
                "width": cabinet.width,
                "height": cabinet.height,
                "depth": cabinet.depth,
                "base": cabinet.base,
                "interior_width": cabinet.interior_width,
                "interior_height": cabinet.interior_height,
            },
            "dividers": [
                {
                    "id": d.id,
                    "type": d.orientation.value,
                    "pos": d.pos,
                    "start": d.start,
                    "end": d.end,
                }
                for d in cabinet.dividers
            ],
            "rods": [asdict(rod) for rod in cabinet.rods],
            "sections": [asdict(section) for section in cabinet.sections],
            "parts": [asdict(part) for part in cabinet.get_all_parts()],
        }
        if outcomes is not None:
            data["steps"] = [asdict(outcome) for outcome in outcomes]
        return data

    def format_result(self, result: LayoutScriptResult) -> str:
        """Export a layout script run, or its errors."""
        if not result.is_valid or result.cabinet is None:
            return json.dumps({"errors": result.errors}, indent=2)
        return self.format(result.cabinet, result.outcomes)
