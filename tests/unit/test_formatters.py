"""Unit tests for output formatters."""

import json

from cabinet_designer.application import LayoutScriptResult, StepOutcome
from cabinet_designer.domain import Cabinet, Orientation
from cabinet_designer.infrastructure import (
    JsonReportFormatter,
    LayoutDiagramFormatter,
    PartsListFormatter,
    SectionTableFormatter,
    StepReportFormatter,
)

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


class TestPartsListFormatter:
    """Tests for PartsListFormatter."""

    def test_empty_list(self) -> None:
        assert PartsListFormatter().format([]) == "No parts in list."

    def test_header_and_total(self, cabinet: Cabinet) -> None:
        output = PartsListFormatter().format(cabinet.get_all_parts())

        assert output.startswith("PARTS LIST")
        assert "Left side" in output
        assert "TOTAL" in output
        assert "5 parts" in output

    def test_identical_dividers_grouped(self, cabinet: Cabinet) -> None:
        cabinet.divide_section(0, H, 3)
        output = PartsListFormatter().format(cabinet.get_all_parts())

        shelf_lines = [line for line in output.splitlines() if line.startswith("Shelf")]
        assert len(shelf_lines) == 1
        assert shelf_lines[0].split()[-1] == "3"

    def test_rod_length_reported(self, shelved_cabinet: Cabinet) -> None:
        shelved_cabinet.add_rod(1)
        output = PartsListFormatter().format(shelved_cabinet.get_all_parts())
        assert "rod length 0.73 m" in output


class TestSectionTableFormatter:
    def test_one_row_per_section(self, shelved_cabinet: Cabinet) -> None:
        shelved_cabinet.add_rod(1)
        output = SectionTableFormatter().format(shelved_cabinet)
        lines = output.splitlines()

        assert lines[0] == "SECTIONS"
        assert lines[4].split() == ["0", "0.0", "0.0", "768.0", "890.0", "0"]
        assert lines[5].split() == ["1", "0.0", "906.0", "768.0", "762.0", "1"]
        assert "2 sections" in output


class TestLayoutDiagramFormatter:
    """Tests for the ASCII diagram."""

    def test_empty_cabinet_is_a_box(self, cabinet: Cabinet) -> None:
        output = LayoutDiagramFormatter().format(cabinet, width=20, height=10)
        grid = output.splitlines()[3:13]

        assert grid[0] == "+" + "-" * 18 + "+"
        assert all(row == "|" + " " * 18 + "|" for row in grid[1:-1])

    def test_dividers_and_rods_drawn(self, shelved_cabinet: Cabinet) -> None:
        shelved_cabinet.add_divider(V, 376, 0, 890)
        shelved_cabinet.add_rod(2)
        output = LayoutDiagramFormatter().format(shelved_cabinet)

        grid = "\n".join(output.splitlines()[3:33])
        assert "-" * 20 in grid
        assert "|" in grid
        assert "=" in grid
        assert "Shelves: 1  Stands: 1  Rods: 1" in output

    def test_no_cabinet(self) -> None:
        assert LayoutDiagramFormatter().format(None) == "No cabinet to display."


class TestStepReportFormatter:
    def test_outcomes_listed(self) -> None:
        outcomes = [
            StepOutcome(0, "add_divider", True, "added shelf at 890"),
            StepOutcome(1, "add_rod", False, "section 4 cannot hold a rod"),
        ]
        output = StepReportFormatter().format(outcomes)

        assert "REJECTED" in output
        assert "1 applied, 1 rejected" in output

    def test_no_steps(self) -> None:
        assert StepReportFormatter().format([]) == "No steps."


class TestJsonReportFormatter:
    """Tests for the JSON export."""

    def test_layout_exported(self, shelved_cabinet: Cabinet) -> None:
        shelved_cabinet.add_rod(1)
        data = json.loads(JsonReportFormatter().format(shelved_cabinet))

        assert data["cabinet"]["interior_width"] == 768
        assert data["dividers"] == [
            {"id": 1, "type": "h", "pos": 890, "start": 0, "end": 768}
        ]
        assert data["rods"][0]["length"] == 728
        assert data["rods"][0]["section_id"] == 1
        assert len(data["sections"]) == 2
        assert data["parts"][5]["name"] == "Shelf 1"
        assert "steps" not in data

    def test_steps_included(self, cabinet: Cabinet) -> None:
        outcome = StepOutcome(0, "undo", False, "nothing to undo")
        data = json.loads(JsonReportFormatter().format(cabinet, [outcome]))

        assert data["steps"] == [
            {"index": 0, "action": "undo", "success": False, "message": "nothing to undo"}
        ]

    def test_errors_exported(self) -> None:
        result = LayoutScriptResult(errors=["width must be between 132 and 2000"])
        data = json.loads(JsonReportFormatter().format_result(result))
        assert data == {"errors": ["width must be between 132 and 2000"]}
