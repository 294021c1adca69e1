"""Unit tests for adapting a layout to new carcass dimensions."""

import logging

import pytest

from cabinet_designer.domain import Cabinet, Orientation

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


class TestResize:
    """Tests for Cabinet.resize and the resize adapter."""

    def test_grow_keeps_divider_positions(self, shelved_cabinet: Cabinet) -> None:
        shelved_cabinet.resize(height=2200)

        assert shelved_cabinet.interior_height == 2068
        assert shelved_cabinet.dividers[0].pos == 890
        assert shelved_cabinet.sections[1].h == 2068 - 906

    def test_resize_round_trip_restores_position(self, cabinet: Cabinet) -> None:
        """The outer sections absorb the change in both directions."""
        cabinet.add_divider(H, 826, 0, 768)

        cabinet.resize(height=2000)
        cabinet.resize(height=1800)

        assert cabinet.dividers[0].pos == 826

    def test_shrink_pushes_divider_inward(self, cabinet: Cabinet) -> None:
        """Interior 868: the shelf keeps the minimum section below it."""
        cabinet.add_divider(H, 1400, 0, 768)

        cabinet.resize(height=1000)

        assert cabinet.interior_height == 868
        assert cabinet.dividers[0].pos == 868 - 100 - 16
        assert all(s.h >= 100 for s in cabinet.sections)

    def test_span_attached_to_far_wall_follows_it(self, cabinet: Cabinet) -> None:
        cabinet.add_divider(V, 400, 0, 1668)
        cabinet.add_divider(H, 800, 0, 400)

        cabinet.resize(width=1000, height=2000)

        stand, shelf = cabinet.dividers
        assert stand.end == 1868
        assert shelf.end == 400

    def test_shelf_span_follows_width(self, shelved_cabinet: Cabinet) -> None:
        shelved_cabinet.resize(width=600)
        assert shelved_cabinet.dividers[0].end == 568

        shelved_cabinet.resize(width=800)
        assert shelved_cabinet.dividers[0].end == 768

    def test_base_change_moves_interior(self, shelved_cabinet: Cabinet) -> None:
        shelved_cabinet.resize(base=200)
        assert shelved_cabinet.interior_height == 1568
        assert shelved_cabinet.dividers[0].pos == 890

    def test_dimensions_clamped_to_limits(self, cabinet: Cabinet) -> None:
        assert cabinet.resize(width=5000, height=50, depth=2000, base=10)

        assert cabinet.width == 2000
        assert cabinet.height == 132
        assert cabinet.depth == 1000
        assert cabinet.base == 60

    def test_depth_only_leaves_layout(self, shelved_cabinet: Cabinet) -> None:
        sections = list(shelved_cabinet.sections)
        shelved_cabinet.resize(depth=300)
        assert shelved_cabinet.sections == sections


class TestResolveDividerConflicts:
    """Tests for separating dividers squeezed together."""

    def test_earlier_divider_dropped_when_no_room(
        self, cabinet: Cabinet, caplog: pytest.LogCaptureFixture
    ) -> None:
        cabinet.add_divider(H, 400, 0, 768)
        cabinet.add_divider(H, 600, 0, 768)

        with caplog.at_level(logging.WARNING):
            cabinet.resize(height=700)

        assert cabinet.interior_height == 568
        assert [d.pos for d in cabinet.dividers] == [452]
        assert "Dropped shelf" in caplog.text

    def test_later_divider_pushed_when_room(self, cabinet: Cabinet) -> None:
        cabinet.add_divider(H, 400, 0, 768)
        cabinet.add_divider(H, 516, 0, 768)
        cabinet.dividers[1].pos = 450

        cabinet.resolve_divider_conflicts()

        assert [d.pos for d in cabinet.dividers] == [400, 516]

    def test_neighbours_across_a_stand_are_in_conflict(self, cabinet: Cabinet) -> None:
        """Position order alone decides the neighbours, spans do not matter."""
        cabinet.add_divider(V, 384, 0, 1668)
        cabinet.add_divider(H, 800, 0, 384)
        cabinet.add_divider(H, 850, 400, 768)

        cabinet.resize(height=1790)

        assert [d.pos for d in cabinet.dividers[1:]] == [800, 916]

    def test_sections_stay_valid_after_shrink(self, cabinet: Cabinet) -> None:
        cabinet.divide_section(0, H, 4)

        cabinet.resize(height=900)

        assert len(cabinet.dividers) < 4
        assert all(s.h >= 100 for s in cabinet.sections)
        positions = sorted(d.pos for d in cabinet.dividers)
        assert all(b - a >= 116 for a, b in zip(positions, positions[1:]))
