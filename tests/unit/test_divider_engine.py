"""Unit tests for divider insertion, movement and removal.

These tests verify:
- Insertion clearance checks and the rod/stand exclusion
- Bulk section division
- Movement limits from span-overlapping dividers
- Joined dividers following a moved divider
- Transitive removal of dependent dividers
"""

from itertools import combinations

import pytest

from cabinet_designer.domain import Cabinet, Orientation
from cabinet_designer.domain.services.divider_engine import MAX_DIVIDE_COUNT

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


class TestAddDivider:
    """Tests for single divider insertion."""

    def test_add_shelf(self, cabinet: Cabinet) -> None:
        assert cabinet.add_divider(H, 890, 0, 768)

        assert len(cabinet.dividers) == 1
        assert len(cabinet.sections) == 2
        assert cabinet.sections[0].h == 890
        assert cabinet.sections[1].y == 906
        assert cabinet.sections[1].h == 762

    def test_accepts_short_orientation_codes(self, cabinet: Cabinet) -> None:
        assert cabinet.add_divider("v", 376, 0, 1668)
        assert cabinet.dividers[0].orientation is V

    def test_rejects_when_before_span_too_small(self, cabinet: Cabinet) -> None:
        assert not cabinet.add_divider(H, 99, 0, 768)
        assert cabinet.dividers == []

    def test_rejects_when_after_span_too_small(self, cabinet: Cabinet) -> None:
        """768 - 660 - 16 leaves 92 on the right."""
        assert not cabinet.add_divider(V, 660, 0, 1668)
        assert cabinet.dividers == []

    def test_minimum_clearance_is_inclusive(self, cabinet: Cabinet) -> None:
        assert cabinet.add_divider(V, 100, 0, 1668)
        assert cabinet.add_divider(V, 652, 0, 1668)

    def test_rejects_outside_any_section(self, shelved_cabinet: Cabinet) -> None:
        """Probing inside the shelf finds no section."""
        assert not shelved_cabinet.add_divider(H, 900, 0, 768)
        assert len(shelved_cabinet.dividers) == 1

    def test_rejects_stand_in_section_with_rod(self, shelved_cabinet: Cabinet) -> None:
        assert shelved_cabinet.add_rod(1)
        dividers_before = [d.copy() for d in shelved_cabinet.dividers]
        sections_before = list(shelved_cabinet.sections)

        assert not shelved_cabinet.add_divider(V, 400, 906, 1668)
        assert shelved_cabinet.dividers == dividers_before
        assert shelved_cabinet.sections == sections_before

    def test_allows_shelf_in_section_with_rod(self, shelved_cabinet: Cabinet) -> None:
        assert shelved_cabinet.add_rod(1)
        assert shelved_cabinet.add_divider(H, 1100, 0, 768)

    def test_ids_are_unique(self, cabinet: Cabinet) -> None:
        cabinet.add_divider(H, 400, 0, 768)
        cabinet.add_divider(H, 1000, 0, 768)
        cabinet.add_divider(V, 376, 0, 400)
        ids = [d.id for d in cabinet.dividers]
        assert len(set(ids)) == 3


class TestDivideSection:
    """Tests for bulk section division."""

    def test_divide_into_equal_parts(self, cabinet: Cabinet) -> None:
        """1668 high, three shelves: (1668 - 48) / 4 = 405 per part."""
        assert cabinet.divide_section(0, H, 3)

        assert [d.pos for d in cabinet.dividers] == pytest.approx([405, 826, 1247])
        assert len(cabinet.sections) == 4
        assert all(s.h == pytest.approx(405) for s in cabinet.sections)

    def test_divide_with_stands_spans_section(self, shelved_cabinet: Cabinet) -> None:
        assert shelved_cabinet.divide_section(1, V, 2)

        stands = shelved_cabinet.dividers[1:]
        assert all(d.start == 906 and d.end == 1668 for d in stands)
        assert len(shelved_cabinet.sections) == 4

    @pytest.mark.parametrize("count", [1, MAX_DIVIDE_COUNT + 1])
    def test_rejects_count_out_of_range(self, cabinet: Cabinet, count: int) -> None:
        assert not cabinet.divide_section(0, H, count)
        assert cabinet.dividers == []

    def test_rejects_parts_below_minimum(self, cabinet: Cabinet) -> None:
        """A 376 wide section split by three stands leaves (376 - 48) / 4 = 82."""
        cabinet.add_divider(V, 376, 0, 1668)
        assert not cabinet.divide_section(0, V, 3)
        assert len(cabinet.dividers) == 1

    def test_rejects_invalid_section(self, cabinet: Cabinet) -> None:
        assert not cabinet.divide_section(3, H, 2)

    def test_rejects_stands_in_section_with_rod(self, cabinet: Cabinet) -> None:
        assert cabinet.add_rod(0)
        assert not cabinet.divide_section(0, V, 2)


class TestMoveDivider:
    """Tests for divider limits and movement."""

    def test_limits_without_neighbours(self, shelved_cabinet: Cabinet) -> None:
        limits = shelved_cabinet.get_divider_limits(shelved_cabinet.dividers[0])
        assert limits.min == 100
        assert limits.max == 1668 - 100 - 16

    def test_limits_from_overlapping_neighbours(self, cabinet: Cabinet) -> None:
        cabinet.add_divider(H, 400, 0, 768)
        cabinet.add_divider(H, 900, 0, 768)
        cabinet.add_divider(H, 1300, 0, 768)

        limits = cabinet.get_divider_limits(cabinet.dividers[1])
        assert limits.min == 400 + 16 + 100
        assert limits.max == 1300 - 100 - 16

    def test_non_overlapping_dividers_do_not_constrain(self, cabinet: Cabinet) -> None:
        """Shelves on either side of a full stand move independently."""
        cabinet.add_divider(V, 376, 0, 1668)
        cabinet.add_divider(H, 800, 0, 376)
        cabinet.add_divider(H, 800, 392, 768)

        limits = cabinet.get_divider_limits(cabinet.dividers[1])
        assert limits.min == 100
        assert limits.max == 1552

    def test_perpendicular_dividers_do_not_constrain(self, cabinet: Cabinet) -> None:
        cabinet.add_divider(V, 376, 0, 1668)
        cabinet.add_divider(H, 800, 0, 376)

        limits = cabinet.get_divider_limits(cabinet.dividers[0])
        assert limits.min == 100
        assert limits.max == 768 - 116

    def test_move_clamps_to_limits(self, cabinet: Cabinet) -> None:
        cabinet.add_divider(H, 400, 0, 768)
        cabinet.add_divider(H, 900, 0, 768)
        upper = cabinet.dividers[1]

        assert cabinet.move_divider(upper.id, 450)
        assert upper.pos == 516

    def test_move_within_limits(self, shelved_cabinet: Cabinet) -> None:
        divider = shelved_cabinet.dividers[0]
        assert shelved_cabinet.move_divider(divider.id, 700)
        assert divider.pos == 700
        assert shelved_cabinet.sections[0].h == 700

    def test_move_unknown_divider(self, cabinet: Cabinet) -> None:
        assert not cabinet.move_divider(42, 500)

    def test_joined_stand_follows_shelf(self, shelved_cabinet: Cabinet) -> None:
        """A stand hanging below the shelf keeps its start on the shelf's lower face."""
        assert shelved_cabinet.add_divider(V, 400, 906, 1668)
        shelf, stand = shelved_cabinet.dividers

        shelved_cabinet.move_divider(shelf.id, 700)

        assert stand.start == 716
        assert stand.end == 1668

    def test_joined_shelf_follows_stand(self, cabinet: Cabinet) -> None:
        """A shelf ending on the stand's leading face keeps its end on it."""
        cabinet.add_divider(V, 400, 0, 1668)
        cabinet.add_divider(H, 800, 0, 400)
        stand, shelf = cabinet.dividers

        cabinet.move_divider(stand.id, 500)

        assert shelf.start == 0
        assert shelf.end == 500

    def test_shelf_on_far_face_follows_stand(self, cabinet: Cabinet) -> None:
        cabinet.add_divider(V, 400, 0, 1668)
        cabinet.add_divider(H, 800, 0, 400)
        cabinet.add_divider(H, 800, 416, 768)
        stand, _, right_shelf = cabinet.dividers

        cabinet.move_divider(stand.id, 300)

        assert right_shelf.start == 316
        assert right_shelf.end == 768

    def test_unjoined_divider_does_not_follow(self, cabinet: Cabinet) -> None:
        cabinet.add_divider(V, 400, 0, 1668)
        cabinet.add_divider(H, 800, 0, 200)
        stand, short_shelf = cabinet.dividers

        cabinet.move_divider(stand.id, 500)

        assert (short_shelf.start, short_shelf.end) == (0, 200)


class TestRemoveDivider:
    """Tests for dependent removal."""

    def test_removing_anchor_removes_dependent(self, cabinet: Cabinet) -> None:
        assert cabinet.add_divider(H, 890, 0, 500)
        assert cabinet.add_divider(V, 250, 890, 940)
        anchor, dependent = cabinet.dividers

        assert cabinet.find_dependent_dividers(anchor) == [dependent]
        assert cabinet.remove_divider(anchor.id)
        assert cabinet.dividers == []
        assert len(cabinet.sections) == 1

    def test_removing_unjoined_divider_removes_one(self, cabinet: Cabinet) -> None:
        cabinet.add_divider(H, 400, 0, 768)
        cabinet.add_divider(H, 1000, 0, 768)
        first = cabinet.dividers[0]

        assert cabinet.remove_divider(first.id)
        assert [d.pos for d in cabinet.dividers] == [1000]

    def test_removal_is_transitive(self, shelved_cabinet: Cabinet) -> None:
        """Shelf -> stand below it -> shelf beside the stand."""
        assert shelved_cabinet.add_divider(V, 400, 906, 1668)
        assert shelved_cabinet.add_divider(H, 1300, 416, 768)
        shelf = shelved_cabinet.dividers[0]

        dependents = shelved_cabinet.find_dependent_dividers(shelf)
        assert {d.pos for d in dependents} == {400, 1300}

        assert shelved_cabinet.remove_divider(shelf.id)
        assert shelved_cabinet.dividers == []

    def test_removing_dependent_leaves_anchor(self, shelved_cabinet: Cabinet) -> None:
        assert shelved_cabinet.add_divider(V, 400, 906, 1668)
        shelf, stand = shelved_cabinet.dividers

        assert shelved_cabinet.remove_divider(stand.id)
        assert shelved_cabinet.dividers == [shelf]

    def test_dependents_exclude_parent(self, cabinet: Cabinet) -> None:
        cabinet.add_divider(H, 890, 0, 500)
        cabinet.add_divider(V, 250, 890, 940)
        anchor = cabinet.dividers[0]

        assert anchor not in cabinet.find_dependent_dividers(anchor)

    def test_remove_unknown_divider(self, cabinet: Cabinet) -> None:
        assert not cabinet.remove_divider(7)


class TestMinimumClearance:
    """Every section and every pair of facing dividers keeps its clearance."""

    @staticmethod
    def _assert_clearance(cabinet: Cabinet) -> None:
        thickness = cabinet.constants.panel_thickness
        min_section = cabinet.constants.min_section

        for section in cabinet.sections:
            assert section.w >= min_section - 1e-9
            assert section.h >= min_section - 1e-9

        for a, b in combinations(cabinet.dividers, 2):
            if a.orientation is b.orientation and a.span_overlaps(b):
                assert abs(a.pos - b.pos) >= thickness - 1e-9

    def test_mixed_edit_sequence(self, cabinet: Cabinet) -> None:
        steps = [
            lambda: cabinet.add_divider(H, 890, 0, 768),
            lambda: cabinet.add_divider(V, 376, 906, 1668),
            lambda: cabinet.move_divider(1, 0),
            lambda: cabinet.divide_section(0, V, 2),
            lambda: cabinet.move_divider(2, 0),
            lambda: cabinet.move_divider(1, 1668),
            lambda: cabinet.add_divider(H, 800, 0, cabinet.dividers[2].pos),
            lambda: cabinet.divide_section(cabinet.find_section_index(600, 500), H, 3),
            lambda: cabinet.move_divider(5, 1668),
            lambda: cabinet.add_divider(H, 60, 0, 768),
            lambda: cabinet.move_divider(6, 0),
        ]

        results = []
        for step in steps:
            results.append(step())
            self._assert_clearance(cabinet)

        assert results == [True] * 9 + [False, True]
        assert cabinet.get_divider(1).pos == 1552
        assert cabinet.get_divider(5).pos == 1436
        assert len(cabinet.dividers) == 8


class TestFindDividerAt:
    def test_hit_within_tolerance(self, shelved_cabinet: Cabinet) -> None:
        assert shelved_cabinet.find_divider_at(300, 895) is shelved_cabinet.dividers[0]
        assert shelved_cabinet.find_divider_at(300, 884) is shelved_cabinet.dividers[0]

    def test_miss(self, shelved_cabinet: Cabinet) -> None:
        assert shelved_cabinet.find_divider_at(300, 850) is None

    def test_custom_tolerance(self, shelved_cabinet: Cabinet) -> None:
        assert shelved_cabinet.find_divider_at(300, 850, tolerance=50) is not None
