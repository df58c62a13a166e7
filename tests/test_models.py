"""
Unit tests for the geometry primitives, Item and Bin.

Tests cover:
- Centre-based overlap rule (touching edges, containment, truncation)
- Effective dimensions under rotation
- Bin placement: rotation order, no fall-through on overlap, no mutation on failure
- Pivot generation order
"""

import pytest

from binpack2d.core.lifecycle import ItemState
from binpack2d.core.models import (
    ORIGIN,
    Bin,
    Dimension,
    Item,
    ItemAlreadyPlacedError,
    ItemNotPlacedError,
    Pivot,
    Rect,
    Rotation,
    overlap,
)


# ---------------------------------------------------------------------------
# 1. Overlap rule
# ---------------------------------------------------------------------------

class TestOverlap:
    def test_touching_edges_do_not_overlap(self):
        assert not overlap(Rect(0, 0, 10, 10), Rect(10, 0, 10, 10))
        assert not overlap(Rect(0, 0, 10, 10), Rect(0, 10, 10, 10))

    def test_partial_overlap(self):
        assert overlap(Rect(0, 0, 10, 10), Rect(5, 5, 10, 10))

    def test_containment(self):
        assert overlap(Rect(0, 0, 10, 10), Rect(2, 2, 2, 2))

    def test_separated_on_one_axis_only(self):
        """Overlap requires both axes."""
        assert not overlap(Rect(0, 0, 10, 10), Rect(5, 30, 10, 10))

    def test_symmetric(self):
        a, b = Rect(0, 0, 7, 3), Rect(4, 1, 5, 5)
        assert overlap(a, b) == overlap(b, a)

    def test_unit_extent_truncation_is_lenient(self):
        """Half-unit centres are floored, so a 1-wide rect can sit on a 2-wide one."""
        assert not overlap(Rect(0, 0, 2, 2), Rect(0, 0, 1, 1))


# ---------------------------------------------------------------------------
# 2. Item
# ---------------------------------------------------------------------------

class TestItem:
    def test_area_uses_intrinsic_dimensions(self):
        item = Item("Item", 4, 7)
        assert item.area == 28

    def test_effective_dimension(self):
        item = Item("Item", 4, 7)
        assert item.effective_dimension(Rotation.WH) == Dimension(4, 7)
        assert item.effective_dimension(Rotation.HW) == Dimension(7, 4)

    def test_unplaced_defaults(self):
        item = Item("Item", 4, 7)
        assert item.rotation is None
        assert item.position is None
        assert item.state is ItemState.PENDING
        assert item.effective_dimension() == Dimension(4, 7)

    def test_footprint_requires_placement(self):
        with pytest.raises(ItemNotPlacedError):
            Item("Item", 4, 7).footprint

    def test_items_compare_by_identity(self):
        assert Item("Same", 1, 1) != Item("Same", 1, 1)

    def test_str(self):
        b = Bin("Small Bin", 100, 100)
        item = Item("Item 1", 2, 2)
        b.try_place(item, ORIGIN)
        assert str(item) == "Item 1(2x2) pos(0,0) rt(RotationType_WH (w,h))"


# ---------------------------------------------------------------------------
# 3. Bin placement
# ---------------------------------------------------------------------------

class TestBinPlacement:
    def test_place_at_origin_unrotated(self, small_bin):
        item = Item("Item 1", 2, 2)
        assert small_bin.try_place(item, ORIGIN)
        assert item.rotation is Rotation.WH
        assert item.position == Pivot(0, 0)
        assert item.state is ItemState.PLACED
        assert small_bin.items == [item]

    def test_rotates_when_unrotated_exceeds_bounds(self):
        b = Bin("Narrow", 10, 30)
        item = Item("Long", 20, 5)
        assert b.try_place(item, ORIGIN)
        assert item.rotation is Rotation.HW
        assert item.footprint == Rect(0, 0, 5, 20)

    def test_prefers_unrotated_when_both_fit(self, small_bin):
        item = Item("Item", 30, 10)
        assert small_bin.try_place(item, ORIGIN)
        assert item.rotation is Rotation.WH

    def test_overlap_does_not_fall_through_to_rotation(self, small_bin):
        """The first in-bounds rotation is the only one tried for overlap."""
        blocker = Item("Blocker", 10, 10)
        assert small_bin.try_place(blocker, Pivot(20, 0))

        item = Item("Item", 20, 5)
        # Unrotated spans x 10..30 and hits the blocker; rotated (5x20) would fit.
        assert small_bin.can_place(item, Pivot(10, 0)) is None
        assert not small_bin.try_place(item, Pivot(10, 0))

    def test_failed_placement_leaves_item_untouched(self, small_bin):
        item = Item("Huge", 200, 200)
        assert not small_bin.try_place(item, ORIGIN)
        assert item.rotation is None
        assert item.position is None
        assert item.state is ItemState.PENDING
        assert small_bin.is_empty

    def test_bounds_are_inclusive_of_bin_edge(self):
        b = Bin("Exact", 10, 10)
        assert b.try_place(Item("Fill", 10, 10), ORIGIN)

    def test_can_place_is_pure(self, small_bin):
        item = Item("Item", 5, 5)
        assert small_bin.can_place(item, ORIGIN) is Rotation.WH
        assert small_bin.is_empty
        assert item.position is None

    def test_item_is_placed_only_once(self, small_bin):
        item = Item("Item", 5, 5)
        small_bin.try_place(item, ORIGIN)
        other = Bin("Other", 100, 100)
        with pytest.raises(ItemAlreadyPlacedError):
            other.try_place(item, ORIGIN)
        assert other.is_empty

    def test_area_and_utilization(self):
        b = Bin("Bin", 10, 20)
        b.try_place(Item("Half", 10, 10), ORIGIN)
        assert b.area == 200
        assert b.used_area == 100
        assert b.utilization == pytest.approx(50.0)


# ---------------------------------------------------------------------------
# 4. Pivots
# ---------------------------------------------------------------------------

class TestPivots:
    def test_width_pivots_before_height_pivots(self, small_bin):
        small_bin.try_place(Item("A", 20, 10), ORIGIN)
        small_bin.try_place(Item("B", 10, 5), Pivot(20, 0))
        assert list(small_bin.pivots()) == [
            Pivot(20, 0),
            Pivot(30, 0),
            Pivot(0, 10),
            Pivot(20, 5),
        ]

    def test_pivots_use_intrinsic_dimensions(self):
        b = Bin("Narrow", 10, 30)
        b.try_place(Item("Long", 20, 5), ORIGIN)  # placed rotated
        assert list(b.pivots()) == [Pivot(20, 0), Pivot(0, 5)]

    def test_place_uses_origin_for_empty_bin(self, small_bin):
        item = Item("Item", 5, 5)
        assert small_bin.place(item)
        assert item.position == ORIGIN

    def test_place_takes_first_accepting_pivot(self, small_bin):
        small_bin.try_place(Item("A", 20, 10), ORIGIN)
        item = Item("B", 10, 5)
        assert small_bin.place(item)
        assert item.position == Pivot(20, 0)
