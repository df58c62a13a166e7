"""Bin and item ordering used before packing.

Bins are tried smallest first, items are placed largest first. Both orders
break ties explicitly through a TieBreak rule instead of relying on the sort
being stable.
"""

from __future__ import annotations

from enum import Enum
from functools import cmp_to_key
from typing import Sequence

from binpack2d.core.models import Bin, Item


class TieBreak(str, Enum):
    """How to order two bins (or two items) of equal area."""

    INPUT_ORDER = "input_order"  # keep the order they were added in
    NAME = "name"  # by name, then input order


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _tie(a_index: int, a_name: str, b_index: int, b_name: str, tie_break: TieBreak) -> int:
    if tie_break is TieBreak.NAME:
        by_name = _cmp(a_name, b_name)
        if by_name:
            return by_name
    return _cmp(a_index, b_index)


def compare_bins(
    a: tuple[int, Bin],
    b: tuple[int, Bin],
    tie_break: TieBreak = TieBreak.INPUT_ORDER,
) -> int:
    """
    Comparator for ``(input_index, bin)`` pairs: ascending area.

    Args:
        a, b:      Bins paired with their position in the input.
        tie_break: Rule applied when both areas are equal.

    Returns:
        Negative, zero or positive, as for ``functools.cmp_to_key``.
    """
    (ai, abin), (bi, bbin) = a, b
    by_area = _cmp(abin.area, bbin.area)
    if by_area:
        return by_area
    return _tie(ai, abin.name, bi, bbin.name, tie_break)


def compare_items(
    a: tuple[int, Item],
    b: tuple[int, Item],
    tie_break: TieBreak = TieBreak.INPUT_ORDER,
) -> int:
    """Comparator for ``(input_index, item)`` pairs: descending area."""
    (ai, aitem), (bi, bitem) = a, b
    by_area = _cmp(bitem.area, aitem.area)
    if by_area:
        return by_area
    return _tie(ai, aitem.name, bi, bitem.name, tie_break)


def sort_bins(bins: Sequence[Bin], tie_break: TieBreak = TieBreak.INPUT_ORDER) -> list[Bin]:
    """Return a new list of bins, smallest area first."""
    key = cmp_to_key(lambda a, b: compare_bins(a, b, tie_break))
    return [b for _, b in sorted(enumerate(bins), key=key)]


def sort_items(items: Sequence[Item], tie_break: TieBreak = TieBreak.INPUT_ORDER) -> list[Item]:
    """Return a new list of items, largest area first."""
    key = cmp_to_key(lambda a, b: compare_items(a, b, tie_break))
    return [i for _, i in sorted(enumerate(items), key=key)]


def get_tie_break(name: str | TieBreak) -> TieBreak:
    """
    Resolve a tie-break rule by name.

    Raises:
        ValueError: If the name is not recognized.
    """
    try:
        return TieBreak(name)
    except ValueError:
        raise ValueError(
            f"Unknown tie-break rule: {name}. "
            f"Available: {[t.value for t in TieBreak]}"
        ) from None
