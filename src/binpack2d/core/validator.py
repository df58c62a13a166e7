"""
Layout validator: stateless checks on a finished packing.

Checks:
  1. Bounds     - every item lies inside its bin
  2. Overlap    - no two items in a bin overlap (same centre rule as packing)
  3. Accounting - every item is placed exactly once or reported unfit
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import numpy as np

from binpack2d.core.models import Bin, Item


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────

class PlacementError(Exception):
    """Base class for layout validation errors."""


class OutOfBoundsError(PlacementError):
    """Item extends outside its bin."""


class OverlapError(PlacementError):
    """Two items in the same bin overlap."""


class AccountingError(PlacementError):
    """An item is lost, duplicated, or both placed and unfit."""


# ─────────────────────────────────────────────────────────────────────────────
# Validator
# ─────────────────────────────────────────────────────────────────────────────

def _footprints(b: Bin) -> np.ndarray:
    """(n, 4) int array of x, y, width, height for the bin's items."""
    rows = []
    for item in b.items:
        rect = item.footprint
        rows.append((rect.x, rect.y, rect.width, rect.height))
    return np.array(rows, dtype=np.int64).reshape(-1, 4)


def validate_bin(b: Bin) -> bool:
    """
    Validate the placed items of one bin.

    Returns:
        True if all checks pass.

    Raises:
        OutOfBoundsError: an item leaves the bin or has a negative coordinate.
        OverlapError:     two items overlap.
    """
    rects = _footprints(b)
    if len(rects) == 0:
        return True

    x, y, w, h = rects.T

    # ── 1. Bounds ────────────────────────────────────────────────────────
    outside = (x < 0) | (y < 0) | (x + w > b.width) | (y + h > b.height)
    if outside.any():
        idx = int(np.argmax(outside))
        item = b.items[idx]
        raise OutOfBoundsError(
            f"{item.name} at ({x[idx]},{y[idx]}) size {w[idx]}x{h[idx]} "
            f"exceeds {b.name} ({b.width}x{b.height})"
        )

    # ── 2. Pairwise overlap ──────────────────────────────────────────────
    cx = x + w // 2
    cy = y + h // 2
    dx = np.abs(cx[:, None] - cx[None, :])
    dy = np.abs(cy[:, None] - cy[None, :])
    reach_x = (w[:, None] + w[None, :]) // 2
    reach_y = (h[:, None] + h[None, :]) // 2

    hits = (dx < reach_x) & (dy < reach_y)
    hits = np.triu(hits, k=1)
    if hits.any():
        i, j = (int(v) for v in np.argwhere(hits)[0])
        raise OverlapError(
            f"{b.items[i].name} overlaps {b.items[j].name} in {b.name}"
        )

    return True


def validate_packing(
    bins: Sequence[Bin],
    unfit: Iterable[Item] = (),
    expected_count: Optional[int] = None,
) -> bool:
    """
    Validate every bin and check that no item was lost or duplicated.

    Args:
        bins:           Packed bins.
        unfit:          Items reported as unplaceable.
        expected_count: Number of items originally supplied, if known.

    Raises:
        PlacementError subclass describing the first problem found.
    """
    for b in bins:
        validate_bin(b)

    seen: set[int] = set()
    for item in [i for b in bins for i in b.items] + list(unfit):
        if id(item) in seen:
            raise AccountingError(f"{item.name} appears more than once")
        seen.add(id(item))

    if expected_count is not None and len(seen) != expected_count:
        raise AccountingError(
            f"{len(seen)} items accounted for, expected {expected_count}"
        )

    return True
