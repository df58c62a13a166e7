"""Greedy corner-point packer with escalation to larger bins."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from binpack2d.algorithms.ordering import TieBreak, sort_bins, sort_items
from binpack2d.core.lifecycle import ItemState
from binpack2d.core.models import ORIGIN, Bin, Item

logger = logging.getLogger(__name__)


class Packer:
    """
    Places items into bins, largest item first, smallest bin first.

    The first pending item picks a bin (the smallest one it fits at the
    origin). That bin is then filled greedily with the rest of the queue,
    anchoring each item at the corners of items already in the bin. An item
    that fits nowhere in the active bin is escalated to strictly larger bins;
    if one takes it, filling continues there. Items left over go back to the
    queue for the next round. Items that fit no bin at all end up in
    ``unfit_items``.

    Usage:
        packer = Packer()
        packer.add_bin(Bin("Small Bin", 100, 100))
        packer.add_item(Item("Item 1", 2, 2), Item("Item 2", 10, 5))
        packer.pack()
    """

    def __init__(self, tie_break: TieBreak = TieBreak.INPUT_ORDER):
        self.tie_break = tie_break
        self.bins: list[Bin] = []
        self.items: list[Item] = []
        self.unfit_items: list[Item] = []

    def add_bin(self, *bins: Bin) -> None:
        self.bins.extend(bins)

    def add_item(self, *items: Item) -> None:
        self.items.extend(items)

    @property
    def placed_items(self) -> list[Item]:
        """All placed items, bin by bin in bin order."""
        return [item for b in self.bins for item in b.items]

    @property
    def used_bins(self) -> list[Bin]:
        return [b for b in self.bins if not b.is_empty]

    def pack(self) -> None:
        """
        Pack every pending item into a bin or into ``unfit_items``.

        Calling this again with nothing pending leaves all state unchanged.
        """
        if not self.items:
            return

        self.bins = sort_bins(self.bins, self.tie_break)
        self.items = sort_items(self.items, self.tie_break)

        while self.items:
            item = self.items[0]
            item.transition(ItemState.PROBING)

            target = self.find_fitted_bin(item)
            if target is None:
                self._unfit_first()
                continue

            pending_before = len(self.items)
            leftover = self.fill_bin(target, self.items)
            if len(leftover) == pending_before:
                # Nothing went in, not even the probed item.
                self.items = leftover
                self._unfit_first()
                continue

            for left in leftover:
                left.transition(ItemState.PENDING)
            self.items = leftover

        logger.info(
            "Packed %d items into %d of %d bins, %d unfit",
            len(self.placed_items), len(self.used_bins), len(self.bins), len(self.unfit_items),
        )

    def find_fitted_bin(self, item: Item) -> Optional[Bin]:
        """
        Return the first bin (in sorted order) that could take ``item`` at the
        origin, or None. Bins are not modified.
        """
        for b in self.bins:
            if b.can_place(item, ORIGIN) is not None:
                logger.debug("%s fits %s at the origin", item.name, b)
                return b
        return None

    def fill_bin(self, b: Bin, items: list[Item]) -> list[Item]:
        """
        Commit ``items[0]`` at the origin of ``b``, then place as many of the
        remaining items as possible.

        Args:
            b:     Target bin, normally empty.
            items: Items to place, in order.

        Returns:
            The items that could not be placed in this round. If even the first
            item could not be committed anywhere, ``items`` is returned as is.
        """
        first, rest = items[0], items[1:]

        if not b.try_place(first, ORIGIN):
            first.transition(ItemState.ESCALATING)
            bigger = next(self._bigger_bins(b), None)
            if bigger is not None:
                logger.debug("%s did not fit %s, retrying in %s", first.name, b, bigger)
                return self.fill_bin(bigger, items)
            return items
        logger.debug("Placed %s in %s", first, b)

        unpacked: list[Item] = []
        for item in rest:
            if b.place(item):
                logger.debug("Placed %s in %s", item, b)
                continue

            item.transition(ItemState.ESCALATING)
            escalated = self._escalate(b, item)
            if escalated is None:
                unpacked.append(item)
                continue
            b = escalated

        return unpacked

    def _escalate(self, b: Bin, item: Item) -> Optional[Bin]:
        """Try ``item`` in each bin strictly larger than ``b``; return the one that took it."""
        for bigger in self._bigger_bins(b):
            if bigger.place(item):
                logger.debug("Escalated %s from %s to %s", item, b, bigger)
                return bigger
        return None

    def _bigger_bins(self, b: Bin) -> Iterator[Bin]:
        """Bins with strictly greater area than ``b``, in sorted order."""
        return (other for other in self.bins if other.area > b.area)

    def _unfit_first(self) -> None:
        if not self.items:
            return
        item = self.items.pop(0)
        item.transition(ItemState.UNFIT)
        self.unfit_items.append(item)
        logger.warning("%s (%dx%d) does not fit any bin", item.name, item.width, item.height)
