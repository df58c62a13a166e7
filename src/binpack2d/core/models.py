"""Core data models for 2D rectangle packing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, NamedTuple, Optional

from binpack2d.core.lifecycle import ItemState, advance


class Rotation(IntEnum):
    """Axis-aligned orientation of an item. Tried in declaration order."""

    WH = 0  # unrotated (w, h)
    HW = 1  # rotated 90 degrees (h, w)

    @property
    def label(self) -> str:
        return "RotationType_WH (w,h)" if self is Rotation.WH else "RotationType_HW (h,w)"


class Axis(IntEnum):
    """Direction in which a placed item spawns a candidate pivot."""

    WIDTH = 0
    HEIGHT = 1


class Pivot(NamedTuple):
    """Anchor corner (x, y) of an item's bounding box."""

    x: int
    y: int

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


class Dimension(NamedTuple):
    width: int
    height: int


ORIGIN = Pivot(0, 0)


@dataclass(frozen=True)
class Rect:
    """Footprint of an item at a position with its rotation applied."""

    x: int
    y: int
    width: int
    height: int

    @property
    def x_max(self) -> int:
        return self.x + self.width

    @property
    def y_max(self) -> int:
        return self.y + self.height


def overlap(a: Rect, b: Rect) -> bool:
    """
    Axis-aligned overlap test on integer centres.

    Centres and half-extents use floor division, so odd extents are
    truncated by half a unit. Rectangles that only touch do not overlap.
    """
    cax = a.x + a.width // 2
    cay = a.y + a.height // 2
    cbx = b.x + b.width // 2
    cby = b.y + b.height // 2

    return (
        abs(cax - cbx) < (a.width + b.width) // 2
        and abs(cay - cby) < (a.height + b.height) // 2
    )


class ItemAlreadyPlacedError(Exception):
    """An item's rotation and position can only be committed once."""


class ItemNotPlacedError(Exception):
    """The item has no position yet."""


@dataclass(eq=False)
class Item:
    """
    A rectangle to be packed.

    Attributes:
        name:     Identifier, used for display only.
        width:    Intrinsic x extent.
        height:   Intrinsic y extent.
        rotation: Set once the item joins a bin, None before.
        position: Set once the item joins a bin, None before.
        state:    Where the item is in the packing lifecycle.
    """

    name: str
    width: int
    height: int
    rotation: Optional[Rotation] = field(default=None, init=False)
    position: Optional[Pivot] = field(default=None, init=False)
    state: ItemState = field(default=ItemState.PENDING, init=False)

    @property
    def area(self) -> int:
        """Area from the intrinsic dimensions (rotation does not change it)."""
        return self.width * self.height

    @property
    def is_placed(self) -> bool:
        return self.position is not None

    def effective_dimension(self, rotation: Optional[Rotation] = None) -> Dimension:
        """(width, height) with ``rotation`` (default: the committed one) applied."""
        if rotation is None:
            rotation = self.rotation if self.rotation is not None else Rotation.WH
        if rotation is Rotation.HW:
            return Dimension(self.height, self.width)
        return Dimension(self.width, self.height)

    def footprint_at(self, pivot: Pivot, rotation: Rotation) -> Rect:
        w, h = self.effective_dimension(rotation)
        return Rect(pivot.x, pivot.y, w, h)

    @property
    def footprint(self) -> Rect:
        if self.position is None or self.rotation is None:
            raise ItemNotPlacedError(f"{self.name} has not been placed")
        return self.footprint_at(self.position, self.rotation)

    def place(self, rotation: Rotation, position: Pivot) -> None:
        """Commit rotation and position. Only a Bin should call this."""
        if self.is_placed:
            raise ItemAlreadyPlacedError(
                f"{self.name} is already placed at ({self.position})"
            )
        self.transition(ItemState.PLACED)
        self.rotation = rotation
        self.position = position

    def transition(self, target: ItemState) -> None:
        """Move to ``target`` (no-op if already there)."""
        if self.state is not target:
            self.state = advance(self.state, target)

    def __str__(self) -> str:
        rotation = self.rotation.label if self.rotation is not None else "-"
        position = str(self.position) if self.position is not None else "-"
        return f"{self.name}({self.width}x{self.height}) pos({position}) rt({rotation})"

    def __repr__(self) -> str:
        return (
            f"Item(name={self.name!r}, {self.width}x{self.height}, "
            f"rotation={self.rotation.name if self.rotation is not None else None}, "
            f"position={tuple(self.position) if self.position is not None else None}, "
            f"state={self.state.value})"
        )


class Bin:
    """A fixed-size container holding items in placement order."""

    def __init__(self, name: str, width: int, height: int):
        self.name = name
        self.width = width
        self.height = height
        self.items: list[Item] = []

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def used_area(self) -> int:
        return sum(item.area for item in self.items)

    @property
    def utilization(self) -> float:
        """Share of the bin's area covered by items, in percent."""
        return (self.used_area / self.area) * 100

    def can_place(self, item: Item, pivot: Pivot) -> Optional[Rotation]:
        """
        Check whether ``item`` can be anchored at ``pivot`` without mutating
        anything.

        Rotations are tried in order; the first one that stays inside the bin
        is the only one tested for overlap. If it overlaps a placed item the
        placement fails even if the other rotation would have fitted.

        Returns:
            The rotation to use, or None if the item cannot go there.
        """
        for rotation in Rotation:
            candidate = item.footprint_at(pivot, rotation)
            if candidate.x_max > self.width or candidate.y_max > self.height:
                continue

            for placed in self.items:
                if overlap(placed.footprint, candidate):
                    return None
            return rotation

        return None

    def try_place(self, item: Item, pivot: Pivot) -> bool:
        """Place ``item`` at ``pivot`` if possible. The item is untouched on failure."""
        rotation = self.can_place(item, pivot)
        if rotation is None:
            return False

        item.place(rotation, pivot)
        self.items.append(item)
        return True

    def pivots(self) -> Iterator[Pivot]:
        """
        Candidate anchors spawned by the placed items.

        All width-side pivots (in placement order) come before any
        height-side pivot. Offsets use each placed item's intrinsic
        width and height.
        """
        for axis in Axis:
            for placed in list(self.items):
                assert placed.position is not None
                if axis is Axis.WIDTH:
                    yield Pivot(placed.position.x + placed.width, placed.position.y)
                else:
                    yield Pivot(placed.position.x, placed.position.y + placed.height)

    def place(self, item: Item) -> bool:
        """
        Put ``item`` at the origin of an empty bin, or at the first pivot that
        accepts it otherwise.
        """
        if self.is_empty:
            return self.try_place(item, ORIGIN)

        for pivot in self.pivots():
            if self.try_place(item, pivot):
                return True
        return False

    def __str__(self) -> str:
        return f"{self.name}({self.width}x{self.height})"

    def __repr__(self) -> str:
        return (
            f"Bin(name={self.name!r}, {self.width}x{self.height}, "
            f"items={len(self.items)}, util={self.utilization:.1f}%)"
        )
