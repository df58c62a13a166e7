"""Per-item packing lifecycle.

Every item moves through a small state machine while the packer works:

    PENDING     waiting in the packer's queue
    PROBING     first in the queue, being checked against empty bins
    ESCALATING  did not fit the active bin, trying strictly larger bins
    PLACED      committed to a bin (terminal)
    UNFIT       fits no bin at all (terminal)
"""

from __future__ import annotations

from enum import Enum


class ItemState(Enum):
    PENDING = "pending"
    PROBING = "probing"
    ESCALATING = "escalating"
    PLACED = "placed"
    UNFIT = "unfit"

    @property
    def is_terminal(self) -> bool:
        return self in (ItemState.PLACED, ItemState.UNFIT)


class InvalidTransitionError(Exception):
    """An item was moved along an edge the lifecycle does not allow."""


TRANSITIONS: dict[ItemState, frozenset[ItemState]] = {
    ItemState.PENDING: frozenset({
        ItemState.PROBING,
        ItemState.PLACED,
        ItemState.ESCALATING,
    }),
    ItemState.PROBING: frozenset({
        ItemState.PLACED,
        ItemState.ESCALATING,
        ItemState.UNFIT,
    }),
    # A failed escalation sends the item back to the queue for the next round,
    # unless the round made no progress at all.
    ItemState.ESCALATING: frozenset({
        ItemState.PLACED,
        ItemState.PENDING,
        ItemState.UNFIT,
    }),
    ItemState.PLACED: frozenset(),
    ItemState.UNFIT: frozenset(),
}


def can_advance(current: ItemState, target: ItemState) -> bool:
    """Return True if ``current -> target`` is an allowed transition."""
    return target in TRANSITIONS[current]


def advance(current: ItemState, target: ItemState) -> ItemState:
    """
    Validate a lifecycle transition.

    Args:
        current: State the item is in now.
        target:  State the item should move to.

    Returns:
        ``target`` when the transition is allowed.

    Raises:
        InvalidTransitionError: If the edge is not in TRANSITIONS.
    """
    if not can_advance(current, target):
        raise InvalidTransitionError(
            f"Cannot move item from {current.value} to {target.value}"
        )
    return target
