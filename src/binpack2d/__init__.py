"""binpack2d: heuristic 2D rectangle bin packing.

Typical usage:
    from binpack2d import Bin, Item, Packer

    packer = Packer()
    packer.add_bin(Bin("Small Bin", 100, 100))
    packer.add_item(Item("Item 1", 20, 10), Item("Item 2", 10, 5))
    packer.pack()
"""

from .algorithms.ordering import TieBreak
from .algorithms.packer import Packer
from .core.lifecycle import ItemState
from .core.models import ORIGIN, Bin, Dimension, Item, Pivot, Rect, Rotation, overlap

__version__ = "0.1.0"

__all__ = [
    "Bin",
    "Dimension",
    "Item",
    "ItemState",
    "ORIGIN",
    "Packer",
    "Pivot",
    "Rect",
    "Rotation",
    "TieBreak",
    "overlap",
]
