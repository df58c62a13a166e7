"""Dataset generation for packing experiments."""

from __future__ import annotations

import random

from binpack2d.algorithms.ordering import TieBreak
from binpack2d.runner.config import BinSpec, ItemSpec, PackingJob


def generate_items(
    count: int = 50,
    min_dim: int = 5,
    max_dim: int = 60,
    seed: int | None = None,
) -> list[ItemSpec]:
    """
    Generate random item specs.

    Args:
        count: Number of items to generate
        min_dim: Smallest width/height (inclusive)
        max_dim: Largest width/height (inclusive)
        seed: Random seed for reproducibility (default: None)

    Returns:
        List of ItemSpec, one per item, named "Item 1".."Item N"
    """
    rng = random.Random(seed)
    return [
        ItemSpec(
            name=f"Item {i + 1}",
            width=rng.randint(min_dim, max_dim),
            height=rng.randint(min_dim, max_dim),
        )
        for i in range(count)
    ]


def generate_bins(count: int = 3, width: int = 100, height: int = 100) -> list[BinSpec]:
    """Identical bins named "Bin 1".."Bin N"."""
    return [BinSpec(name=f"Bin {i + 1}", width=width, height=height) for i in range(count)]


def random_job(
    item_count: int = 50,
    bin_count: int = 3,
    bin_size: tuple[int, int] = (100, 100),
    min_dim: int = 5,
    max_dim: int = 60,
    seed: int | None = None,
    tie_break: TieBreak = TieBreak.INPUT_ORDER,
) -> PackingJob:
    """Build a complete random job."""
    return PackingJob(
        bins=generate_bins(bin_count, *bin_size),
        items=generate_items(item_count, min_dim, max_dim, seed),
        tie_break=tie_break,
    )
