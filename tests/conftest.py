"""Shared fixtures for the binpack2d test-suite."""

import os
import sys

import pytest

# Ensure the src/ layout is importable without an install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from binpack2d.core.models import Bin, Item


@pytest.fixture
def small_bin():
    """The 100x100 bin used throughout the scenarios."""
    return Bin("Small Bin", 100, 100)


@pytest.fixture
def four_items():
    """Items of four different areas, deliberately not in area order."""
    return [
        Item("Item 1", 2, 2),
        Item("Item 2", 10, 5),
        Item("Item 3", 20, 10),
        Item("Item 4", 5, 5),
    ]


@pytest.fixture
def two_bin_items():
    """Seven items whose largest (80x80) nearly fills a 100x100 bin."""
    return [
        Item("Item 1", 25, 30),
        Item("Item 2", 10, 5),
        Item("Item 3", 20, 10),
        Item("Item 4", 40, 20),
        Item("Item 5", 50, 50),
        Item("Item 6", 25, 30),
        Item("Item 7", 80, 80),
    ]
