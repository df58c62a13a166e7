"""
Job configuration: the bins and items of one packing run.

Job files are YAML (JSON is accepted too, being a YAML subset):

    tie_break: input_order
    bins:
      - {name: Small Bin, width: 100, height: 100}
    items:
      - {name: Panel, width: 20, height: 10, quantity: 4}
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, ValidationError

from binpack2d.algorithms.ordering import TieBreak
from binpack2d.algorithms.packer import Packer
from binpack2d.core.models import Bin, Item


class JobConfigError(Exception):
    """A job file could not be parsed or does not describe a valid job."""


class _RectSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    width: PositiveInt
    height: PositiveInt
    quantity: PositiveInt = 1

    def expanded_names(self) -> list[str]:
        """One name per copy; copies are numbered when quantity > 1."""
        if self.quantity == 1:
            return [self.name]
        return [f"{self.name} #{k}" for k in range(1, self.quantity + 1)]


class BinSpec(_RectSpec):
    """A bin type and how many of it are available."""

    def build(self) -> list[Bin]:
        return [Bin(name, self.width, self.height) for name in self.expanded_names()]


class ItemSpec(_RectSpec):
    """An item type and how many copies to pack."""

    def build(self) -> list[Item]:
        return [Item(name, self.width, self.height) for name in self.expanded_names()]


class PackingJob(BaseModel):
    """
    All inputs of a packing run.

    Attributes:
        bins:      Bin types (at least one).
        items:     Item types.
        tie_break: Ordering rule for equal-area bins and items.
    """

    model_config = ConfigDict(extra="forbid")

    bins: list[BinSpec] = Field(min_length=1)
    items: list[ItemSpec] = Field(default_factory=list)
    tie_break: TieBreak = TieBreak.INPUT_ORDER

    @property
    def item_count(self) -> int:
        return sum(spec.quantity for spec in self.items)

    def build_packer(self) -> Packer:
        """Create a Packer loaded with fresh bins and items for this job."""
        packer = Packer(tie_break=self.tie_break)
        for bin_spec in self.bins:
            packer.add_bin(*bin_spec.build())
        for item_spec in self.items:
            packer.add_item(*item_spec.build())
        return packer

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def parse_job(data: Any, source: str = "<job>") -> PackingJob:
    """
    Validate already-parsed job data.

    Raises:
        JobConfigError: If the data does not describe a valid job.
    """
    try:
        return PackingJob.model_validate(data)
    except ValidationError as exc:
        raise JobConfigError(f"Invalid job in {source}:\n{exc}") from exc


def load_job(path: Path | str) -> PackingJob:
    """
    Load and validate a YAML or JSON job file.

    Raises:
        JobConfigError: If the file cannot be read, parsed, or validated.
    """
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as exc:
        raise JobConfigError(f"Cannot read job file {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise JobConfigError(f"Cannot parse job file {path}: {exc}") from exc

    return parse_job(data, source=str(path))


def save_job(job: PackingJob, path: Path | str) -> None:
    """Write a job to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        yaml.safe_dump(job.to_dict(), f, sort_keys=False)
