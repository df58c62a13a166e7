"""Metrics tracking and export for packing runs.

Provides dataclasses describing a finished packing and utilities for
exporting the results to JSON and CSV formats.
"""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from binpack2d.algorithms.packer import Packer
from binpack2d.core.models import Bin, Item

LAYOUT_FIELDS = ["bin", "item", "x", "y", "width", "height", "rotation"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BinMetrics:
    """Metrics for a single bin.

    Attributes:
        bin_name: Name of the bin.
        width: Bin width.
        height: Bin height.
        items_placed: Number of items in the bin.
        area_used: Summed area of the placed items.
        area_total: Bin area.
        utilization_pct: Area utilization percentage (0-100).
    """

    bin_name: str
    width: int
    height: int
    items_placed: int
    area_used: int
    area_total: int
    utilization_pct: float

    @classmethod
    def from_bin(cls, b: Bin) -> BinMetrics:
        """Build metrics from a packed bin.

        Example:
            >>> from binpack2d.core.models import Bin, Item
            >>> b = Bin("Small Bin", 10, 10)
            >>> b.place(Item("Item 1", 5, 10))
            True
            >>> BinMetrics.from_bin(b).utilization_pct
            50.0
        """
        return cls(
            bin_name=b.name,
            width=b.width,
            height=b.height,
            items_placed=len(b.items),
            area_used=b.used_area,
            area_total=b.area,
            utilization_pct=b.utilization,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class PackingMetrics:
    """Aggregate metrics for one packing run.

    Utilization statistics only cover bins that received at least one item.

    Attributes:
        run_id: Identifier for the run.
        total_bins: Number of bins offered to the packer.
        bins_used: Number of bins holding at least one item.
        total_items: Number of items supplied.
        items_placed: Number of items placed in some bin.
        items_unfit: Number of items that fit no bin.
        avg_utilization_pct: Mean utilization of the used bins.
        median_utilization_pct: Median utilization of the used bins.
        min_utilization_pct: Minimum utilization of the used bins.
        max_utilization_pct: Maximum utilization of the used bins.
        runtime_seconds: Wall time of the run.
        started_at: Run start timestamp.
        completed_at: Run completion timestamp (None if running).
        bin_metrics: Per-bin metrics, in packing order.
    """

    run_id: str
    total_bins: int = 0
    bins_used: int = 0
    total_items: int = 0
    items_placed: int = 0
    items_unfit: int = 0
    avg_utilization_pct: float = 0.0
    median_utilization_pct: float = 0.0
    min_utilization_pct: float = 0.0
    max_utilization_pct: float = 0.0
    runtime_seconds: float = 0.0
    started_at: datetime = field(default_factory=_utcnow)
    completed_at: datetime | None = None
    bin_metrics: list[BinMetrics] = field(default_factory=list)

    def add_bin(self, bin_metric: BinMetrics) -> None:
        """Add a bin's metrics to the run."""
        self.bin_metrics.append(bin_metric)
        self.total_bins += 1
        if bin_metric.items_placed:
            self.bins_used += 1
            self.items_placed += bin_metric.items_placed
        self._recalculate_stats()

    def mark_complete(self) -> None:
        """Mark the run as complete and calculate the runtime."""
        self.completed_at = _utcnow()
        self.runtime_seconds = (self.completed_at - self.started_at).total_seconds()

    def _recalculate_stats(self) -> None:
        utilizations = np.array(
            [m.utilization_pct for m in self.bin_metrics if m.items_placed],
            dtype=float,
        )
        if utilizations.size == 0:
            return

        self.avg_utilization_pct = float(np.mean(utilizations))
        self.median_utilization_pct = float(np.median(utilizations))
        self.min_utilization_pct = float(np.min(utilizations))
        self.max_utilization_pct = float(np.max(utilizations))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with ISO timestamps."""
        d = asdict(self)
        d["started_at"] = self.started_at.isoformat()
        d["completed_at"] = self.completed_at.isoformat() if self.completed_at else None
        d["bin_metrics"] = [m.to_dict() for m in self.bin_metrics]
        return d

    def to_summary_dict(self) -> dict[str, Any]:
        """Convert to dictionary without per-bin details."""
        d = self.to_dict()
        del d["bin_metrics"]
        return d


def collect_metrics(packer: Packer, run_id: str, started_at: datetime | None = None) -> PackingMetrics:
    """Build PackingMetrics from a packer after ``pack()`` has run."""
    metrics = PackingMetrics(run_id=run_id)
    if started_at is not None:
        metrics.started_at = started_at

    for b in packer.bins:
        metrics.add_bin(BinMetrics.from_bin(b))

    metrics.items_unfit = len(packer.unfit_items)
    metrics.total_items = metrics.items_placed + metrics.items_unfit + len(packer.items)
    metrics.mark_complete()
    return metrics


def layout_rows(bins: list[Bin]) -> list[dict[str, Any]]:
    """One row per placed item, bin by bin in placement order."""
    rows = []
    for b in bins:
        for item in b.items:
            rect = item.footprint
            rows.append({
                "bin": b.name,
                "item": item.name,
                "x": rect.x,
                "y": rect.y,
                "width": rect.width,
                "height": rect.height,
                "rotation": item.rotation.name,
            })
    return rows


def _item_dict(item: Item) -> dict[str, Any]:
    return {"item": item.name, "width": item.width, "height": item.height}


def export_to_json(
    metrics: PackingMetrics,
    output_path: Path | str,
    packer: Packer | None = None,
) -> None:
    """Export run metrics (and the layout, if ``packer`` is given) to a JSON file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = metrics.to_dict()
    if packer is not None:
        data["layout"] = layout_rows(packer.bins)
        data["unfit"] = [_item_dict(i) for i in packer.unfit_items]

    with output_path.open("w") as f:
        json.dump(data, f, indent=2)


def export_to_csv(packer: Packer, output_path: Path | str) -> None:
    """Export the layout to a CSV file, one row per placed item."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=LAYOUT_FIELDS)
        writer.writeheader()
        for row in layout_rows(packer.bins):
            writer.writerow(row)


def print_summary(metrics: PackingMetrics) -> str:
    """Generate human-readable summary of run metrics."""
    lines = [
        "=" * 60,
        f"Run: {metrics.run_id}",
        "=" * 60,
        f"Bins Used: {metrics.bins_used} / {metrics.total_bins}",
        f"Items Placed: {metrics.items_placed} / {metrics.total_items}",
        f"Items Unfit: {metrics.items_unfit}",
        "",
        "Utilization Statistics (used bins):",
        f"  Average: {metrics.avg_utilization_pct:.2f}%",
        f"  Median:  {metrics.median_utilization_pct:.2f}%",
        f"  Min:     {metrics.min_utilization_pct:.2f}%",
        f"  Max:     {metrics.max_utilization_pct:.2f}%",
        "",
        f"Runtime: {metrics.runtime_seconds:.3f} seconds",
        "=" * 60,
    ]
    return "\n".join(lines)
