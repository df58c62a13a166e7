"""Command-line runner for packing jobs."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from binpack2d.algorithms.packer import Packer
from binpack2d.core.models import Bin, Item
from binpack2d.core.validator import validate_packing
from binpack2d.monitoring.metrics import (
    PackingMetrics,
    collect_metrics,
    export_to_csv,
    export_to_json,
    print_summary,
)
from binpack2d.monitoring.notifier import format_packing_summary, send_telegram
from binpack2d.runner.config import JobConfigError, PackingJob, load_job
from binpack2d.runner.dataset import random_job

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """A packed job and its metrics."""

    job: PackingJob
    packer: Packer
    metrics: PackingMetrics


def run_job(job: PackingJob, run_id: str | None = None) -> RunResult:
    """
    Pack a job and validate the resulting layout.

    Args:
        job: Validated job description.
        run_id: Identifier for the metrics (default: timestamp based)

    Returns:
        RunResult with the packed bins, unfit items and metrics.

    Raises:
        PlacementError: If the layout breaks a packing invariant.
    """
    started_at = datetime.now(timezone.utc)
    run_id = run_id or f"run_{started_at.strftime('%Y%m%d_%H%M%S')}"

    packer = job.build_packer()
    packer.pack()
    validate_packing(packer.bins, packer.unfit_items, expected_count=job.item_count)

    metrics = collect_metrics(packer, run_id=run_id, started_at=started_at)
    return RunResult(job=job, packer=packer, metrics=metrics)


def format_layout(bins: Sequence[Bin], unfit: Sequence[Item] = ()) -> str:
    """Text dump of bins, their items with position/rotation, and unfit items."""
    lines = []
    for b in bins:
        lines.append(str(b))
        lines.append(" packed items:")
        for item in b.items:
            lines.append(f"   {item}")
    if unfit:
        lines.append("unfit items:")
        for item in unfit:
            lines.append(f"   {item.name}({item.width}x{item.height})")
    return "\n".join(lines)


def _parse_size(value: str) -> tuple[int, int]:
    try:
        w, h = (int(v) for v in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}") from None
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"bin size must be positive, got {value!r}")
    return w, h


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="binpack2d-run",
        description="Pack rectangular items into rectangular bins",
    )
    parser.add_argument("job", nargs="?", help="YAML or JSON job file")
    parser.add_argument(
        "--random",
        type=int,
        metavar="N",
        help="Pack N random items instead of reading a job file",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for --random")
    parser.add_argument(
        "--bin",
        type=_parse_size,
        default=(100, 100),
        metavar="WxH",
        help="Bin size for --random (default: 100x100)",
    )
    parser.add_argument(
        "--bins",
        type=int,
        default=3,
        help="Number of bins for --random (default: 3)",
    )
    parser.add_argument("--json", type=Path, help="Write metrics and layout to this JSON file")
    parser.add_argument("--csv", type=Path, help="Write the layout to this CSV file")
    parser.add_argument("--verbose", action="store_true", help="Log every placement decision")
    parser.add_argument(
        "--notify",
        action="store_true",
        help="Send the summary to Telegram (TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Entry point for ``binpack2d-run``.

    Returns:
        Process exit code: 0 on success, 2 on bad input.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.random is not None:
        job = random_job(
            item_count=args.random,
            bin_count=args.bins,
            bin_size=args.bin,
            seed=args.seed,
        )
    elif args.job:
        try:
            job = load_job(args.job)
        except JobConfigError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
    else:
        parser.print_usage(sys.stderr)
        print("error: a job file or --random N is required", file=sys.stderr)
        return 2

    result = run_job(job)

    print(format_layout(result.packer.bins, result.packer.unfit_items))
    print()
    print(print_summary(result.metrics))

    if args.json:
        export_to_json(result.metrics, args.json, packer=result.packer)
        print(f"Saved results to {args.json}")
    if args.csv:
        export_to_csv(result.packer, args.csv)
        print(f"Saved layout to {args.csv}")

    if args.notify:
        sent = asyncio.run(send_telegram(format_packing_summary(result.metrics)))
        if not sent:
            logger.warning("Telegram notification was not sent")

    return 0


if __name__ == "__main__":
    sys.exit(main())
