"""Monitoring module for binpack2d.

Provides run metrics, JSON/CSV export and Telegram notifications.
"""

from .metrics import (
    BinMetrics,
    PackingMetrics,
    collect_metrics,
    export_to_csv,
    export_to_json,
    print_summary,
)
from .notifier import format_packing_summary, send_telegram

__all__ = [
    # Metrics
    "BinMetrics",
    "PackingMetrics",
    "collect_metrics",
    "export_to_csv",
    "export_to_json",
    "print_summary",
    # Telegram
    "send_telegram",
    "format_packing_summary",
]
