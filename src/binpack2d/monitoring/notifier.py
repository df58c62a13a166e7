"""Lightweight Telegram notification for packing runs.

Sends a plain-text run summary to a Telegram channel via the Bot API.

No retry logic: notifications are non-critical.
"""

from __future__ import annotations

import os

import httpx

from binpack2d.monitoring.metrics import PackingMetrics

TELEGRAM_API = "https://api.telegram.org/bot{token}/sendMessage"


async def send_telegram(
    message: str,
    chat_id: str | None = None,
    token: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """Send a plain-text message to a Telegram channel.

    Args:
        message: Text to send.
        chat_id: Telegram chat ID. Defaults to TELEGRAM_CHAT_ID env var.
        token: Bot token. Defaults to TELEGRAM_BOT_TOKEN env var.
        transport: Optional httpx transport (used by tests).

    Returns:
        True if message was sent successfully, False otherwise.
    """
    token = token or os.environ.get("TELEGRAM_BOT_TOKEN", "")
    if not token:
        return False

    chat_id = chat_id or os.environ.get("TELEGRAM_CHAT_ID", "")
    if not chat_id:
        return False

    url = TELEGRAM_API.format(token=token)
    payload = {"chat_id": chat_id, "text": message}

    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            resp = await client.post(url, json=payload)
            data = resp.json()
            return bool(data.get("ok", False))
    except (httpx.HTTPError, ValueError):
        return False


def format_packing_summary(metrics: PackingMetrics) -> str:
    """Format the end-of-run notification message.

    Example:
        >>> m = PackingMetrics(run_id="run_001", total_bins=2, bins_used=1)
        >>> "run_001" in format_packing_summary(m)
        True
    """
    lines = [
        f"Packing run {metrics.run_id} complete",
        f"Bins used: {metrics.bins_used}/{metrics.total_bins}",
        f"Items placed: {metrics.items_placed}/{metrics.total_items}",
        f"Avg utilization: {metrics.avg_utilization_pct:.1f}%",
        f"Runtime: {metrics.runtime_seconds:.2f}s",
    ]
    if metrics.items_unfit:
        lines.append(f"Unfit items: {metrics.items_unfit}")
    return "\n".join(lines)
