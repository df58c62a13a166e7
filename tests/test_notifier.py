"""Tests for the Telegram notifier."""

import asyncio
import json

import httpx

from binpack2d.monitoring.metrics import PackingMetrics
from binpack2d.monitoring.notifier import format_packing_summary, send_telegram


def run(coro):
    return asyncio.run(coro)


class TestSendTelegram:
    def test_no_token(self, monkeypatch):
        monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
        assert run(send_telegram("hello", chat_id="42")) is False

    def test_no_chat_id(self, monkeypatch):
        monkeypatch.delenv("TELEGRAM_CHAT_ID", raising=False)
        assert run(send_telegram("hello", token="t")) is False

    def test_sends_payload(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True})

        sent = run(send_telegram(
            "hello", chat_id="42", token="abc", transport=httpx.MockTransport(handler),
        ))

        assert sent is True
        assert seen["url"] == "https://api.telegram.org/botabc/sendMessage"
        assert seen["body"] == {"chat_id": "42", "text": "hello"}

    def test_api_refusal(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(400, json={"ok": False}))
        assert run(send_telegram("hello", chat_id="42", token="abc", transport=transport)) is False

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        transport = httpx.MockTransport(handler)
        assert run(send_telegram("hello", chat_id="42", token="abc", transport=transport)) is False

    def test_non_json_response(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway"))
        assert run(send_telegram("hello", chat_id="42", token="abc", transport=transport)) is False


class TestFormat:
    def test_summary(self):
        m = PackingMetrics(run_id="run_001", total_bins=3, bins_used=2, total_items=10, items_placed=10)
        text = format_packing_summary(m)
        assert text.startswith("Packing run run_001 complete")
        assert "Bins used: 2/3" in text
        assert "Unfit" not in text

    def test_summary_with_unfit(self):
        m = PackingMetrics(run_id="run_001", items_unfit=2)
        assert format_packing_summary(m).endswith("Unfit items: 2")
