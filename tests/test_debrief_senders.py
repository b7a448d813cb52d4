# tests/test_debrief_senders.py

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import requests

from switchbuddy.connectors.debrief_senders import TelegramSender, WhatsAppSender, build_senders


class _Response:
    def __init__(self, status_code: int = 200, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _Session:
    """Stands in for requests.Session; records posts."""

    def __init__(self, response: _Response | Exception) -> None:
        self.headers: dict[str, str] = {}
        self.response = response
        self.posts: list[tuple[str, dict[str, Any]]] = []

    def post(self, url: str, *, json: dict[str, Any], timeout: float) -> _Response:
        self.posts.append((url, json))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def test_telegram_posts_chat_id_and_text() -> None:
    session = _Session(_Response(payload={"ok": True, "result": {}}))
    sender = TelegramSender("TOKEN", "42", session=session)

    result = sender.send("hello")

    assert result.success
    [(url, body)] = session.posts
    assert url == "https://api.telegram.org/botTOKEN/sendMessage"
    assert body == {"chat_id": "42", "text": "hello"}
    assert "SwitchBuddy" in session.headers["User-Agent"]


def test_telegram_reports_api_error() -> None:
    session = _Session(_Response(payload={"ok": False, "description": "chat not found"}))

    result = TelegramSender("T", "1", session=session).send("x")

    assert not result.success
    assert "chat not found" in result.message


def test_telegram_never_raises_on_transport_error() -> None:
    session = _Session(requests.ConnectionError("offline"))

    result = TelegramSender("T", "1", session=session).send("x")

    assert not result.success
    assert "offline" in result.message


def test_telegram_handles_non_json_body() -> None:
    session = _Session(_Response(payload=ValueError("no json")))
    assert not TelegramSender("T", "1", session=session).send("x").success


def test_whatsapp_requires_webhook() -> None:
    result = WhatsAppSender(None, session=_Session(_Response())).send("x")
    assert not result.success
    assert "not configured" in result.message


def test_whatsapp_posts_and_checks_status() -> None:
    ok = _Session(_Response(status_code=200))
    assert WhatsAppSender("https://gw.example/hook", "+100", session=ok).send("hi").success
    assert ok.posts == [("https://gw.example/hook", {"to": "+100", "text": "hi"})]

    bad = _Session(_Response(status_code=502))
    result = WhatsAppSender("https://gw.example/hook", "+100", session=bad).send("hi")
    assert not result.success
    assert "502" in result.message


def test_build_senders_only_includes_configured_channels() -> None:
    assert build_senders(SimpleNamespace()) == []

    senders = build_senders(
        SimpleNamespace(
            telegram_bot_token="T",
            telegram_chat_id="1",
            whatsapp_webhook_url="https://gw.example/hook",
            whatsapp_recipient="+100",
        )
    )
    assert [s.name for s in senders] == ["telegram", "whatsapp"]

    only_token = build_senders(SimpleNamespace(telegram_bot_token="T", telegram_chat_id=None))
    assert only_token == []
