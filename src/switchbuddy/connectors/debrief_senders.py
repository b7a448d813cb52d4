# src/switchbuddy/connectors/debrief_senders.py

"""
Outbound channels for the daily debrief.

Senders never raise: transport problems come back as SendResult(success=False, ...)
so one failing channel does not stop the others.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from ..core.ports import DebriefSender, SendResult

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org/bot{token}/sendMessage"
USER_AGENT = "SwitchBuddy/0.1 (+daily-debrief)"
_TIMEOUT_SECONDS = 15


class TelegramSender:
    name = "telegram"

    def __init__(self, bot_token: str, chat_id: str, *, session: requests.Session | None = None) -> None:
        self._url = TELEGRAM_API_URL.format(token=bot_token)
        self._chat_id = chat_id
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": USER_AGENT})

    def send(self, message: str) -> SendResult:
        try:
            resp = self._session.post(
                self._url,
                json={"chat_id": self._chat_id, "text": message},
                timeout=_TIMEOUT_SECONDS,
            )
            result = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Telegram send failed: %s", e)
            return SendResult(False, f"Failed to send message: {e}")

        if not isinstance(result, dict) or not result.get("ok"):
            description = result.get("description") if isinstance(result, dict) else None
            logger.warning("Telegram API error: %s", description)
            return SendResult(False, f"Telegram API Error: {description or 'unknown error'}")

        logger.info("Debrief sent via Telegram chat=%s", self._chat_id)
        return SendResult(True, "Message sent successfully.")


class WhatsAppSender:
    """
    Posts the debrief to a WhatsApp gateway webhook as {"to": ..., "text": ...}.

    Without a webhook URL the sender reports itself as not configured.
    """

    name = "whatsapp"

    def __init__(
        self,
        webhook_url: str | None,
        recipient: str | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self._url = (webhook_url or "").strip()
        self._recipient = recipient
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": USER_AGENT})

    def send(self, message: str) -> SendResult:
        if not self._url:
            return SendResult(False, "WhatsApp sender is not configured.")
        try:
            resp = self._session.post(
                self._url,
                json={"to": self._recipient, "text": message},
                timeout=_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            logger.warning("WhatsApp send failed: %s", e)
            return SendResult(False, f"Failed to send message: {e}")

        if resp.status_code >= 400:
            logger.warning("WhatsApp gateway returned status %s", resp.status_code)
            return SendResult(False, f"WhatsApp gateway returned status {resp.status_code}")

        logger.info("Debrief sent via WhatsApp")
        return SendResult(True, "WhatsApp message sent successfully.")


def build_senders(settings: Any) -> list[DebriefSender]:
    """Senders for every channel that has credentials in settings."""
    senders: list[DebriefSender] = []

    token = getattr(settings, "telegram_bot_token", None)
    chat_id = getattr(settings, "telegram_chat_id", None)
    if token and chat_id:
        senders.append(TelegramSender(token, chat_id))

    webhook = getattr(settings, "whatsapp_webhook_url", None)
    if webhook:
        senders.append(WhatsAppSender(webhook, getattr(settings, "whatsapp_recipient", None)))

    if not senders:
        logger.info("No debrief senders configured.")
    return senders
