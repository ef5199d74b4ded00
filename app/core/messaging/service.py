from __future__ import annotations

import json
import logging
from typing import Mapping

from aiogram import Bot

from app.core.registration.schema import PASSWORD_FIELDS
from app.core.registration.submission import Severity

SEVERITY_MARKERS = {
    Severity.DEFAULT: "ℹ️",
    Severity.DESTRUCTIVE: "❌",
}
MASKED_VALUE = "********"


class MessageService:
    """Thin wrapper over aiogram Bot with registration-specific helpers."""

    def __init__(self, bot: Bot):
        self._bot = bot

    async def send_text(self, chat_id: int, text: str, **kwargs) -> None:
        try:
            await self._bot.send_message(chat_id=chat_id, text=text, **kwargs)
        except Exception as exc:  # pragma: no cover - logging only
            logging.error("Failed to deliver message to %s: %s", chat_id, exc)

    async def notify_chat(self, chat_id: int, message: str, severity: Severity) -> None:
        await self.send_text(chat_id, f"{SEVERITY_MARKERS[severity]} {message}")

    async def send_registration_summary(self, chat_id: int, payload: Mapping[str, str]) -> None:
        """Echo the accepted registration back, passwords masked."""
        shown = {
            key: MASKED_VALUE if key in PASSWORD_FIELDS else value
            for key, value in payload.items()
        }
        text = (
            "🎉 Registration submitted!\n\n"
            + json.dumps(shown, indent=4, ensure_ascii=False)
        )
        await self.send_text(chat_id, text)


class ChatNotifier:
    """Notifier bound to a single chat."""

    def __init__(self, message_service: MessageService, chat_id: int) -> None:
        self._message_service = message_service
        self._chat_id = chat_id

    async def notify(self, message: str, severity: Severity) -> None:
        await self._message_service.notify_chat(self._chat_id, message, severity)


class RegistrationEchoSink:
    """Submission sink that only shows the payload to the user; nothing is stored."""

    def __init__(self, message_service: MessageService, chat_id: int) -> None:
        self._message_service = message_service
        self._chat_id = chat_id

    async def __call__(self, payload: Mapping[str, str]) -> None:
        logging.info("Echoing registration payload to chat %s", self._chat_id)
        await self._message_service.send_registration_summary(self._chat_id, payload)
