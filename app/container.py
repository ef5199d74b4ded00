from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage

from app.config.settings import get_settings, Settings
from app.core.messaging.service import ChatNotifier, MessageService, RegistrationEchoSink
from app.core.registration.wizard import RegistrationWizard


@dataclass
class AppContainer:
    settings: Settings
    bot: Bot
    dispatcher: Dispatcher
    message_service: MessageService

    def notifier_for(self, chat_id: int) -> ChatNotifier:
        return ChatNotifier(self.message_service, chat_id)

    def sink_for(self, chat_id: int) -> RegistrationEchoSink:
        return RegistrationEchoSink(self.message_service, chat_id)

    def new_wizard(self, chat_id: int) -> RegistrationWizard:
        return RegistrationWizard(self.notifier_for(chat_id), self.sink_for(chat_id))

    def restore_wizard(self, chat_id: int, snapshot) -> RegistrationWizard:
        return RegistrationWizard.restore(
            snapshot, self.notifier_for(chat_id), self.sink_for(chat_id)
        )


@lru_cache()
def get_container() -> AppContainer:
    settings = get_settings()
    if not settings.bot_token:
        raise RuntimeError("BOT_TOKEN env variable is required to start the bot")

    storage = MemoryStorage()
    bot = Bot(token=settings.bot_token)
    dispatcher = Dispatcher(storage=storage)

    message_service = MessageService(bot)

    return AppContainer(
        settings=settings,
        bot=bot,
        dispatcher=dispatcher,
        message_service=message_service,
    )
