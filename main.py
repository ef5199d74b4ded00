import asyncio
import logging

from aiogram import Bot
from aiogram.filters import Command
from aiogram.types import BotCommand, Message

from app.container import get_container
from bot.handlers import register_handlers
from config import LOG_LEVEL


async def set_commands(bot: Bot):
    """Register the bot menu commands."""
    commands = [
        BotCommand(command="/start", description="Start registration"),
        BotCommand(command="/cancel", description="Cancel registration"),
        BotCommand(command="/help", description="Help"),
    ]
    await bot.set_my_commands(commands)

async def cmd_help(message: Message):
    """/help handler"""
    help_text = (
        "🤖 Registration bot:\n\n"
        "• /start - begin (or restart) registration\n"
        "• /cancel - drop the current registration\n"
        "• /help - this message\n\n"
        "Step 1 asks for your name, email, student ID and year of study. "
        "Step 2 asks you to choose and confirm a password."
    )
    await message.answer(help_text)

async def main():
    logging.basicConfig(level=LOG_LEVEL)

    container = get_container()
    dp = container.dispatcher

    dp.message.register(cmd_help, Command("help"))
    register_handlers(dp)

    await set_commands(container.bot)

    dp["container"] = container

    logging.info("Registration bot started.")
    await dp.start_polling(container.bot)

if __name__ == "__main__":
    asyncio.run(main())
