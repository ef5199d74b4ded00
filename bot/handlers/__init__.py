from aiogram import Dispatcher
from bot.handlers.registration import router as registration_router

def register_handlers(dp: Dispatcher):
    dp.include_router(registration_router)
