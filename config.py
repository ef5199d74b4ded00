from app.config.settings import settings

BOT_TOKEN = settings.bot_token
LOG_LEVEL = settings.log_level

PASSWORD_MIN_LENGTH = settings.password_min_length

YEARS = ("10", "11", "12")
