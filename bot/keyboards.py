from aiogram.types import ReplyKeyboardMarkup, KeyboardButton

from config import YEARS

PREVIOUS_STEP = "⬅️ Previous step"
SUBMIT = "✅ Submit"
CANCEL = "✖️ Cancel"


def navigation_keyboard(can_go_back: bool) -> ReplyKeyboardMarkup:
    row = [KeyboardButton(text=CANCEL)]
    if can_go_back:
        row.insert(0, KeyboardButton(text=PREVIOUS_STEP))
    return ReplyKeyboardMarkup(keyboard=[row], resize_keyboard=True)


def year_keyboard(can_go_back: bool) -> ReplyKeyboardMarkup:
    keyboard = [[KeyboardButton(text=year) for year in YEARS]]
    keyboard.extend(navigation_keyboard(can_go_back).keyboard)
    return ReplyKeyboardMarkup(
        keyboard=keyboard,
        resize_keyboard=True,
        one_time_keyboard=True,
    )


review_keyboard = ReplyKeyboardMarkup(
    keyboard=[
        [KeyboardButton(text=SUBMIT)],
        [KeyboardButton(text=PREVIOUS_STEP), KeyboardButton(text=CANCEL)],
    ],
    resize_keyboard=True,
    one_time_keyboard=True,
)
