# bot/states.py
from aiogram.fsm.state import StatesGroup, State

from app.core.registration.schema import (
    CONFIRM_PASSWORD,
    EMAIL,
    NAME,
    PASSWORD,
    STUDENT_ID,
    YEAR,
)


class Registration(StatesGroup):
    name = State()
    email = State()
    student_id = State()
    year = State()
    password = State()
    confirm_password = State()
    review = State()


FIELD_STATES = {
    NAME: Registration.name,
    EMAIL: Registration.email,
    STUDENT_ID: Registration.student_id,
    YEAR: Registration.year,
    PASSWORD: Registration.password,
    CONFIRM_PASSWORD: Registration.confirm_password,
}

STATE_FIELDS = {state.state: field for field, state in FIELD_STATES.items()}
