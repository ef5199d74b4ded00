# registration.py
import logging

from aiogram import Router, F
from aiogram.filters import Command, CommandStart, StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, ReplyKeyboardRemove

from app.container import AppContainer
from app.core.registration.schema import PASSWORD, PASSWORD_FIELDS
from app.core.registration.submission import SubmissionStatus
from app.core.registration.wizard import RegistrationWizard
from bot.keyboards import (
    CANCEL,
    PREVIOUS_STEP,
    SUBMIT,
    navigation_keyboard,
    review_keyboard,
    year_keyboard,
)
from bot.states import FIELD_STATES, STATE_FIELDS, Registration

router = Router()
logger = logging.getLogger(__name__)

WIZARD_KEY = "wizard"
FIELD_STATE_FILTER = StateFilter(*FIELD_STATES.values())


async def load_wizard(
    state: FSMContext, chat_id: int, container: AppContainer
) -> RegistrationWizard | None:
    data = await state.get_data()
    snapshot = data.get(WIZARD_KEY)
    if snapshot is None:
        return None
    return container.restore_wizard(chat_id, snapshot)


async def save_wizard(state: FSMContext, wizard: RegistrationWizard) -> None:
    await state.update_data({WIZARD_KEY: wizard.snapshot()})


def field_prompt(wizard: RegistrationWizard, field: str) -> str:
    spec = wizard.schema[field]
    lines = [
        f"Step {wizard.cursor + 1}/{len(wizard.steps)} · {wizard.current_step.title}",
        f"{spec.label}:",
    ]
    if spec.description:
        lines.append(spec.description)
    if spec.choices:
        lines.append("Choose one of: " + ", ".join(spec.choices))
    elif spec.placeholder:
        lines.append(f"({spec.placeholder})")
    return "\n".join(lines)


async def ask_field(message: Message, state: FSMContext, wizard: RegistrationWizard, field: str) -> None:
    spec = wizard.schema[field]
    can_go_back = not wizard.is_first_step
    keyboard = year_keyboard(can_go_back) if spec.choices else navigation_keyboard(can_go_back)
    await state.set_state(FIELD_STATES[field])
    await message.answer(field_prompt(wizard, field), reply_markup=keyboard)


def _step_has_errors(wizard: RegistrationWizard) -> bool:
    errors = wizard.get_errors()
    return any(field in errors for field in wizard.current_step.fields)


def first_invalid_field(wizard: RegistrationWizard) -> str:
    errors = wizard.get_errors()
    fields = wizard.current_step.fields
    return next((field for field in fields if field in errors), fields[0])


async def report_errors(message: Message, wizard: RegistrationWizard) -> None:
    errors = wizard.get_errors()
    lines = [
        f"• {wizard.schema[field].label}: {errors[field]}"
        for field in wizard.current_step.fields
        if field in errors
    ]
    if lines:
        await message.answer("Please fix the following:\n" + "\n".join(lines))


async def show_review(message: Message, state: FSMContext, wizard: RegistrationWizard) -> None:
    values = wizard.values()
    summary = "\n".join(
        f"• {spec.label}: {'********' if name in PASSWORD_FIELDS else values[name]}"
        for name, spec in wizard.schema.items()
    )
    await state.set_state(Registration.review)
    await message.answer(
        "Please check your details:\n\n" + summary + "\n\nPress Submit to finish.",
        reply_markup=review_keyboard,
    )


async def _delete_quietly(message: Message) -> None:
    try:
        await message.delete()
    except Exception as exc:
        logger.exception("Could not delete password message: %s", exc)


@router.message(CommandStart())
async def cmd_start(message: Message, state: FSMContext, container: AppContainer):
    await state.clear()
    wizard = container.new_wizard(message.chat.id)
    await save_wizard(state, wizard)
    await message.answer(
        "Hi! Let's get you registered. It only takes two short steps. "
        "Send /cancel at any time to stop."
    )
    await ask_field(message, state, wizard, wizard.current_step.fields[0])


@router.message(Command("cancel"))
@router.message(F.text == CANCEL)
async def cmd_cancel(message: Message, state: FSMContext):
    await state.clear()
    await message.answer(
        "Registration cancelled. Send /start whenever you want to try again.",
        reply_markup=ReplyKeyboardRemove(),
    )


@router.message(StateFilter(*FIELD_STATES.values(), Registration.review), F.text == PREVIOUS_STEP)
async def process_previous_step(message: Message, state: FSMContext, container: AppContainer):
    wizard = await load_wizard(state, message.chat.id, container)
    if wizard is None:
        await _restart_hint(message, state)
        return

    wizard.retreat()
    await save_wizard(state, wizard)
    await ask_field(message, state, wizard, wizard.current_step.fields[0])


@router.message(Registration.review, F.text == SUBMIT)
async def process_submit(message: Message, state: FSMContext, container: AppContainer):
    wizard = await load_wizard(state, message.chat.id, container)
    if wizard is None:
        await _restart_hint(message, state)
        return

    try:
        result = await wizard.submit()
    except Exception as exc:
        logger.exception("Failed to submit registration: %s", exc)
        await message.answer("Something went wrong while submitting. Please press Submit again.")
        return

    if result.status is SubmissionStatus.ACCEPTED:
        await state.clear()
        await message.answer("Thank you, you are registered!", reply_markup=ReplyKeyboardRemove())
        return

    if result.status is SubmissionStatus.MISMATCH:
        # the notifier has already told the user what went wrong
        await save_wizard(state, wizard)
        await ask_field(message, state, wizard, PASSWORD)
        return

    # walk back until the shown step holds an invalid field
    while not _step_has_errors(wizard) and wizard.retreat():
        pass
    await save_wizard(state, wizard)
    await report_errors(message, wizard)
    await ask_field(message, state, wizard, first_invalid_field(wizard))


@router.message(Registration.review)
async def process_invalid_review(message: Message, state: FSMContext):
    await message.answer(
        "Please choose one of the options below:",
        reply_markup=review_keyboard,
    )


@router.message(FIELD_STATE_FILTER, F.text)
async def process_field(message: Message, state: FSMContext, container: AppContainer):
    wizard = await load_wizard(state, message.chat.id, container)
    if wizard is None:
        await _restart_hint(message, state)
        return

    field = STATE_FIELDS[await state.get_state()]
    if field in PASSWORD_FIELDS:
        value = message.text
        await _delete_quietly(message)
    else:
        value = message.text.strip()
    wizard.set_value(field, value)

    fields = wizard.current_step.fields
    position = fields.index(field)
    if position + 1 < len(fields):
        await save_wizard(state, wizard)
        await ask_field(message, state, wizard, fields[position + 1])
        return

    if wizard.is_last_step:
        await save_wizard(state, wizard)
        await show_review(message, state, wizard)
        return

    advanced = wizard.advance()
    await save_wizard(state, wizard)
    if advanced:
        await ask_field(message, state, wizard, wizard.current_step.fields[0])
        return

    await report_errors(message, wizard)
    await ask_field(message, state, wizard, first_invalid_field(wizard))


@router.message(FIELD_STATE_FILTER)
async def process_non_text(message: Message, state: FSMContext):
    await message.answer("Please answer with a text message.")


async def _restart_hint(message: Message, state: FSMContext) -> None:
    await state.clear()
    await message.answer(
        "Your registration session has expired. Send /start to begin again.",
        reply_markup=ReplyKeyboardRemove(),
    )
