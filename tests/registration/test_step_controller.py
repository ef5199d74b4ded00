import pytest

from app.core.registration.errors import WizardUsageError
from app.core.registration.schema import FIELD_NAMES
from app.core.registration.steps import (
    STEP_SEQUENCE,
    STEPS,
    StepController,
    StepDefinition,
    check_partition,
)
from app.core.registration.store import FormStateStore


@pytest.fixture
def store(profile_values):
    store = FormStateStore()
    for field, value in profile_values.items():
        store.set_value(field, value)
    return store


def test_partition_covers_every_field_once():
    fields = [field for step in STEP_SEQUENCE for field in step.fields]

    assert STEPS == 2
    assert sorted(fields) == sorted(FIELD_NAMES)
    assert STEP_SEQUENCE[0].fields == ("name", "email", "studentId", "year")
    assert STEP_SEQUENCE[1].fields == ("password", "confirmPassword")


def test_advance_with_valid_profile_moves_to_credentials(store):
    controller = StepController(store)

    assert controller.advance()
    assert controller.cursor == 1
    assert controller.current_step.name == "credentials"


def test_advance_blocked_by_single_invalid_field(store):
    store.set_value("email", "jane")
    store.validate_subset(["password"])
    controller = StepController(store)

    assert not controller.advance()
    assert controller.cursor == 0
    errors = store.get_errors()
    assert errors["email"] == "Please enter a valid email address"
    assert errors["password"] == "Please enter a password"
    assert set(errors) == {"email", "password"}


def test_advance_on_terminal_step_is_noop(store):
    controller = StepController(store, cursor=STEPS - 1)

    assert not controller.advance()
    assert controller.cursor == STEPS - 1
    assert dict(store.get_errors()) == {}


def test_retreat_is_unconditional_and_keeps_errors(store):
    controller = StepController(store)
    controller.advance()
    store.validate_subset(["password", "confirmPassword"])
    before = dict(store.get_errors())

    assert controller.retreat()
    assert controller.cursor == 0
    assert dict(store.get_errors()) == before


def test_retreat_on_first_step_is_noop(store):
    controller = StepController(store)

    assert not controller.retreat()
    assert controller.cursor == 0


def test_cursor_outside_range_is_rejected(store):
    with pytest.raises(WizardUsageError):
        StepController(store, cursor=STEPS)
    with pytest.raises(WizardUsageError):
        StepController(store, cursor=-1)


@pytest.mark.parametrize(
    "steps",
    [
        (),
        (StepDefinition("all", "All", FIELD_NAMES[:-1]),),
        (
            StepDefinition("a", "A", FIELD_NAMES),
            StepDefinition("b", "B", ("name",)),
        ),
        (
            StepDefinition("a", "A", FIELD_NAMES),
            StepDefinition("b", "B", ()),
        ),
    ],
)
def test_bad_partitions_are_rejected(steps):
    with pytest.raises(WizardUsageError):
        check_partition(steps, FIELD_NAMES)


def test_custom_single_step_partition(store):
    controller = StepController(store, (StepDefinition("all", "All", FIELD_NAMES),))

    assert controller.is_first and controller.is_last
    assert not controller.advance()
