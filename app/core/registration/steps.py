"""Step partition and the cursor that moves across it."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Tuple

from app.core.registration.errors import WizardUsageError
from app.core.registration.schema import (
    CONFIRM_PASSWORD,
    EMAIL,
    NAME,
    PASSWORD,
    STUDENT_ID,
    YEAR,
)
from app.core.registration.store import FormStateStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepDefinition:
    name: str
    title: str
    fields: Tuple[str, ...]


STEP_SEQUENCE: Tuple[StepDefinition, ...] = (
    StepDefinition(
        name="profile",
        title="About you",
        fields=(NAME, EMAIL, STUDENT_ID, YEAR),
    ),
    StepDefinition(
        name="credentials",
        title="Choose a password",
        fields=(PASSWORD, CONFIRM_PASSWORD),
    ),
)

STEPS = len(STEP_SEQUENCE)


def check_partition(steps: Tuple[StepDefinition, ...], field_names: Iterable[str]) -> None:
    """Every field must belong to exactly one non-empty step."""
    if not steps:
        raise WizardUsageError("At least one step is required")

    seen: set[str] = set()
    for step in steps:
        if not step.fields:
            raise WizardUsageError(f"Step {step.name!r} has no fields")
        overlap = seen.intersection(step.fields)
        if overlap or len(set(step.fields)) != len(step.fields):
            raise WizardUsageError(f"Step {step.name!r} repeats fields: {sorted(overlap) or step.fields}")
        seen.update(step.fields)

    expected = set(field_names)
    if seen != expected:
        raise WizardUsageError(
            "Steps must cover the schema exactly; "
            f"missing={sorted(expected - seen)} unknown={sorted(seen - expected)}"
        )


class StepController:
    """Moves the wizard cursor; forward moves are gated on the current step validating."""

    def __init__(
        self,
        store: FormStateStore,
        steps: Tuple[StepDefinition, ...] = STEP_SEQUENCE,
        *,
        cursor: int = 0,
    ) -> None:
        check_partition(steps, store.field_names)
        self._store = store
        self._steps = steps
        self._cursor = cursor
        self._check_cursor()

    @property
    def steps(self) -> Tuple[StepDefinition, ...]:
        return self._steps

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def last_index(self) -> int:
        return len(self._steps) - 1

    @property
    def current_step(self) -> StepDefinition:
        self._check_cursor()
        return self._steps[self._cursor]

    @property
    def is_first(self) -> bool:
        return self._cursor == 0

    @property
    def is_last(self) -> bool:
        return self._cursor == self.last_index

    def advance(self) -> bool:
        """Validate the current step and move forward if it passes.

        Returns True only when the cursor actually moved. On the last step this
        is a no-op and nothing is validated.
        """
        self._check_cursor()
        if self.is_last:
            logger.debug("advance() ignored on terminal step %s", self._cursor)
            return False

        step = self._steps[self._cursor]
        if not self._store.validate_subset(step.fields):
            logger.info("Step %r blocked: %s", step.name, sorted(self._store.get_errors()))
            return False

        self._cursor = min(self._cursor + 1, self.last_index)
        logger.debug("Advanced to step %s", self._cursor)
        return True

    def retreat(self) -> bool:
        self._check_cursor()
        if self.is_first:
            return False
        self._cursor = max(self._cursor - 1, 0)
        logger.debug("Retreated to step %s", self._cursor)
        return True

    def reset(self) -> None:
        self._cursor = 0

    def _check_cursor(self) -> None:
        if not 0 <= self._cursor <= self.last_index:
            raise WizardUsageError(
                f"Cursor {self._cursor} is outside of [0, {self.last_index}]"
            )
