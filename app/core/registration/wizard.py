"""One registration session: the surface a front end drives."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple

from app.core.registration.errors import SessionConsumedError, WizardUsageError
from app.core.registration.schema import REGISTRATION_SCHEMA, FieldSpec
from app.core.registration.steps import STEP_SEQUENCE, StepController, StepDefinition
from app.core.registration.store import FormStateStore
from app.core.registration.submission import (
    NotifierProtocol,
    SubmissionCoordinator,
    SubmissionResult,
    SubmissionSink,
)


class RegistrationWizard:
    """Bundles the form state, the step cursor and the submission gate.

    After an accepted submission the session is locked; every gesture except
    reads raises SessionConsumedError until reset() is called.
    """

    def __init__(
        self,
        notifier: NotifierProtocol,
        sink: SubmissionSink,
        *,
        schema: Mapping[str, FieldSpec] = REGISTRATION_SCHEMA,
        steps: Tuple[StepDefinition, ...] = STEP_SEQUENCE,
    ) -> None:
        self._store = FormStateStore(schema)
        self._controller = StepController(self._store, steps)
        self._coordinator = SubmissionCoordinator(self._store, self._controller, notifier, sink)
        self._consumed = False

    @classmethod
    def restore(
        cls,
        snapshot: Mapping[str, Any],
        notifier: NotifierProtocol,
        sink: SubmissionSink,
        **kwargs,
    ) -> "RegistrationWizard":
        wizard = cls(notifier, sink, **kwargs)
        wizard._store.load(snapshot.get("values", {}), snapshot.get("errors", {}))
        cursor = snapshot.get("cursor", 0)
        if isinstance(cursor, bool) or not isinstance(cursor, int):
            raise WizardUsageError(f"Snapshot cursor must be an int, got {cursor!r}")
        wizard._controller = StepController(wizard._store, wizard._controller.steps, cursor=cursor)
        wizard._coordinator = SubmissionCoordinator(
            wizard._store, wizard._controller, notifier, sink
        )
        wizard._consumed = bool(snapshot.get("consumed", False))
        return wizard

    def snapshot(self) -> Dict[str, Any]:
        return {
            "values": self._store.values(),
            "errors": dict(self._store.get_errors()),
            "cursor": self._controller.cursor,
            "consumed": self._consumed,
        }

    @property
    def schema(self) -> Mapping[str, FieldSpec]:
        return self._store.schema

    @property
    def steps(self) -> Tuple[StepDefinition, ...]:
        return self._controller.steps

    @property
    def cursor(self) -> int:
        return self._controller.cursor

    @property
    def current_step(self) -> StepDefinition:
        return self._controller.current_step

    @property
    def is_first_step(self) -> bool:
        return self._controller.is_first

    @property
    def is_last_step(self) -> bool:
        return self._controller.is_last

    @property
    def consumed(self) -> bool:
        return self._consumed

    def values(self) -> Dict[str, str]:
        return self._store.values()

    def get_errors(self) -> Mapping[str, str]:
        return self._store.get_errors()

    def set_value(self, field: str, value: str) -> None:
        self._ensure_open()
        self._store.set_value(field, value)

    def advance(self) -> bool:
        self._ensure_open()
        return self._controller.advance()

    def retreat(self) -> bool:
        self._ensure_open()
        return self._controller.retreat()

    async def submit(self) -> SubmissionResult:
        self._ensure_open()
        result = await self._coordinator.submit()
        if result.accepted:
            self._consumed = True
        return result

    def reset(self) -> None:
        self._store.clear()
        self._controller.reset()
        self._consumed = False

    def _ensure_open(self) -> None:
        if self._consumed:
            raise SessionConsumedError()
