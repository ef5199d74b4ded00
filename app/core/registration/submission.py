from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum as PythonEnum
from typing import Awaitable, Callable, Dict

from app.core.registration.errors import WizardUsageError
from app.core.registration.schema import CONFIRM_PASSWORD, PASSWORD
from app.core.registration.steps import StepController
from app.core.registration.store import FormStateStore

PASSWORD_MISMATCH_MESSAGE = "Passwords do not match"


class Severity(PythonEnum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class SubmissionStatus(PythonEnum):
    ACCEPTED = "accepted"
    INVALID = "invalid"
    MISMATCH = "mismatch"


class NotifierProtocol:
    async def notify(self, message: str, severity: Severity) -> None:  # pragma: no cover - protocol
        raise NotImplementedError


SubmissionSink = Callable[[Dict[str, str]], Awaitable[None]]


@dataclass
class SubmissionResult:
    status: SubmissionStatus
    payload: Dict[str, str] | None = None

    @property
    def accepted(self) -> bool:
        return self.status is SubmissionStatus.ACCEPTED


class SubmissionCoordinator:
    """Final gate: full validation, password confirmation, then hand-off to the sink."""

    def __init__(
        self,
        store: FormStateStore,
        controller: StepController,
        notifier: NotifierProtocol,
        sink: SubmissionSink,
    ) -> None:
        self._store = store
        self._controller = controller
        self._notifier = notifier
        self._sink = sink

    async def submit(self) -> SubmissionResult:
        if not self._controller.is_last:
            raise WizardUsageError(
                f"submit() called on step {self._controller.cursor}; "
                f"only step {self._controller.last_index} can submit"
            )

        if not self._store.validate_all():
            return SubmissionResult(SubmissionStatus.INVALID)

        payload = self._store.values()
        if payload[PASSWORD] != payload[CONFIRM_PASSWORD]:
            logging.info("Registration rejected: password confirmation mismatch")
            await self._notifier.notify(PASSWORD_MISMATCH_MESSAGE, Severity.DESTRUCTIVE)
            return SubmissionResult(SubmissionStatus.MISMATCH)

        try:
            await self._sink(dict(payload))
        except Exception as exc:
            logging.error("Submission sink failed: %s", exc)
            raise

        logging.info("Registration accepted for student %s", payload.get("studentId"))
        return SubmissionResult(SubmissionStatus.ACCEPTED, payload)
