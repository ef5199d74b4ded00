"""Programming errors raised by the registration wizard.

User mistakes never end up here: they are recorded in the error mapping or
reported through the notifier. These exceptions flag a front end that drives
the wizard incorrectly.
"""
from __future__ import annotations


class WizardUsageError(RuntimeError):
    """The wizard was driven in a way that correct callers never do."""


class UnknownFieldError(WizardUsageError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Unknown registration field: {field!r}")
        self.field = field


class SessionConsumedError(WizardUsageError):
    def __init__(self) -> None:
        super().__init__("Registration session was already submitted; call reset() first")
