from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping

from app.core.registration.errors import UnknownFieldError, WizardUsageError
from app.core.registration.schema import REGISTRATION_SCHEMA, FieldSpec

logger = logging.getLogger(__name__)


class FormStateStore:
    """Current field values plus the errors of the last validation pass.

    Editing a value never validates it; validation only happens when a caller
    asks for it, so untouched fields do not show errors early.
    """

    def __init__(self, schema: Mapping[str, FieldSpec] = REGISTRATION_SCHEMA) -> None:
        self._schema = schema
        self._values: Dict[str, str] = {name: "" for name in schema}
        self._errors: Dict[str, str] = {}

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self._schema)

    @property
    def schema(self) -> Mapping[str, FieldSpec]:
        return self._schema

    def set_value(self, field: str, value: str) -> None:
        self._require_known(field)
        if not isinstance(value, str):
            raise WizardUsageError(f"Value for {field!r} must be a string, got {type(value).__name__}")
        self._values[field] = value

    def get_value(self, field: str) -> str:
        self._require_known(field)
        return self._values[field]

    def values(self) -> Dict[str, str]:
        return dict(self._values)

    def validate_subset(self, fields: Iterable[str]) -> bool:
        names = list(dict.fromkeys(fields))
        for name in names:
            self._require_known(name)

        valid = True
        for name in names:
            reason = self._schema[name].validate(self._values[name])
            if reason is None:
                self._errors.pop(name, None)
            else:
                self._errors[name] = reason
                valid = False

        logger.debug("Validated %s: %s", names, "ok" if valid else dict(self._errors))
        return valid

    def validate_all(self) -> bool:
        return self.validate_subset(self._schema)

    def get_errors(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self._errors))

    def load(self, values: Mapping[str, str], errors: Mapping[str, str]) -> None:
        """Replace the whole state, e.g. when restoring a parked session."""
        for name in list(values) + list(errors):
            self._require_known(name)
        for name, value in list(values.items()) + list(errors.items()):
            if not isinstance(value, str):
                raise WizardUsageError(f"Value for {name!r} must be a string, got {type(value).__name__}")
        self._values = {name: "" for name in self._schema}
        self._values.update(values)
        self._errors = dict(errors)

    def clear(self) -> None:
        self._values = {name: "" for name in self._schema}
        self._errors = {}

    def _require_known(self, field: str) -> None:
        if field not in self._schema:
            raise UnknownFieldError(field)
