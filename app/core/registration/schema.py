"""Declarative field rules for the registration form."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Mapping, Tuple, Union

from pydantic import EmailStr, TypeAdapter, ValidationError

from app.core.registration.errors import UnknownFieldError
from config import PASSWORD_MIN_LENGTH, YEARS

NAME = "name"
EMAIL = "email"
STUDENT_ID = "studentId"
YEAR = "year"
PASSWORD = "password"
CONFIRM_PASSWORD = "confirmPassword"

FIELD_NAMES: Tuple[str, ...] = (NAME, EMAIL, STUDENT_ID, YEAR, PASSWORD, CONFIRM_PASSWORD)
PASSWORD_FIELDS = frozenset({PASSWORD, CONFIRM_PASSWORD})

_EMAIL_ADAPTER: Final[TypeAdapter[EmailStr]] = TypeAdapter(EmailStr)


@dataclass(frozen=True)
class Required:
    message: str = "This field is required"

    def check(self, value: str) -> bool:
        return value != ""


@dataclass(frozen=True)
class MinLength:
    length: int
    message: str

    def check(self, value: str) -> bool:
        return len(value) >= self.length


@dataclass(frozen=True)
class Email:
    message: str

    def check(self, value: str) -> bool:
        try:
            _EMAIL_ADAPTER.validate_python(value)
        except ValidationError:
            return False
        return True


@dataclass(frozen=True)
class OneOf:
    choices: Tuple[str, ...]
    message: str

    def check(self, value: str) -> bool:
        return value in self.choices


Rule = Union[Required, MinLength, Email, OneOf]


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    rules: Tuple[Rule, ...]
    description: str = ""
    placeholder: str = ""
    choices: Tuple[str, ...] = field(default=())

    def validate(self, value: str) -> str | None:
        """Return the first failing rule's message, or None if the value passes."""
        for rule in self.rules:
            if not rule.check(value):
                return rule.message
        return None


def build_registration_schema(
    *, password_min_length: int = PASSWORD_MIN_LENGTH
) -> Mapping[str, FieldSpec]:
    specs = (
        FieldSpec(
            name=NAME,
            label="Full name",
            rules=(Required("Please enter your name"),),
            description="This is your public display name.",
            placeholder="John Doe",
        ),
        FieldSpec(
            name=EMAIL,
            label="Email",
            rules=(
                Required("Please enter your email"),
                Email("Please enter a valid email address"),
            ),
            placeholder="johndoe@gmail.com",
        ),
        FieldSpec(
            name=STUDENT_ID,
            label="Student ID",
            rules=(Required("Please enter your student id"),),
            placeholder="Enter your student id",
        ),
        FieldSpec(
            name=YEAR,
            label="Year of study",
            rules=(
                Required("Please select your year of study"),
                OneOf(YEARS, "Year of study must be one of " + ", ".join(YEARS)),
            ),
            choices=YEARS,
        ),
        FieldSpec(
            name=PASSWORD,
            label="Password",
            rules=(
                Required("Please enter a password"),
                MinLength(
                    password_min_length,
                    f"Password must be at least {password_min_length} characters",
                ),
            ),
            placeholder="Enter your password",
        ),
        FieldSpec(
            name=CONFIRM_PASSWORD,
            label="Confirm Password",
            rules=(Required("Please confirm your password"),),
            placeholder="Confirm your password",
        ),
    )
    return MappingProxyType({spec.name: spec for spec in specs})


REGISTRATION_SCHEMA = build_registration_schema()


def get_field(field_name: str, schema: Mapping[str, FieldSpec] = REGISTRATION_SCHEMA) -> FieldSpec:
    try:
        return schema[field_name]
    except KeyError:
        raise UnknownFieldError(field_name) from None


def validate_field(
    field_name: str,
    value: str,
    schema: Mapping[str, FieldSpec] = REGISTRATION_SCHEMA,
) -> str | None:
    return get_field(field_name, schema).validate(value)
