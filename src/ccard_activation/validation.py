from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ccard_activation.i18n import ValidationMessages

ACTIVATION_CODE_LENGTH: Final[int] = 10
PASSWORD_MIN_LENGTH: Final[int] = 8
PASSWORD_MIN_LOWERCASE: Final[int] = 1
PASSWORD_MIN_UPPERCASE: Final[int] = 1

# pt-PT and es-ES mobile numbers, optionally prefixed by the country code.
MOBILE_PHONE_PATTERNS: Final[dict[str, re.Pattern[str]]] = {
    "pt-PT": re.compile(r"^(\+?351)?9[1236]\d{7}$"),
    "es-ES": re.compile(r"^(\+?34)?[67]\d{8}$"),
}

_LOWERCASE = re.compile(r"[a-z]")
_UPPERCASE = re.compile(r"[A-Z]")

ValidationErrorSet = dict[str, str]


class ActivationRequest(BaseModel):
    """Fields submitted by the activation form, keyed by their camelCase form names."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="ignore"
    )

    activation_code: str = Field(default="")
    old_password: str = Field(default="")
    new_password: str = Field(default="")
    new_password_confirmation: str = Field(default="")
    email: str = Field(default="")
    phone_number: str = Field(default="")

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> ActivationRequest:
        data = {key: value for key, value in form.items() if isinstance(value, str)}
        return cls.model_validate(data)

    def form_data(self) -> dict[str, str]:
        """Submitted values as the template expects them (camelCase keys)."""

        return self.model_dump(by_alias=True)


def is_strong_password(value: str) -> bool:
    if len(value) < PASSWORD_MIN_LENGTH:
        return False
    if len(_LOWERCASE.findall(value)) < PASSWORD_MIN_LOWERCASE:
        return False
    if len(_UPPERCASE.findall(value)) < PASSWORD_MIN_UPPERCASE:
        return False
    return True


def is_email(value: str) -> bool:
    """Bare address check; display-name forms like "Jane <jane@example.org>" are rejected."""

    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_mobile_phone(value: str, locales: tuple[str, ...] = ("pt-PT", "es-ES")) -> bool:
    return any(MOBILE_PHONE_PATTERNS[locale].match(value) for locale in locales)


def validate_activation(
    request: ActivationRequest, messages: ValidationMessages
) -> ValidationErrorSet:
    """Check an activation submission.

    Returns a mapping of form field name to message; empty when the request
    may be forwarded. One message per field: the password invariants
    (new differs from old, confirmation matches new) take precedence over the
    strength policy.
    """

    errors: ValidationErrorSet = {}

    def fail(field: str, message: str) -> None:
        errors.setdefault(field, message)

    if len(request.activation_code) != ACTIVATION_CODE_LENGTH:
        fail("activationCode", messages.activation_code)

    if not is_strong_password(request.old_password):
        fail("oldPassword", messages.password)

    if request.new_password == request.old_password:
        fail("newPassword", messages.new_password_must_be_different_from_old_password)
    if not is_strong_password(request.new_password):
        fail("newPassword", messages.password)

    if request.new_password_confirmation != request.new_password:
        fail(
            "newPasswordConfirmation",
            messages.password_confirmation_does_not_match_password,
        )
    if not is_strong_password(request.new_password_confirmation):
        fail("newPasswordConfirmation", messages.password)

    # Optional fields: empty means absent.
    if request.email and not is_email(request.email):
        fail("email", messages.email)

    if request.phone_number and not is_mobile_phone(request.phone_number):
        fail("phoneNumber", messages.phone_number)

    return errors
