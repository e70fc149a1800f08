"""Localized strings shown by the activation views.

Catalog keys mirror the camelCase names used in ``config/activation.json``
overrides, e.g. ``{"validationMessage": {"email": "..."}}``.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"


class _CatalogModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ValidationMessages(_CatalogModel):
    activation_code: str
    password: str
    new_password_must_be_different_from_old_password: str
    password_confirmation_does_not_match_password: str
    email: str
    phone_number: str


class Messages(_CatalogModel):
    activate_login_title: str
    activate_login_success_title: str
    activate_login_success_message: str
    unexpected_error: str


class FormLabels(_CatalogModel):
    activation_code: str
    old_password: str
    new_password: str
    new_password_confirmation: str
    email: str
    phone_number: str
    submit: str


class MessageCatalog(_CatalogModel):
    locale: str = Field(default=DEFAULT_LOCALE)
    validation_message: ValidationMessages
    messages: Messages
    labels: FormLabels


_BUILTIN: dict[str, dict[str, Any]] = {
    "en": {
        "validationMessage": {
            "activationCode": "The activation code must have exactly 10 characters.",
            "password": (
                "The password must have at least 8 characters, "
                "one lowercase and one uppercase letter."
            ),
            "newPasswordMustBeDifferentFromOldPassword": (
                "The new password must be different from the old password."
            ),
            "passwordConfirmationDoesNotMatchPassword": (
                "The password confirmation does not match the new password."
            ),
            "email": "Invalid email address.",
            "phoneNumber": "Invalid mobile phone number.",
        },
        "messages": {
            "activateLoginTitle": "Activate your account",
            "activateLoginSuccessTitle": "Account activated",
            "activateLoginSuccessMessage": (
                "Your password was changed. You can now log in with your new password."
            ),
            "unexpectedError": "Unexpected error, please try again later.",
        },
        "labels": {
            "activationCode": "Activation code",
            "oldPassword": "Temporary password",
            "newPassword": "New password",
            "newPasswordConfirmation": "Confirm new password",
            "email": "Email (optional)",
            "phoneNumber": "Mobile phone (optional)",
            "submit": "Activate",
        },
    },
    "pt": {
        "validationMessage": {
            "activationCode": "O código de ativação deve ter exatamente 10 caracteres.",
            "password": (
                "A palavra-passe deve ter pelo menos 8 caracteres, "
                "uma letra minúscula e uma letra maiúscula."
            ),
            "newPasswordMustBeDifferentFromOldPassword": (
                "A nova palavra-passe deve ser diferente da palavra-passe antiga."
            ),
            "passwordConfirmationDoesNotMatchPassword": (
                "A confirmação não corresponde à nova palavra-passe."
            ),
            "email": "Endereço de email inválido.",
            "phoneNumber": "Número de telemóvel inválido.",
        },
        "messages": {
            "activateLoginTitle": "Ativar a sua conta",
            "activateLoginSuccessTitle": "Conta ativada",
            "activateLoginSuccessMessage": (
                "A sua palavra-passe foi alterada. Já pode entrar com a nova palavra-passe."
            ),
            "unexpectedError": "Erro inesperado, tente novamente mais tarde.",
        },
        "labels": {
            "activationCode": "Código de ativação",
            "oldPassword": "Palavra-passe temporária",
            "newPassword": "Nova palavra-passe",
            "newPasswordConfirmation": "Confirmar nova palavra-passe",
            "email": "Email (opcional)",
            "phoneNumber": "Telemóvel (opcional)",
            "submit": "Ativar",
        },
    },
}


def available_locales() -> list[str]:
    return sorted(_BUILTIN)


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def build_message_catalog(
    locale: str = DEFAULT_LOCALE, overrides: dict[str, Any] | None = None
) -> MessageCatalog:
    """Build the catalog for ``locale``, applying per-key ``overrides``.

    Unknown locales fall back to the default catalog.
    """

    key = (locale or "").strip().lower().split("-")[0]
    if key not in _BUILTIN:
        logger.warning(
            "Unknown locale %r (available: %s); falling back to %r",
            locale,
            ", ".join(available_locales()),
            DEFAULT_LOCALE,
        )
        key = DEFAULT_LOCALE

    raw = _merge(_BUILTIN[key], overrides or {})
    raw["locale"] = key
    return MessageCatalog.model_validate(raw)
