from __future__ import annotations

import pytest

from ccard_activation.i18n import build_message_catalog
from ccard_activation.validation import (
    ActivationRequest,
    is_email,
    is_mobile_phone,
    is_strong_password,
    validate_activation,
)

MESSAGES = build_message_catalog("en").validation_message


def _request(**overrides: str) -> ActivationRequest:
    data = {
        "activationCode": "ABCDE12345",
        "oldPassword": "OldPass1",
        "newPassword": "NewPass1",
        "newPasswordConfirmation": "NewPass1",
        "email": "",
        "phoneNumber": "",
    }
    data.update(overrides)
    return ActivationRequest.from_form(data)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("OldPass1", True),
        ("abcdEFGH", True),
        ("Abcdefg", False),
        ("abcdefgh1", False),
        ("ABCDEFGH1", False),
        ("", False),
    ],
)
def test_is_strong_password(value: str, expected: bool) -> None:
    assert is_strong_password(value) is expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("912345678", True),
        ("+351912345678", True),
        ("351962345678", True),
        ("612345678", True),
        ("+34712345678", True),
        ("942345678", False),
        ("212345678", False),
        ("+44612345678", False),
        ("91234567", False),
    ],
)
def test_is_mobile_phone_pt_and_es(value: str, expected: bool) -> None:
    assert is_mobile_phone(value) is expected


def test_is_email() -> None:
    assert is_email("jane.doe@example.org")
    assert not is_email("jane.doe")
    assert not is_email("jane@")


def test_is_email_rejects_display_name_form() -> None:
    assert not is_email("Jane Doe <jane@example.org>")
    assert not is_email("<jane@example.org>")


def test_valid_request_has_no_errors() -> None:
    assert validate_activation(_request(), MESSAGES) == {}


def test_activation_code_must_have_ten_characters() -> None:
    errors = validate_activation(_request(activationCode="SHORT"), MESSAGES)
    assert errors == {"activationCode": MESSAGES.activation_code}

    errors = validate_activation(_request(activationCode="ABCDE123456"), MESSAGES)
    assert errors == {"activationCode": MESSAGES.activation_code}


def test_new_password_must_differ_from_old_password() -> None:
    errors = validate_activation(
        _request(newPassword="OldPass1", newPasswordConfirmation="OldPass1"), MESSAGES
    )
    assert errors == {"newPassword": MESSAGES.new_password_must_be_different_from_old_password}


def test_confirmation_must_match_new_password() -> None:
    errors = validate_activation(_request(newPasswordConfirmation="OtherPass1"), MESSAGES)
    assert errors == {
        "newPasswordConfirmation": MESSAGES.password_confirmation_does_not_match_password
    }


def test_weak_distinct_password_reports_policy_message() -> None:
    errors = validate_activation(
        _request(newPassword="weak", newPasswordConfirmation="weak"), MESSAGES
    )
    assert errors["newPassword"] == MESSAGES.password
    assert errors["newPasswordConfirmation"] == MESSAGES.password


def test_same_weak_password_reports_must_be_different() -> None:
    errors = validate_activation(
        _request(
            oldPassword="weakpass", newPassword="weakpass", newPasswordConfirmation="weakpass"
        ),
        MESSAGES,
    )
    assert errors["oldPassword"] == MESSAGES.password
    assert errors["newPassword"] == MESSAGES.new_password_must_be_different_from_old_password


def test_weak_mismatched_confirmation_reports_does_not_match() -> None:
    errors = validate_activation(_request(newPasswordConfirmation="x"), MESSAGES)
    assert errors == {
        "newPasswordConfirmation": MESSAGES.password_confirmation_does_not_match_password
    }


def test_empty_optional_fields_are_skipped() -> None:
    assert validate_activation(_request(email="", phoneNumber=""), MESSAGES) == {}


def test_invalid_optional_fields_are_reported() -> None:
    errors = validate_activation(_request(email="nope", phoneNumber="123"), MESSAGES)
    assert errors == {"email": MESSAGES.email, "phoneNumber": MESSAGES.phone_number}


def test_missing_fields_default_to_empty() -> None:
    request = ActivationRequest.from_form({"activationCode": "ABCDE12345"})
    assert request.old_password == ""
    errors = validate_activation(request, MESSAGES)
    assert "oldPassword" in errors
    assert "email" not in errors
