from __future__ import annotations

import pytest

from authcore.application.services.credentials_validation import (
    validate_new_password,
    validate_register,
)
from authcore.domain.users.entities import FieldError


def test_valid_registration_has_no_errors() -> None:
    assert validate_register(username="alice", email="alice@example.com", password="secret") == []


@pytest.mark.parametrize(
    ("username", "email", "password", "expected"),
    [
        ("alice", "alice.example.com", "secret", FieldError("email", "invalid email")),
        ("al", "alice@example.com", "secret", FieldError("username", "length must be greater than 2")),
        ("", "alice@example.com", "secret", FieldError("username", "length must be greater than 2")),
        ("al@ce", "alice@example.com", "secret", FieldError("username", "cannot include an @")),
        ("alice", "alice@example.com", "pw", FieldError("password", "length must be greater than 2")),
    ],
)
def test_first_violated_rule_is_reported(
    username: str, email: str, password: str, expected: FieldError
) -> None:
    assert validate_register(username=username, email=email, password=password) == [expected]


def test_only_one_error_is_returned_when_every_field_is_bad() -> None:
    errors = validate_register(username="a", email="nope", password="")

    assert errors == [FieldError("email", "invalid email")]


def test_new_password_rule_targets_new_password_field() -> None:
    assert validate_new_password("ab") == [
        FieldError("newPassword", "length must be greater than 2")
    ]
    assert validate_new_password("abc") == []
