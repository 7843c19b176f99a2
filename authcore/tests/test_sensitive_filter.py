from __future__ import annotations

from authcore.shared.logging.sensitive_filter import sanitize_message, sanitize_record


def test_reset_link_token_is_redacted() -> None:
    message = '<a href="http://localhost:3000/change-password/AbCdEfGhIjKlMnOpQrStUvWx">'

    assert "AbCdEfGhIjKlMnOpQrStUvWx" not in sanitize_message(message)


def test_password_and_email_are_masked() -> None:
    cleaned = sanitize_message("login password=hunter22 for alice@example.com")

    assert "hunter22" not in cleaned
    assert "alice@" not in cleaned
    assert "***@example.com" in cleaned


def test_database_credentials_are_masked() -> None:
    cleaned = sanitize_message("connecting to postgresql+psycopg://app:s3cr3t@db/auth")

    assert "s3cr3t" not in cleaned
    assert "app:***REDACTED***@" in cleaned


def test_record_filter_rewrites_message_in_place() -> None:
    record = {"message": "sid=abcdefghijklmnopqrstuvwxyz", "extra": {}}

    assert sanitize_record(record) is True
    assert record["message"] == "sid=***REDACTED***"


def test_mail_preview_records_are_left_alone() -> None:
    body = "to=alice@example.com /change-password/AbCdEfGhIjKlMnOpQrStUvWx"
    record = {"message": body, "extra": {"mail_preview": True}}

    assert sanitize_record(record) is True
    assert record["message"] == body
