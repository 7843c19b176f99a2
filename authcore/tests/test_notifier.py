from __future__ import annotations

import pytest
from loguru import logger as loguru_logger

from authcore.infrastructure.notifier import LogNotifier, SmtpNotifier, build_notifier
from authcore.shared.config.settings import MailConfig
from authcore.shared.logging import logger, setup_logging
from authcore.shared.logging.sensitive_filter import sanitize_record

TOKEN = "AbCdEfGhIjKlMnOpQrStUvWx0123456789"
BODY = f'<div><a href="http://localhost:3000/change-password/{TOKEN}">reset password</a></div>'


@pytest.fixture()
def captured():
    setup_logging()
    messages: list[str] = []
    sink_id = loguru_logger.add(messages.append, filter=sanitize_record, format="{message}")
    yield messages
    loguru_logger.remove(sink_id)


def test_log_notifier_keeps_reset_link_readable(captured) -> None:
    LogNotifier().send("alice@example.com", BODY)

    output = "".join(captured)
    assert TOKEN in output
    assert "to=alice@example.com" in output


def test_other_records_are_still_redacted(captured) -> None:
    LogNotifier().send("alice@example.com", BODY)
    logger.info(f"unrelated link /change-password/{TOKEN} for alice@example.com")

    unrelated = captured[-1]
    assert TOKEN not in unrelated
    assert "***@example.com" in unrelated


def test_build_notifier_picks_backend() -> None:
    assert isinstance(build_notifier(MailConfig(MAIL_BACKEND="log")), LogNotifier)
    assert isinstance(build_notifier(MailConfig(MAIL_BACKEND="smtp")), SmtpNotifier)
