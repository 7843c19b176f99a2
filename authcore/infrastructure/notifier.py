# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import smtplib
import threading
from email.message import EmailMessage

from authcore.domain.users.repositories import Notifier
from authcore.shared.config.settings import MailConfig
from authcore.shared.logging import logger
from authcore.shared.logging.sensitive_filter import MAIL_PREVIEW


class LogNotifier(Notifier):
    """Development notifier: writes the message to the log instead of mailing it."""

    def send(self, to: str, body_html: str) -> None:
        # The log is the only delivery channel here, so the link must stay readable.
        logger.bind(**{MAIL_PREVIEW: True}).info(f"mail.log: to={to} body={body_html}")


class SmtpNotifier(Notifier):
    def __init__(self, config: MailConfig) -> None:
        self._config = config

    def send(self, to: str, body_html: str) -> None:
        threading.Thread(
            target=self._deliver, args=(to, body_html), name="smtp-notifier", daemon=True
        ).start()

    def _build_message(self, to: str, body_html: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = self._config.subject
        message["From"] = self._config.sender
        message["To"] = to
        message.set_content("Open this message in an HTML capable mail client.")
        message.add_alternative(body_html, subtype="html")
        return message

    def _deliver(self, to: str, body_html: str) -> None:
        cfg = self._config
        try:
            with smtplib.SMTP(cfg.smtp_host, cfg.smtp_port, timeout=30) as server:
                if cfg.smtp_use_tls:
                    server.starttls()
                if cfg.smtp_username and cfg.smtp_password:
                    server.login(cfg.smtp_username, cfg.smtp_password)
                server.send_message(self._build_message(to, body_html))
            logger.info(f"mail.smtp: sent to={to}")
        except (OSError, smtplib.SMTPException):
            logger.exception(f"mail.smtp: delivery failed to={to}")


def build_notifier(config: MailConfig) -> Notifier:
    if config.backend == "smtp":
        return SmtpNotifier(config)
    return LogNotifier()


__all__ = ["LogNotifier", "SmtpNotifier", "build_notifier"]
