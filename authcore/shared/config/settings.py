# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Environment-driven settings.

Every section is its own ``BaseSettings`` so it reads its variables straight
from the environment (and ``.env``) without a prefix.
"""

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import BeforeValidator, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TEN_YEARS_SECONDS = 60 * 60 * 24 * 365 * 10
INSECURE_SECRET_KEYS = frozenset({"", "dev", "development", "test", "changeme"})


def _env_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


EnvBool = Annotated[bool, BeforeValidator(_env_bool)]

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    validate_by_name=True,
    extra="ignore",
)


class DatabaseConfig(BaseSettings):
    model_config = _SECTION_CONFIG

    url: str = Field("sqlite:///app.db", alias="DATABASE_URL")
    pool_size: int = Field(5, ge=1, alias="DB_POOL_SIZE")
    max_overflow: int = Field(10, ge=0, alias="DB_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, gt=0, alias="DB_POOL_TIMEOUT")


class SecurityConfig(BaseSettings):
    """Session cookie settings."""

    model_config = _SECTION_CONFIG

    cookie_name: str = Field("qid", min_length=1, alias="COOKIE_NAME")
    cookie_secure: EnvBool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", pattern="^(Lax|Strict|None)$", alias="COOKIE_SAMESITE")
    session_max_age: int = Field(TEN_YEARS_SECONDS, ge=1, alias="SESSION_MAX_AGE")
    session_salt: str = Field("authcore.session.v1", min_length=1, alias="SESSION_SALT")


class MailConfig(BaseSettings):
    """Outbound mail. ``log`` writes messages to the log instead of sending them."""

    model_config = _SECTION_CONFIG

    backend: str = Field("log", pattern="^(log|smtp)$", alias="MAIL_BACKEND")
    smtp_host: str = Field("localhost", alias="SMTP_HOST")
    smtp_port: int = Field(587, ge=1, le=65535, alias="SMTP_PORT")
    smtp_username: str | None = Field(None, alias="SMTP_USERNAME")
    smtp_password: str | None = Field(None, alias="SMTP_PASSWORD")
    smtp_use_tls: EnvBool = Field(True, alias="SMTP_USE_TLS")
    sender: str = Field("no-reply@localhost", alias="MAIL_FROM")
    subject: str = Field("Change password", alias="MAIL_SUBJECT")


class ResetConfig(BaseSettings):
    model_config = _SECTION_CONFIG

    frontend_url: str = Field("http://localhost:3000", alias="FRONTEND_URL")

    @field_validator("frontend_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: EnvBool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    mail: MailConfig = Field(default_factory=MailConfig)
    reset: ResetConfig = Field(default_factory=ResetConfig)

    def is_production(self) -> bool:
        return self.app_env.strip().lower() in {"prod", "production"}

    def production_warnings(self) -> list[str]:
        warnings = []
        if not self.security.cookie_secure:
            warnings.append("COOKIE_SECURE is off; the session cookie will travel over plain HTTP")
        if self.security.cookie_samesite == "None":
            warnings.append("COOKIE_SAMESITE=None sends the session cookie on cross-site requests")
        if self.mail.backend == "log":
            warnings.append("MAIL_BACKEND=log; password reset links are only written to the log")
        if self.database.url.startswith("sqlite"):
            warnings.append("DATABASE_URL points at SQLite")
        return warnings

    @model_validator(mode="after")
    def _check_production(self) -> "AppConfig":
        if not self.is_production():
            return self

        # Logging is not configured yet at this point, so report on stderr.
        if self.secret_key.strip().lower() in INSECURE_SECRET_KEYS:
            print(
                "\n❌ SECRET_KEY is unset or a development placeholder.\n"
                "   It signs the session cookie; refusing to start in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        for warning in self.production_warnings():
            print(f"⚠️  {warning}", file=sys.stderr)
        return self


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "DatabaseConfig", "MailConfig", "ResetConfig", "SecurityConfig", "load_config"]
