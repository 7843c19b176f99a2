# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TypeVar

from flask import Blueprint, Response, jsonify, request
from pydantic import BaseModel, ValidationError

from authcore.application.use_cases.users import (
    ChangePasswordUseCase,
    CurrentUserUseCase,
    ForgotPasswordUseCase,
    LoginUserUseCase,
    LogoutUserUseCase,
    RegisterUserUseCase,
)
from authcore.infrastructure.audit import AuditAction, audit_log
from authcore.interfaces.http.dto.auth import (
    ChangePasswordRequestDTO,
    ForgotPasswordRequestDTO,
    LoginRequestDTO,
    MeResponseDTO,
    OkDTO,
    RegisterRequestDTO,
    UserDTO,
    UserResponseDTO,
)
from authcore.interfaces.http.session_binding import current_session
from authcore.shared.errors.validation import raise_validation_error
from authcore.shared.logging import logger
from authcore.shared.middleware.request_logger import client_ip

DTO = TypeVar("DTO", bound=BaseModel)


def _parse(dto_cls: type[DTO]) -> DTO:
    try:
        return dto_cls.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


class AuthController:
    def __init__(
        self,
        *,
        current_user_use_case: CurrentUserUseCase,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        forgot_password_use_case: ForgotPasswordUseCase,
        change_password_use_case: ChangePasswordUseCase,
    ) -> None:
        self._current_user_use_case = current_user_use_case
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._forgot_password_use_case = forgot_password_use_case
        self._change_password_use_case = change_password_use_case

    def me(self) -> tuple[Response, int]:
        user = self._current_user_use_case.execute(current_session())
        payload = MeResponseDTO(user=UserDTO.from_domain(user) if user else None)
        return jsonify(payload.model_dump(mode="json", by_alias=True)), 200

    def register(self) -> tuple[Response, int]:
        dto = _parse(RegisterRequestDTO)

        result = self._register_use_case.execute(
            dto.username, dto.email, dto.password, current_session()
        )

        audit_log(
            AuditAction.REGISTER if result.ok else AuditAction.REGISTER_FAILED,
            user_id=result.user.id if result.user else None,
            ip_address=client_ip(),
            details={"username": dto.username},
            success=result.ok,
        )
        if result.user:
            logger.info(f"auth.register: ok user_id={result.user.id}")
        return jsonify(UserResponseDTO.from_domain(result).to_payload()), 200

    def login(self) -> tuple[Response, int]:
        dto = _parse(LoginRequestDTO)

        result = self._login_use_case.execute(
            dto.username_or_email, dto.password, current_session()
        )

        audit_log(
            AuditAction.LOGIN_SUCCESS if result.ok else AuditAction.LOGIN_FAILED,
            user_id=result.user.id if result.user else None,
            ip_address=client_ip(),
            details={
                "username_or_email": dto.username_or_email,
                "fields": [e.field for e in result.errors],
            },
            success=result.ok,
        )
        return jsonify(UserResponseDTO.from_domain(result).to_payload()), 200

    def logout(self) -> tuple[Response, int]:
        session = current_session()
        user_id = session.get_user_id()

        destroyed = self._logout_use_case.execute(session)

        audit_log(
            AuditAction.LOGOUT,
            user_id=user_id,
            ip_address=client_ip(),
            success=destroyed,
        )
        logger.info(f"auth.logout: destroyed={destroyed}")
        return jsonify(OkDTO(ok=destroyed).model_dump()), 200

    def forgot_password(self) -> tuple[Response, int]:
        dto = _parse(ForgotPasswordRequestDTO)

        ok = self._forgot_password_use_case.execute(dto.email)

        audit_log(
            AuditAction.PASSWORD_RESET_REQUESTED,
            ip_address=client_ip(),
            success=True,
        )
        return jsonify(OkDTO(ok=ok).model_dump()), 200

    def change_password(self) -> tuple[Response, int]:
        dto = _parse(ChangePasswordRequestDTO)

        result = self._change_password_use_case.execute(
            dto.token, dto.new_password, current_session()
        )

        audit_log(
            AuditAction.PASSWORD_CHANGED if result.ok else AuditAction.PASSWORD_CHANGE_FAILED,
            user_id=result.user.id if result.user else None,
            ip_address=client_ip(),
            details={"fields": [e.field for e in result.errors]},
            success=result.ok,
        )
        return jsonify(UserResponseDTO.from_domain(result).to_payload()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/forgot-password", view_func=self.forgot_password, methods=["POST"])
        bp.add_url_rule("/change-password", view_func=self.change_password, methods=["POST"])
        return bp
