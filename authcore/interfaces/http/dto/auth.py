from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from authcore.domain.users.entities import User, UserResponse


class RegisterRequestDTO(BaseModel):
    username: str = Field(max_length=64)
    email: str = Field(max_length=254)
    password: str = Field(max_length=128)


class LoginRequestDTO(BaseModel):
    username_or_email: str = Field(alias="usernameOrEmail", max_length=254)
    password: str = Field(max_length=128)

    model_config = ConfigDict(populate_by_name=True)


class ForgotPasswordRequestDTO(BaseModel):
    email: str = Field(max_length=254)


class ChangePasswordRequestDTO(BaseModel):
    token: str = Field(min_length=1, max_length=256)
    new_password: str = Field(alias="newPassword", max_length=128)

    model_config = ConfigDict(populate_by_name=True)


class UserDTO(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_domain(cls, user: User) -> UserDTO:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
        )


class FieldErrorDTO(BaseModel):
    field: str
    message: str


class UserResponseDTO(BaseModel):
    errors: list[FieldErrorDTO] | None = None
    user: UserDTO | None = None

    @classmethod
    def from_domain(cls, result: UserResponse) -> UserResponseDTO:
        if result.user is not None:
            return cls(user=UserDTO.from_domain(result.user))
        return cls(
            errors=[FieldErrorDTO(field=e.field, message=e.message) for e in result.errors]
        )

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class MeResponseDTO(BaseModel):
    user: UserDTO | None = None


class OkDTO(BaseModel):
    ok: bool = True
