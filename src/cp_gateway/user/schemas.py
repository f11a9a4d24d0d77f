"""Pydantic request/response schemas for cp_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

import re

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.cp_common.enums import UserRole


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=64, pattern=r"^[a-zA-Z0-9_]+$")
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str) -> str:
        """At least one uppercase letter, one lowercase letter and one digit."""
        for pattern, label in (
            (r"[A-Z]", "uppercase letter"),
            (r"[a-z]", "lowercase letter"),
            (r"\d", "digit"),
        ):
            if not re.search(pattern, v):
                raise ValueError(f"Password must contain at least one {label}")
        return v


class LoginRequest(BaseModel):
    username: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class UserInfo(BaseModel):
    user_id: str
    username: str
    email: str
    role: UserRole


class RegisterResponse(UserInfo):
    created_at: str


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: UserInfo


class RefreshResponse(BaseModel):
    access_token: str
    expires_in: int


class MeResponse(UserInfo):
    is_admin: bool


class ProfileRequest(BaseModel):
    name: str = Field(..., max_length=100)
    avatar_ref: str | None = Field(None, max_length=500)


class ProfileResponse(BaseModel):
    user_id: str
    name: str
    avatar_ref: str | None
