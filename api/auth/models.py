# api/auth/models.py
"""
Pydantic models for authentication endpoints.
"""
import re

from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator

from core.security import PASSWORD_MAX_BYTES


class Token(BaseModel):
    """JWT token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenRefresh(BaseModel):
    """Request to refresh access token."""
    refresh_token: str


class LoginRequest(BaseModel):
    """Login credentials."""
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """
    Self-service registration.

    Name: letters and spaces only. Password: at least 8 characters with an
    upper-case letter, a lower-case letter and a digit.
    """
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2 or not all(ch.isalpha() or ch.isspace() for ch in value):
            raise ValueError("Name must contain only letters and spaces")
        return value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not (re.search(r"[A-Z]", value) and re.search(r"[a-z]", value) and re.search(r"\d", value)):
            raise ValueError("Password must contain upper-case, lower-case letters and a digit")
        if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        return value


class UserResponse(BaseModel):
    """Public identity of a user."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class LoginResponse(Token):
    """Tokens plus the identity they were issued for."""
    user: UserResponse
