"""Authentication schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator

from taskboard.models.enums import UserRole

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
OTPCode = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^\d{6}$")]


class EmailRequest(BaseModel):
    """Base for requests keyed by email; emails are compared lower-cased."""

    email: EmailStr = Field(..., max_length=255)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserRegister(EmailRequest):
    """User registration request."""

    name: Name
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole = UserRole.USER


class UserLogin(EmailRequest):
    """User login request."""

    password: str = Field(..., max_length=128)


class OTPRequest(EmailRequest):
    """Ask for a one-time passcode by email."""


class OTPVerify(EmailRequest):
    """Exchange a one-time passcode for a session token."""

    otp: OTPCode


class UserSummary(BaseModel):
    """User fields returned alongside a session token."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole


class UserResponse(UserSummary):
    """Identity resolved for the current session."""

    is_active: bool


class AdminUserResponse(UserResponse):
    """User roster entry."""

    created_at: datetime


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    message: str
    user: UserSummary
    token: str


class CurrentUserResponse(BaseModel):
    user: UserResponse


class OTPRequestResponse(BaseModel):
    """Acknowledgement that a passcode was sent; never contains the code."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    expires_in: str = Field(..., alias="expiresIn")
