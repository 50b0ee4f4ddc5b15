"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from taskboard.api.dependencies import get_auth_service, get_current_user
from taskboard.models.user import User
from taskboard.schemas.auth import (
    AuthResponse,
    CurrentUserResponse,
    OTPRequest,
    OTPRequestResponse,
    OTPVerify,
    UserLogin,
    UserRegister,
    UserResponse,
    UserSummary,
)
from taskboard.services.auth import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    user, token = auth.register(
        user_data.name, user_data.email, user_data.password, user_data.role
    )
    return AuthResponse(
        message="User registered successfully",
        user=UserSummary.model_validate(user),
        token=token,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    user, token = auth.login(credentials.email, credentials.password)
    return AuthResponse(
        message="Login successful",
        user=UserSummary.model_validate(user),
        token=token,
    )


@router.post("/request-otp", response_model=OTPRequestResponse)
def request_otp(
    data: OTPRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Email a one-time passcode to a registered user."""
    minutes = auth.request_otp(data.email)
    return OTPRequestResponse(
        message="OTP sent successfully to your email",
        expires_in=f"{minutes} minutes",
    )


@router.post("/verify-otp", response_model=AuthResponse)
def verify_otp(
    data: OTPVerify,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with a one-time passcode."""
    user, token = auth.verify_otp(data.email, data.otp)
    return AuthResponse(
        message="Login successful",
        user=UserSummary.model_validate(user),
        token=token,
    )


@router.get("/me", response_model=CurrentUserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return CurrentUserResponse(user=UserResponse.model_validate(current_user))
