"""Pydantic schemas for API requests and responses."""

from taskboard.schemas.admin import Dashboard, DashboardResponse, UserListResponse
from taskboard.schemas.auth import (
    AuthResponse,
    OTPRequest,
    OTPVerify,
    UserLogin,
    UserRegister,
    UserResponse,
    UserSummary,
)
from taskboard.schemas.task import TaskCreate, TaskListResponse, TaskResponse, TaskUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "OTPRequest",
    "OTPVerify",
    "UserSummary",
    "UserResponse",
    "AuthResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskListResponse",
    "Dashboard",
    "DashboardResponse",
    "UserListResponse",
]
