"""SQLAlchemy models."""

from taskboard.models.otp import OTP
from taskboard.models.task import Task
from taskboard.models.user import User

__all__ = [
    "User",
    "Task",
    "OTP",
]
