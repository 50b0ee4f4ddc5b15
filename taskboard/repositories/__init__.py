"""Storage interfaces and their SQLAlchemy implementations."""

from taskboard.repositories.analytics import SqlAnalyticsRepository
from taskboard.repositories.otps import SqlOTPRepository
from taskboard.repositories.ports import (
    AnalyticsRepository,
    OTPRepository,
    TaskRepository,
    UserRepository,
)
from taskboard.repositories.tasks import SqlTaskRepository
from taskboard.repositories.users import SqlUserRepository

__all__ = [
    "UserRepository",
    "TaskRepository",
    "OTPRepository",
    "AnalyticsRepository",
    "SqlUserRepository",
    "SqlTaskRepository",
    "SqlOTPRepository",
    "SqlAnalyticsRepository",
]
