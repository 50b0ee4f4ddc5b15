"""Enums for model fields."""

from enum import Enum


class UserRole(str, Enum):
    """Account roles."""

    ADMIN = "admin"
    USER = "user"


class TaskStatus(str, Enum):
    """Lifecycle states of a task."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class TaskPriority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
