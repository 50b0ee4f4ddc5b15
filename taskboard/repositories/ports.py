"""Storage ports the services depend on.

Services receive these Protocols rather than a session, so the SQLAlchemy
implementations can be swapped for in-memory fakes in tests.
"""

from datetime import datetime
from typing import Protocol

from taskboard.models.otp import OTP
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.services.task_query import TaskPage, TaskQuery


class UserRepository(Protocol):
    def get(self, user_id: int) -> User | None: ...

    def get_by_email(self, email: str) -> User | None: ...

    def exists(self, user_id: int) -> bool: ...

    def add(self, user: User) -> User:
        """Persist a new user; raises ConflictError when the email is taken."""
        ...

    def save(self, user: User) -> User: ...

    def list_newest_first(self) -> list[User]: ...


class OTPRepository(Protocol):
    def add(self, otp: OTP) -> OTP: ...

    def find_valid(self, email: str, code: str, now: datetime) -> OTP | None:
        """Newest unused, unexpired row matching email and code."""
        ...

    def consume(self, otp_id: int) -> bool:
        """Mark a row used only if it is still unused; False if someone else won."""
        ...

    def purge_stale(self, expired_before: datetime) -> int: ...


class TaskRepository(Protocol):
    def get(self, task_id: int) -> Task | None: ...

    def add(self, task: Task) -> Task: ...

    def save(self, task: Task) -> Task: ...

    def delete(self, task: Task) -> None: ...

    def list(self, query: TaskQuery, now: datetime) -> TaskPage: ...


class AnalyticsRepository(Protocol):
    def count_tasks(self) -> int: ...

    def count_users(self) -> int: ...

    def count_tasks_created(self, start: datetime, end: datetime | None = None) -> int: ...

    def count_assignees_created(self, start: datetime, end: datetime | None = None) -> int: ...

    def distribution(self, dimension: str) -> list[tuple]: ...

    def top_assignees(self, limit: int) -> list[tuple[User, int]]: ...
