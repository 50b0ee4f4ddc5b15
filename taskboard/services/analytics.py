"""Admin analytics over the whole task and user store."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from taskboard.models.user import User
from taskboard.repositories.ports import AnalyticsRepository, UserRepository
from taskboard.schemas.admin import (
    CategoryCount,
    Dashboard,
    PriorityCount,
    StatusCount,
    TasksComparison,
    TopUser,
)

WINDOW = timedelta(days=7)
TOP_USERS_LIMIT = 5


def average_per_assignee(task_count: int, assignee_count: int) -> float:
    """Tasks per distinct assignee, 0 when nobody has tasks in the window."""
    if assignee_count == 0:
        return 0.0
    return round(task_count / assignee_count, 2)


def percentage_change(current: int, previous: int) -> float:
    """Relative change in percent, 0 when there is no previous baseline."""
    if previous == 0:
        return 0.0
    return round((current - previous) / previous * 100, 2)


class AnalyticsService:
    def __init__(
        self,
        analytics: AnalyticsRepository,
        users: UserRepository,
        clock: Callable[[], datetime] | None = None,
    ):
        self.analytics = analytics
        self.users = users
        self.clock = clock or (lambda: datetime.now(UTC))

    def dashboard(self) -> Dashboard:
        now = self.clock()
        window_start = now - WINDOW
        previous_start = window_start - WINDOW

        last_7_days = self.analytics.count_tasks_created(window_start)
        previous_7_days = self.analytics.count_tasks_created(previous_start, window_start)
        assignees = self.analytics.count_assignees_created(window_start)

        return Dashboard(
            total_tasks=self.analytics.count_tasks(),
            total_users=self.analytics.count_users(),
            avg_tasks_per_user=average_per_assignee(last_7_days, assignees),
            task_distribution=[
                StatusCount(status=value, count=count)
                for value, count in self.analytics.distribution("status")
            ],
            category_distribution=[
                CategoryCount(category=value, count=count)
                for value, count in self.analytics.distribution("category")
            ],
            priority_distribution=[
                PriorityCount(priority=value, count=count)
                for value, count in self.analytics.distribution("priority")
            ],
            tasks_comparison=TasksComparison(
                last_7_days=last_7_days,
                previous_7_days=previous_7_days,
                percentage_change=percentage_change(last_7_days, previous_7_days),
            ),
            top_users=[
                TopUser(id=user.id, name=user.name, email=user.email, task_count=count)
                for user, count in self.analytics.top_assignees(TOP_USERS_LIMIT)
            ],
        )

    def users_newest_first(self) -> list[User]:
        return self.users.list_newest_first()
