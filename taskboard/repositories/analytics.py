"""Read-only aggregate queries for the admin dashboard."""

from datetime import datetime

from sqlalchemy import desc, distinct, func
from sqlalchemy.orm import Session

from taskboard.models.task import Task
from taskboard.models.user import User

DISTRIBUTION_COLUMNS = {
    "status": Task.status,
    "category": Task.category,
    "priority": Task.priority,
}


class SqlAnalyticsRepository:
    def __init__(self, db: Session):
        self.db = db

    def _created_window(self, query, start: datetime, end: datetime | None):
        query = query.filter(Task.created_at >= start)
        if end is not None:
            query = query.filter(Task.created_at < end)
        return query

    def count_tasks(self) -> int:
        return self.db.query(func.count(Task.id)).scalar() or 0

    def count_users(self) -> int:
        return self.db.query(func.count(User.id)).scalar() or 0

    def count_tasks_created(self, start: datetime, end: datetime | None = None) -> int:
        query = self._created_window(self.db.query(func.count(Task.id)), start, end)
        return query.scalar() or 0

    def count_assignees_created(self, start: datetime, end: datetime | None = None) -> int:
        query = self._created_window(
            self.db.query(func.count(distinct(Task.assigned_to))), start, end
        )
        return query.scalar() or 0

    def distribution(self, dimension: str) -> list[tuple]:
        column = DISTRIBUTION_COLUMNS[dimension]
        rows = (
            self.db.query(column, func.count(Task.id))
            .group_by(column)
            .order_by(column)
            .all()
        )
        return [(value, count) for value, count in rows]

    def top_assignees(self, limit: int) -> list[tuple[User, int]]:
        task_count = func.count(Task.id).label("task_count")
        rows = (
            self.db.query(User, task_count)
            .outerjoin(Task, Task.assigned_to == User.id)
            .group_by(User.id)
            .order_by(desc(task_count), User.id.asc())
            .limit(limit)
            .all()
        )
        return [(user, count) for user, count in rows]
