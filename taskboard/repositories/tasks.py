"""SQLAlchemy task repository and the translation of task queries into SQL."""

from collections.abc import Callable, Sequence
from datetime import datetime, timedelta

from sqlalchemy import case, or_
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.sql.elements import ColumnElement

from taskboard.models.enums import TaskPriority, TaskStatus
from taskboard.models.task import Task
from taskboard.services.task_query import (
    SortField,
    SortOrder,
    TaskFilters,
    TaskPage,
    TaskQuery,
    TaskView,
)


def _rank(column, members: Sequence) -> ColumnElement:
    """Order enum values by declaration rather than by their text."""
    return case(*[(column == member, i) for i, member in enumerate(members)], else_=len(members))


SORT_COLUMNS: dict[SortField, ColumnElement] = {
    SortField.DUE_DATE: Task.due_date,
    SortField.CREATED_AT: Task.created_at,
    SortField.PRIORITY: _rank(Task.priority, list(TaskPriority)),
    SortField.STATUS: _rank(Task.status, list(TaskStatus)),
    SortField.TITLE: Task.title,
}


def _start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


VIEW_CLAUSES: dict[TaskView, Callable[[datetime], list[ColumnElement]]] = {
    TaskView.ALL: lambda now: [],
    TaskView.TODAY: lambda now: [
        Task.due_date >= _start_of_day(now),
        Task.due_date < _start_of_day(now) + timedelta(days=1),
        Task.status != TaskStatus.COMPLETED,
    ],
    TaskView.OVERDUE: lambda now: [
        Task.due_date < now,
        Task.status != TaskStatus.COMPLETED,
    ],
    TaskView.COMPLETED: lambda now: [Task.status == TaskStatus.COMPLETED],
    TaskView.PENDING: lambda now: [Task.status != TaskStatus.COMPLETED],
}


def filter_clauses(filters: TaskFilters, now: datetime) -> list[ColumnElement]:
    """Build the WHERE clauses for a listing."""
    clauses: list[ColumnElement] = []
    if filters.assigned_to is not None:
        clauses.append(Task.assigned_to == filters.assigned_to)
    if filters.search:
        clauses.append(
            or_(
                Task.title.icontains(filters.search, autoescape=True),
                Task.description.icontains(filters.search, autoescape=True),
            )
        )
    if filters.status is not None:
        clauses.append(Task.status == filters.status)
    if filters.category:
        clauses.append(Task.category == filters.category)
    if filters.priority is not None:
        clauses.append(Task.priority == filters.priority)
    clauses.extend(VIEW_CLAUSES[filters.view](now))
    return clauses


class SqlTaskRepository:
    def __init__(self, db: Session):
        self.db = db

    def _with_names(self):
        return self.db.query(Task).options(joinedload(Task.creator), joinedload(Task.assignee))

    def get(self, task_id: int) -> Task | None:
        return self._with_names().filter(Task.id == task_id).first()

    def add(self, task: Task) -> Task:
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def save(self, task: Task) -> Task:
        self.db.commit()
        self.db.refresh(task)
        return task

    def delete(self, task: Task) -> None:
        self.db.delete(task)
        self.db.commit()

    def list(self, query: TaskQuery, now: datetime) -> TaskPage:
        clauses = filter_clauses(query.filters, now)

        total = self.db.query(Task).filter(*clauses).count()

        sort_column = SORT_COLUMNS[query.sort_by]
        ordering = sort_column.desc() if query.sort_order == SortOrder.DESC else sort_column.asc()
        tasks = (
            self._with_names()
            .filter(*clauses)
            .order_by(ordering, Task.id.asc())
            .limit(query.page.limit)
            .offset(query.page.offset)
            .all()
        )
        return TaskPage(tasks=tasks, total=total, page=query.page)
