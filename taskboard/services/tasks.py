"""Task service: CRUD with per-role visibility."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from taskboard.errors import Forbidden, NotFoundError, ValidationError
from taskboard.models.enums import TaskPriority, TaskStatus
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.repositories.ports import TaskRepository, UserRepository
from taskboard.schemas.task import TaskCreate, TaskUpdate
from taskboard.services.policy import Action, can_assign, is_allowed, visibility_scope
from taskboard.services.task_query import (
    PageRequest,
    SortField,
    SortOrder,
    TaskFilters,
    TaskPage,
    TaskQuery,
    TaskView,
)

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task-related operations."""

    def __init__(
        self,
        tasks: TaskRepository,
        users: UserRepository,
        clock: Callable[[], datetime] | None = None,
    ):
        self.tasks = tasks
        self.users = users
        self.clock = clock or (lambda: datetime.now(UTC))

    def _get_permitted(self, task_id: int, actor: User, action: Action) -> Task:
        # Absent and not-visible tasks are indistinguishable to the caller
        task = self.tasks.get(task_id)
        if task is None or not is_allowed(actor, task, action):
            raise NotFoundError("Task not found")
        return task

    def _check_assignee(self, actor: User, assignee_id: int) -> None:
        if not can_assign(actor, assignee_id):
            raise Forbidden("Only admins can assign tasks to others")
        if assignee_id != actor.id and not self.users.exists(assignee_id):
            raise NotFoundError("Assigned user not found")

    def create(self, data: TaskCreate, actor: User) -> Task:
        assignee_id = actor.id if data.assigned_to is None else data.assigned_to
        self._check_assignee(actor, assignee_id)

        task = Task(
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            category=data.category,
            status=data.status,
            priority=data.priority,
            created_by=actor.id,
            assigned_to=assignee_id,
            completed_at=self.clock() if data.status == TaskStatus.COMPLETED else None,
        )
        task = self.tasks.add(task)
        logger.info(f"User {actor.id} created task {task.id} for user {assignee_id}")
        return task

    def list(
        self,
        actor: User,
        *,
        search: str | None = None,
        status: TaskStatus | None = None,
        category: str | None = None,
        priority: TaskPriority | None = None,
        view: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> TaskPage:
        """List tasks visible to ``actor``.

        Unknown views and sort keys fall back to their defaults instead of
        failing; non-admins are always scoped to their own assignments.
        """
        query = TaskQuery(
            filters=TaskFilters(
                assigned_to=visibility_scope(actor),
                search=(search.strip() or None) if search else None,
                status=status,
                category=category,
                priority=priority,
                view=TaskView.parse(view),
            ),
            sort_by=SortField.parse(sort_by),
            sort_order=SortOrder.parse(sort_order),
            page=PageRequest(page=page, limit=limit),
        )
        return self.tasks.list(query, self.clock())

    def get(self, task_id: int, actor: User) -> Task:
        return self._get_permitted(task_id, actor, Action.VIEW)

    def update(self, task_id: int, data: TaskUpdate, actor: User) -> Task:
        task = self._get_permitted(task_id, actor, Action.UPDATE)

        changes = data.changes()
        if not changes:
            raise ValidationError("No fields to update")
        if "assigned_to" in changes and changes["assigned_to"] != task.assigned_to:
            self._check_assignee(actor, changes["assigned_to"])

        for field, value in changes.items():
            setattr(task, field, value)
        task = self.tasks.save(task)
        logger.info(f"User {actor.id} updated task {task.id}: {sorted(changes)}")
        return task

    def delete(self, task_id: int, actor: User) -> None:
        task = self._get_permitted(task_id, actor, Action.DELETE)
        self.tasks.delete(task)
        logger.info(f"User {actor.id} deleted task {task_id}")

    def complete(self, task_id: int, actor: User) -> Task:
        """Mark a task completed; repeating the call re-stamps completed_at."""
        task = self._get_permitted(task_id, actor, Action.COMPLETE)
        task.status = TaskStatus.COMPLETED
        task.completed_at = self.clock()
        return self.tasks.save(task)
