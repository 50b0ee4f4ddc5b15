"""Role-based access rules for tasks, defined once for every handler."""

from collections.abc import Callable
from enum import Enum

from taskboard.models.task import Task
from taskboard.models.user import User


class Action(str, Enum):
    VIEW = "view"
    UPDATE = "update"
    DELETE = "delete"
    COMPLETE = "complete"


def _admin_or_assignee(actor: User, task: Task) -> bool:
    return actor.is_admin or task.assigned_to == actor.id


RULES: dict[Action, Callable[[User, Task], bool]] = {
    Action.VIEW: _admin_or_assignee,
    Action.UPDATE: _admin_or_assignee,
    Action.DELETE: _admin_or_assignee,
    Action.COMPLETE: _admin_or_assignee,
}


def is_allowed(actor: User, task: Task, action: Action) -> bool:
    """Check whether ``actor`` may perform ``action`` on ``task``."""
    return RULES[action](actor, task)


def can_assign(actor: User, assignee_id: int) -> bool:
    """Only admins may assign a task to somebody other than themselves."""
    return actor.is_admin or assignee_id == actor.id


def visibility_scope(actor: User) -> int | None:
    """Assignee filter forced onto listings; None means unrestricted."""
    return None if actor.is_admin else actor.id
