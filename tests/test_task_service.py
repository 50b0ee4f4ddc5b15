"""TaskService and access policy tests against in-memory repositories."""

from datetime import UTC, datetime

import pytest

from taskboard.errors import Forbidden, NotFoundError, ValidationError
from taskboard.models.enums import TaskPriority, TaskStatus, UserRole
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.schemas.task import TaskCreate, TaskUpdate
from taskboard.services.policy import Action, can_assign, is_allowed, visibility_scope
from taskboard.services.task_query import SortField, SortOrder, TaskView
from taskboard.services.tasks import TaskService

from .fakes import FakeTaskRepository, FakeUserRepository

NOW = datetime(2026, 5, 4, 15, 30, tzinfo=UTC)


def add_user(users: FakeUserRepository, name: str, role: UserRole = UserRole.USER) -> User:
    return users.add(
        User(
            name=name,
            email=f"{name.lower()}@example.com",
            password_hash="fake",  # noqa: S106
            role=role,
            is_active=True,
        )
    )


@pytest.fixture
def users():
    return FakeUserRepository()


@pytest.fixture
def service(users):
    return TaskService(FakeTaskRepository(), users, clock=lambda: NOW)


@pytest.fixture
def alice(users):
    return add_user(users, "Alice")


@pytest.fixture
def bob(users):
    return add_user(users, "Bob")


@pytest.fixture
def admin(users):
    return add_user(users, "Root", role=UserRole.ADMIN)


def new_task(**fields) -> TaskCreate:
    values = {"title": "Plan sprint", "due_date": "2026-05-10T09:00:00Z", "category": "work"}
    values.update(fields)
    return TaskCreate(**values)


@pytest.mark.parametrize("action", list(Action))
def test_policy_matrix(action):
    """Admins may act on any task; users only on tasks assigned to them."""
    user = User(id=1, role=UserRole.USER)
    admin = User(id=2, role=UserRole.ADMIN)
    own = Task(id=10, assigned_to=1, created_by=2)
    foreign = Task(id=11, assigned_to=3, created_by=1)

    assert is_allowed(user, own, action)
    assert not is_allowed(user, foreign, action)
    assert is_allowed(admin, own, action)
    assert is_allowed(admin, foreign, action)


def test_policy_assignment_and_scope():
    user = User(id=1, role=UserRole.USER)
    admin = User(id=2, role=UserRole.ADMIN)

    assert can_assign(user, 1)
    assert not can_assign(user, 3)
    assert can_assign(admin, 3)
    assert visibility_scope(user) == 1
    assert visibility_scope(admin) is None


def test_create_defaults_to_actor(service, alice):
    task = service.create(new_task(), alice)
    assert task.assigned_to == alice.id
    assert task.created_by == alice.id
    assert task.status == TaskStatus.PENDING
    assert task.priority == TaskPriority.MEDIUM
    assert task.completed_at is None


def test_create_completed_uses_clock(service, alice):
    task = service.create(new_task(status="completed"), alice)
    assert task.completed_at == NOW


def test_create_for_other_user_requires_admin(service, alice, bob, admin):
    with pytest.raises(Forbidden):
        service.create(new_task(assigned_to=bob.id), alice)
    assert service.tasks.tasks == {}

    task = service.create(new_task(assigned_to=bob.id), admin)
    assert task.assigned_to == bob.id
    assert task.created_by == admin.id


def test_create_for_missing_user(service, admin):
    with pytest.raises(NotFoundError, match="Assigned user not found"):
        service.create(new_task(assigned_to=999), admin)


def test_list_scopes_non_admins(service, alice, bob, admin):
    service.create(new_task(), alice)
    service.create(new_task(), bob)

    page = service.list(alice)
    assert [t.assigned_to for t in page.tasks] == [alice.id]
    assert service.tasks.last_query.filters.assigned_to == alice.id

    page = service.list(admin)
    assert page.total == 2
    assert service.tasks.last_query.filters.assigned_to is None


def test_list_parses_query(service, alice):
    """Raw request values are normalized before they reach the repository."""
    service.list(
        alice,
        search="  report  ",
        status=TaskStatus.PENDING,
        category="work",
        view="OVERDUE",
        sort_by="priority",
        sort_order="Desc",
        page=3,
        limit=20,
    )
    query = service.tasks.last_query
    assert query.filters.search == "report"
    assert query.filters.status == TaskStatus.PENDING
    assert query.filters.category == "work"
    assert query.filters.view == TaskView.OVERDUE
    assert query.sort_by == SortField.PRIORITY
    assert query.sort_order == SortOrder.DESC
    assert query.page.offset == 40


def test_list_falls_back_on_unknown_values(service, alice):
    service.list(alice, search="   ", view="someday", sort_by="password_hash", sort_order="up")
    query = service.tasks.last_query
    assert query.filters.search is None
    assert query.filters.view == TaskView.ALL
    assert query.sort_by == SortField.DUE_DATE
    assert query.sort_order == SortOrder.ASC


def test_get_hides_foreign_tasks(service, alice, bob, admin):
    task = service.create(new_task(), alice)

    assert service.get(task.id, alice) is task
    assert service.get(task.id, admin) is task
    with pytest.raises(NotFoundError, match="Task not found"):
        service.get(task.id, bob)
    with pytest.raises(NotFoundError, match="Task not found"):
        service.get(999, alice)


def test_update_applies_only_supplied_fields(service, alice):
    task = service.create(new_task(description="notes", priority="high"), alice)

    service.update(task.id, TaskUpdate(title="Renamed", description=None), alice)
    assert task.title == "Renamed"
    assert task.description is None
    assert task.priority == TaskPriority.HIGH
    assert task.category == "work"


def test_update_requires_changes(service, alice):
    task = service.create(new_task(), alice)
    with pytest.raises(ValidationError, match="No fields to update"):
        service.update(task.id, TaskUpdate(), alice)


def test_update_checks_visibility_before_changes(service, alice, bob):
    task = service.create(new_task(), alice)
    with pytest.raises(NotFoundError):
        service.update(task.id, TaskUpdate(), bob)


def test_update_reassignment(service, alice, bob, admin):
    task = service.create(new_task(), alice)

    # Re-sending the current assignee is not a reassignment
    service.update(task.id, TaskUpdate(assigned_to=alice.id, title="Same owner"), alice)
    assert task.title == "Same owner"

    with pytest.raises(Forbidden):
        service.update(task.id, TaskUpdate(assigned_to=bob.id), alice)
    assert task.assigned_to == alice.id

    with pytest.raises(NotFoundError, match="Assigned user not found"):
        service.update(task.id, TaskUpdate(assigned_to=999), admin)

    service.update(task.id, TaskUpdate(assigned_to=bob.id), admin)
    assert task.assigned_to == bob.id


def test_update_rejects_null_required_fields():
    with pytest.raises(ValueError):
        TaskUpdate(due_date=None)


def test_complete_and_delete(service, alice, bob):
    task = service.create(new_task(), alice)

    with pytest.raises(NotFoundError):
        service.complete(task.id, bob)
    completed = service.complete(task.id, alice)
    assert completed.status == TaskStatus.COMPLETED
    assert completed.completed_at == NOW

    with pytest.raises(NotFoundError):
        service.delete(task.id, bob)
    service.delete(task.id, alice)
    assert service.tasks.get(task.id) is None
