"""Admin API tests."""

from datetime import UTC, datetime, timedelta

import pytest

from taskboard.models.enums import TaskPriority, TaskStatus
from taskboard.models.task import Task


@pytest.fixture
def add_task(db):
    """Insert a task row directly so created_at can be backdated."""

    def _add_task(assignee, days_ago: float = 0, **fields) -> Task:
        values = {
            "title": "Seeded",
            "due_date": datetime(2030, 1, 1, tzinfo=UTC),
            "category": "work",
            "status": TaskStatus.PENDING,
            "priority": TaskPriority.MEDIUM,
            "created_at": datetime.now(UTC) - timedelta(days=days_ago),
        }
        values.update(fields)
        task = Task(created_by=assignee.id, assigned_to=assignee.id, **values)
        db.add(task)
        db.commit()
        return task

    return _add_task


def get_dashboard(client, headers) -> dict:
    response = client.get("/api/v1/admin/dashboard", headers=headers)
    assert response.status_code == 200, response.json()
    return response.json()["dashboard"]


def test_admin_routes_require_admin(client, auth_headers):
    """Test that regular users are refused by every admin route."""
    for path in ("/api/v1/admin/dashboard", "/api/v1/admin/users"):
        response = client.get(path, headers=auth_headers)
        assert response.status_code == 403
        assert response.json()["error"] == "Access denied. Admin only."


def test_admin_routes_require_auth(client):
    for path in ("/api/v1/admin/dashboard", "/api/v1/admin/users"):
        response = client.get(path)
        assert response.status_code == 401


def test_dashboard_empty(client, admin_headers):
    """Test the dashboard with users but no tasks."""
    dashboard = get_dashboard(client, admin_headers)
    assert dashboard["totalTasks"] == 0
    assert dashboard["totalUsers"] == 1
    assert dashboard["avgTasksPerUser"] == 0
    assert dashboard["taskDistribution"] == []
    assert dashboard["tasksComparison"] == {
        "last7Days": 0,
        "previous7Days": 0,
        "percentageChange": 0,
    }
    assert dashboard["topUsers"] == [
        {
            "id": admin_headers.user_id,
            "name": "Admin User",
            "email": "admin@example.com",
            "taskCount": 0,
        }
    ]


def test_dashboard_average_per_assignee(client, admin_headers, make_user, add_task):
    """Test the trailing-week average over distinct assignees."""
    users = [make_user(f"worker{i}@example.com") for i in range(3)]
    for user in users:
        for _ in range(3):
            add_task(user, days_ago=1)
    # Outside the window: counted in totals but not in the average
    add_task(users[0], days_ago=30)

    dashboard = get_dashboard(client, admin_headers)
    assert dashboard["totalTasks"] == 10
    assert dashboard["totalUsers"] == 4
    assert dashboard["avgTasksPerUser"] == 3.0


def test_dashboard_average_rounds(client, admin_headers, make_user, add_task):
    first, second, third = (make_user(f"r{i}@example.com") for i in range(3))
    add_task(first, days_ago=1)
    add_task(second, days_ago=1)
    add_task(third, days_ago=1)
    add_task(third, days_ago=1)

    assert get_dashboard(client, admin_headers)["avgTasksPerUser"] == 1.33


def test_dashboard_week_over_week(client, admin_headers, make_user, add_task):
    """Test the comparison between this week and the week before."""
    user = make_user("busy@example.com")
    for _ in range(10):
        add_task(user, days_ago=2)
    for _ in range(5):
        add_task(user, days_ago=10)

    comparison = get_dashboard(client, admin_headers)["tasksComparison"]
    assert comparison == {"last7Days": 10, "previous7Days": 5, "percentageChange": 100.0}


def test_dashboard_week_over_week_decline(client, admin_headers, make_user, add_task):
    user = make_user("slow@example.com")
    add_task(user, days_ago=1)
    for _ in range(3):
        add_task(user, days_ago=9)

    comparison = get_dashboard(client, admin_headers)["tasksComparison"]
    assert comparison["percentageChange"] == -66.67


def test_dashboard_no_previous_week(client, admin_headers, make_user, add_task):
    """Test that an empty previous week yields no percentage change."""
    user = make_user("new@example.com")
    add_task(user, days_ago=1)

    comparison = get_dashboard(client, admin_headers)["tasksComparison"]
    assert comparison == {"last7Days": 1, "previous7Days": 0, "percentageChange": 0}


def test_dashboard_distributions(client, admin_headers, make_user, add_task):
    user = make_user("dist@example.com")
    add_task(user, category="work", priority=TaskPriority.HIGH)
    add_task(user, category="work", status=TaskStatus.COMPLETED)
    add_task(user, category="home", status=TaskStatus.IN_PROGRESS, priority=TaskPriority.LOW)

    dashboard = get_dashboard(client, admin_headers)
    statuses = {row["status"]: row["count"] for row in dashboard["taskDistribution"]}
    categories = {row["category"]: row["count"] for row in dashboard["categoryDistribution"]}
    priorities = {row["priority"]: row["count"] for row in dashboard["priorityDistribution"]}
    assert statuses == {"pending": 1, "completed": 1, "in_progress": 1}
    assert categories == {"work": 2, "home": 1}
    assert priorities == {"high": 1, "medium": 1, "low": 1}


def test_dashboard_top_users(client, admin_headers, make_user, add_task):
    """Test top users by assigned tasks, ties broken by ascending id."""
    users = [make_user(f"top{i}@example.com", name=f"Top {i}") for i in range(6)]
    counts = [1, 4, 2, 4, 0, 0]
    for user, count in zip(users, counts):
        for _ in range(count):
            add_task(user)

    top = get_dashboard(client, admin_headers)["topUsers"]
    assert len(top) == 5
    assert [row["id"] for row in top] == [
        users[1].id,
        users[3].id,
        users[2].id,
        users[0].id,
        # Zero-task users are still ranked; the admin registered first
        admin_headers.user_id,
    ]
    assert [row["taskCount"] for row in top] == [4, 4, 2, 1, 0]
    assert top[0] == {
        "id": users[1].id,
        "name": "Top 1",
        "email": "top1@example.com",
        "taskCount": 4,
    }


def test_list_users_newest_first(client, admin_headers, make_user):
    """Test the user roster ordering and fields."""
    now = datetime.now(UTC)
    older = make_user("older@example.com", created_at=now - timedelta(days=2))
    tied_a = make_user("tied-a@example.com", created_at=now - timedelta(days=1))
    tied_b = make_user("tied-b@example.com", created_at=now - timedelta(days=1))
    inactive = make_user(
        "inactive@example.com", is_active=False, created_at=now + timedelta(days=1)
    )

    response = client.get("/api/v1/admin/users", headers=admin_headers)
    assert response.status_code == 200
    users = response.json()["users"]

    assert [u["id"] for u in users] == [
        inactive.id,
        admin_headers.user_id,
        tied_b.id,
        tied_a.id,
        older.id,
    ]
    assert users[0]["is_active"] is False
    assert set(users[0]) == {"id", "name", "email", "role", "is_active", "created_at"}
    assert users[1]["role"] == "admin"
