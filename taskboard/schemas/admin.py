"""Admin analytics schemas."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taskboard.models.enums import TaskPriority, TaskStatus
from taskboard.schemas.auth import AdminUserResponse


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusCount(CamelModel):
    status: TaskStatus
    count: int


class CategoryCount(CamelModel):
    category: str
    count: int


class PriorityCount(CamelModel):
    priority: TaskPriority
    count: int


class TopUser(CamelModel):
    id: int
    name: str
    email: str
    task_count: int


class TasksComparison(CamelModel):
    """Tasks created in the last 7 days against the 7 days before that."""

    last_7_days: int = Field(..., alias="last7Days")
    previous_7_days: int = Field(..., alias="previous7Days")
    percentage_change: float


class Dashboard(CamelModel):
    total_tasks: int
    total_users: int
    avg_tasks_per_user: float
    task_distribution: list[StatusCount]
    category_distribution: list[CategoryCount]
    priority_distribution: list[PriorityCount]
    tasks_comparison: TasksComparison
    top_users: list[TopUser]


class DashboardResponse(BaseModel):
    dashboard: Dashboard


class UserListResponse(BaseModel):
    users: list[AdminUserResponse]
