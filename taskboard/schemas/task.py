"""Task schemas."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    model_validator,
)
from pydantic.alias_generators import to_camel

from taskboard.models.enums import TaskPriority, TaskStatus

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Category = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=5000)]


def _as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UTCDateTime = Annotated[datetime, AfterValidator(_as_utc)]

# Columns that are NOT NULL; an explicit null for these is rejected on update.
REQUIRED_TASK_FIELDS = frozenset(
    {"title", "due_date", "category", "status", "priority", "assigned_to"}
)


class TaskCreate(BaseModel):
    """Create a new task."""

    title: Title
    description: Description | None = None
    due_date: UTCDateTime
    category: Category
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: int | None = Field(None, gt=0)


class TaskUpdate(BaseModel):
    """Partial update of a task.

    Only fields present in the request body are applied; an absent field is
    left untouched while an explicit null clears a nullable column.
    """

    title: Title | None = None
    description: Description | None = None
    due_date: UTCDateTime | None = None
    category: Category | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assigned_to: int | None = Field(None, gt=0)
    completed_at: UTCDateTime | None = None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "TaskUpdate":
        for name in sorted(REQUIRED_TASK_FIELDS & self.model_fields_set):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Fields explicitly supplied by the caller."""
        return self.model_dump(exclude_unset=True)


class TaskResponse(BaseModel):
    """Task row joined with creator and assignee display names."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    due_date: UTCDateTime
    category: str
    status: TaskStatus
    priority: TaskPriority
    created_by: int | None
    assigned_to: int
    completed_at: UTCDateTime | None
    created_at: UTCDateTime
    updated_at: UTCDateTime
    created_by_name: str | None = None
    assigned_to_name: str | None = None


class TaskDetailResponse(BaseModel):
    task: TaskResponse


class TaskMutationResponse(BaseModel):
    message: str
    task: TaskResponse


class MessageResponse(BaseModel):
    message: str


class Pagination(BaseModel):
    """Page metadata, serialized in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_page: int
    total_pages: int
    total_tasks: int
    limit: int


class TaskListResponse(BaseModel):
    tasks: list[TaskResponse]
    pagination: Pagination
