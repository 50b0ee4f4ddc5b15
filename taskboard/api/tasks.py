"""Task API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from taskboard.api.dependencies import get_current_user, get_task_service
from taskboard.models.enums import TaskPriority, TaskStatus
from taskboard.models.user import User
from taskboard.schemas.task import (
    MessageResponse,
    Pagination,
    TaskCreate,
    TaskDetailResponse,
    TaskListResponse,
    TaskMutationResponse,
    TaskResponse,
    TaskUpdate,
)
from taskboard.services.task_query import DEFAULT_LIMIT, MAX_LIMIT
from taskboard.services.tasks import TaskService

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


@router.post("", response_model=TaskMutationResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a task, assigned to the caller unless an admin picks someone else."""
    task = tasks.create(task_data, current_user)
    return TaskMutationResponse(
        message="Task created successfully", task=TaskResponse.model_validate(task)
    )


@router.get("", response_model=TaskListResponse)
def list_tasks(
    current_user: Annotated[User, Depends(get_current_user)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    search: str | None = Query(default=None, max_length=255),
    status: TaskStatus | None = Query(default=None),
    category: str | None = Query(default=None, max_length=100),
    priority: TaskPriority | None = Query(default=None),
    view: str | None = Query(default=None, description="all, today, overdue, completed, pending"),
    sort_by: str | None = Query(default=None),
    sort_order: str | None = Query(default=None, description="ASC or DESC"),
):
    """List tasks with search, filters, a named view, sorting and pagination."""
    result = tasks.list(
        current_user,
        search=search,
        status=status,
        category=category,
        priority=priority,
        view=view,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return TaskListResponse(
        tasks=[TaskResponse.model_validate(task) for task in result.tasks],
        pagination=Pagination(
            current_page=page,
            total_pages=result.total_pages,
            total_tasks=result.total,
            limit=limit,
        ),
    )


@router.get("/{task_id}", response_model=TaskDetailResponse)
def get_task(
    task_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Get a single task."""
    task = tasks.get(task_id, current_user)
    return TaskDetailResponse(task=TaskResponse.model_validate(task))


@router.put("/{task_id}", response_model=TaskMutationResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Update the fields present in the request body."""
    task = tasks.update(task_id, task_data, current_user)
    return TaskMutationResponse(
        message="Task updated successfully", task=TaskResponse.model_validate(task)
    )


@router.patch("/{task_id}/complete", response_model=TaskMutationResponse)
def complete_task(
    task_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Mark a task as completed."""
    task = tasks.complete(task_id, current_user)
    return TaskMutationResponse(
        message="Task marked as completed", task=TaskResponse.model_validate(task)
    )


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Permanently delete a task."""
    tasks.delete(task_id, current_user)
    return MessageResponse(message="Task deleted successfully")
