"""Closed vocabulary for listing tasks: views, sort keys, filters and paging.

Request parameters are parsed into these types before they reach the
repository, so only enumerated predicates and columns can shape a query.
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from taskboard.models.enums import TaskPriority, TaskStatus

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class TaskView(str, Enum):
    """Named filter shortcuts layered on top of explicit filters."""

    ALL = "all"
    TODAY = "today"
    OVERDUE = "overdue"
    COMPLETED = "completed"
    PENDING = "pending"

    @classmethod
    def parse(cls, value: str | None) -> "TaskView":
        """Unknown or missing views behave as ``all``."""
        try:
            return cls((value or cls.ALL.value).lower())
        except ValueError:
            return cls.ALL


class SortField(str, Enum):
    """Columns a task listing may be ordered by."""

    DUE_DATE = "due_date"
    CREATED_AT = "created_at"
    PRIORITY = "priority"
    STATUS = "status"
    TITLE = "title"

    @classmethod
    def parse(cls, value: str | None) -> "SortField":
        """Anything outside the allow-list falls back to ``due_date``."""
        try:
            return cls(value)
        except ValueError:
            return cls.DUE_DATE


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortOrder":
        if value and value.strip().lower() == cls.DESC.value:
            return cls.DESC
        return cls.ASC


@dataclass(frozen=True)
class TaskFilters:
    """Predicates applied to a listing.

    ``assigned_to`` is injected by the service for non-admin callers and is
    never taken from the request.
    """

    assigned_to: int | None = None
    search: str | None = None
    status: TaskStatus | None = None
    category: str | None = None
    priority: TaskPriority | None = None
    view: TaskView = TaskView.ALL


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if not 1 <= self.limit <= MAX_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_LIMIT}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)


@dataclass(frozen=True)
class TaskQuery:
    filters: TaskFilters = field(default_factory=TaskFilters)
    sort_by: SortField = SortField.DUE_DATE
    sort_order: SortOrder = SortOrder.ASC
    page: PageRequest = field(default_factory=PageRequest)


@dataclass
class TaskPage:
    """One page of a listing plus the total match count."""

    tasks: list
    total: int
    page: PageRequest

    @property
    def total_pages(self) -> int:
        return self.page.total_pages(self.total)
