"""Task model."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from taskboard.database import Base
from taskboard.models.enums import TaskPriority, TaskStatus
from taskboard.models.mixins import TimestampMixin


class Task(Base, TimestampMixin):
    """A unit of work created by one user and assigned to another (or the same) user."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=False, index=True)
    category = Column(String(100), nullable=False, index=True)
    status = Column(
        Enum(TaskStatus, name="taskstatus", values_callable=lambda x: [e.value for e in x]),
        default=TaskStatus.PENDING,
        nullable=False,
        index=True,
    )
    priority = Column(
        Enum(TaskPriority, name="taskpriority", values_callable=lambda x: [e.value for e in x]),
        default=TaskPriority.MEDIUM,
        nullable=False,
    )
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    assigned_to = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    creator = relationship("User", foreign_keys=[created_by])
    assignee = relationship("User", foreign_keys=[assigned_to])

    @property
    def created_by_name(self) -> str | None:
        return self.creator.name if self.creator else None

    @property
    def assigned_to_name(self) -> str | None:
        return self.assignee.name if self.assignee else None
