"""User model."""

from sqlalchemy import Boolean, Column, Enum, Integer, String

from taskboard.database import Base
from taskboard.models.enums import UserRole
from taskboard.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and task assignment."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="userrole", values_callable=lambda x: [e.value for e in x]),
        default=UserRole.USER,
        nullable=False,
    )
    is_active = Column(Boolean, default=True, nullable=False)

    @property
    def is_admin(self) -> bool:
        """Check if the user holds the admin role."""
        return self.role == UserRole.ADMIN
