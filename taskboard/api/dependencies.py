"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.errors import Forbidden, TokenError, Unauthorized
from taskboard.models.user import User
from taskboard.repositories import (
    SqlAnalyticsRepository,
    SqlOTPRepository,
    SqlTaskRepository,
    SqlUserRepository,
)
from taskboard.services.analytics import AnalyticsService
from taskboard.services.auth import AuthService, decode_access_token
from taskboard.services.email import Mailer, SMTPMailer
from taskboard.services.tasks import TaskService

# auto_error=False so a missing header is reported as 401 by get_current_user
security = HTTPBearer(auto_error=False)


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> SqlUserRepository:
    return SqlUserRepository(db)


def get_mailer() -> Mailer:
    """Get the outbound mailer."""
    return SMTPMailer()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    users: Annotated[SqlUserRepository, Depends(get_user_repository)],
) -> User:
    """Get the current authenticated, active user from the bearer token."""
    if credentials is None:
        raise Unauthorized("Authentication required")

    try:
        payload = decode_access_token(credentials.credentials)
    except TokenError as e:
        raise Unauthorized(e.message) from e

    user = users.get(int(payload["sub"]))
    if user is None:
        raise Unauthorized("User not found")
    if not user.is_active:
        raise Unauthorized("Account is inactive")

    return user


def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Reject callers whose role is not admin."""
    if not current_user.is_admin:
        raise Forbidden("Access denied. Admin only.")
    return current_user


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    mailer: Annotated[Mailer, Depends(get_mailer)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(SqlUserRepository(db), SqlOTPRepository(db), mailer)


def get_task_service(
    db: Annotated[Session, Depends(get_db)],
) -> TaskService:
    """Get task service with dependencies."""
    return TaskService(SqlTaskRepository(db), SqlUserRepository(db))


def get_analytics_service(
    db: Annotated[Session, Depends(get_db)],
) -> AnalyticsService:
    """Get analytics service with dependencies."""
    return AnalyticsService(SqlAnalyticsRepository(db), SqlUserRepository(db))
