"""Admin-only analytics endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from taskboard.api.dependencies import get_analytics_service, require_admin
from taskboard.schemas.admin import DashboardResponse, UserListResponse
from taskboard.schemas.auth import AdminUserResponse
from taskboard.services.analytics import AnalyticsService

router = APIRouter(
    prefix="/api/v1/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    analytics: Annotated[AnalyticsService, Depends(get_analytics_service)],
):
    """Aggregate task and user statistics."""
    return DashboardResponse(dashboard=analytics.dashboard())


@router.get("/users", response_model=UserListResponse)
def list_users(
    analytics: Annotated[AnalyticsService, Depends(get_analytics_service)],
):
    """All users, newest first."""
    users = analytics.users_newest_first()
    return UserListResponse(users=[AdminUserResponse.model_validate(u) for u in users])
