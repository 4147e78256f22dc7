"""
Dashboard Endpoints

GET /api/dashboard            - Platform snapshot, optionally restricted to ?country=
GET /api/dashboard/me         - Snapshot restricted to the caller's registered country
GET /api/dashboard/breakdown  - One capped grouping (?entity=&column=&top=)

All routes require a bearer token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.auth.models import AuthenticatedUser
from app.auth.repository import UserRepository
from app.auth.security import get_current_user
from app.config import Settings, get_settings
from app.dependencies import get_directory_store, get_user_repository
from .aggregate import compute_dashboard, grouped_breakdown
from .models import BreakdownResponse, DashboardResponse

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    country: Optional[str] = None,
    top: Optional[int] = Query(None, description="Buckets per breakdown"),
    user: AuthenticatedUser = Depends(get_current_user),
    store=Depends(get_directory_store),
    settings: Settings = Depends(get_settings),
):
    snapshot = compute_dashboard(
        store,
        user_country=country,
        top_n=settings.dashboard_top_n if top is None else top,
    )
    return DashboardResponse(dashboard=snapshot)


@router.get("/me", response_model=DashboardResponse)
def get_my_dashboard(
    top: Optional[int] = Query(None),
    user: AuthenticatedUser = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
    store=Depends(get_directory_store),
    settings: Settings = Depends(get_settings),
):
    profile = users.get(user.user_id)
    snapshot = compute_dashboard(
        store,
        user_country=profile.country,
        top_n=settings.dashboard_top_n if top is None else top,
    )
    return DashboardResponse(dashboard=snapshot)


@router.get("/breakdown", response_model=BreakdownResponse)
def get_breakdown(
    entity: str,
    column: str,
    top: Optional[int] = Query(None),
    country: Optional[str] = None,
    user: AuthenticatedUser = Depends(get_current_user),
    store=Depends(get_directory_store),
    settings: Settings = Depends(get_settings),
):
    """
    Capped grouping of active businesses or opportunities.

    Unknown entities or grouping columns are rejected with 400.
    """
    restrict = {"country": country} if country else None
    breakdown = grouped_breakdown(
        store,
        entity,
        column,
        top_n=settings.dashboard_top_n if top is None else top,
        restrict=restrict,
    )
    return BreakdownResponse(entity=entity, breakdown=breakdown)
