"""
Directory Endpoints
===================

Businesses:
- GET    /api/businesses              - List active businesses (filters + pagination)
- GET    /api/businesses/{id}         - Get one active business
- POST   /api/businesses              - Create (auth)
- PUT    /api/businesses/{id}         - Update, owner only (auth)
- DELETE /api/businesses/{id}         - Delete, owner only (auth)
- GET    /api/my-businesses           - Caller's businesses (auth)
- GET    /api/businesses-stats        - Directory statistics (auth)

Opportunities:
- GET    /api/opportunities           - List (filters + pagination)
- GET    /api/opportunities/{id}      - Get one and count the view
- POST   /api/opportunities           - Create (auth)
- PUT    /api/opportunities/{id}      - Update, owner only (auth)
- POST   /api/opportunities/{id}/close - Close, owner only (auth)
- DELETE /api/opportunities/{id}      - Delete, owner only (auth)
- GET    /api/my-opportunities        - Caller's opportunities (auth)
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from app.auth.models import AuthenticatedUser
from app.auth.security import get_current_user
from app.dashboard.aggregate import compute_business_stats
from app.dashboard.models import BusinessStatsResponse
from app.dependencies import (
    get_business_repository,
    get_directory_store,
    get_opportunity_repository,
)
from app.directory.repository import BusinessRepository, OpportunityRepository
from .models import (
    BusinessCreate,
    BusinessFilters,
    BusinessDetailResponse,
    BusinessListResponse,
    BusinessResponse,
    BusinessUpdate,
    OpportunityCreate,
    OpportunityFilters,
    OpportunityListResponse,
    OpportunityResponse,
    OpportunityUpdate,
    Pagination,
)

router = APIRouter(tags=["directory"])


# ============================================================================
# Businesses
# ============================================================================

@router.get("/api/businesses", response_model=BusinessListResponse)
def list_businesses(
    country: Optional[str] = None,
    business_type: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    repo: BusinessRepository = Depends(get_business_repository),
):
    filters = BusinessFilters(
        country=country,
        business_type=business_type,
        search=search,
        page=page,
        limit=limit,
    )
    businesses, total = repo.list_active(filters)
    return BusinessListResponse(
        businesses=businesses,
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/api/businesses/{business_id}", response_model=BusinessDetailResponse)
def get_business(
    business_id: int,
    repo: BusinessRepository = Depends(get_business_repository),
):
    return BusinessDetailResponse(business=repo.get_active(business_id))


@router.post("/api/businesses", response_model=BusinessResponse, status_code=201)
def create_business(
    payload: BusinessCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    repo: BusinessRepository = Depends(get_business_repository),
):
    business = repo.create(user.user_id, payload)
    return BusinessResponse(message="Business created", business=business)


@router.put("/api/businesses/{business_id}", response_model=BusinessResponse)
def update_business(
    business_id: int,
    payload: BusinessUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    repo: BusinessRepository = Depends(get_business_repository),
):
    business = repo.update(business_id, user.user_id, payload)
    return BusinessResponse(message="Business updated", business=business)


@router.delete("/api/businesses/{business_id}")
def delete_business(
    business_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    repo: BusinessRepository = Depends(get_business_repository),
):
    repo.delete(business_id, user.user_id)
    return {"success": True, "message": "Business deleted"}


@router.get("/api/my-businesses")
def my_businesses(
    user: AuthenticatedUser = Depends(get_current_user),
    repo: BusinessRepository = Depends(get_business_repository),
):
    businesses = repo.list_for_user(user.user_id)
    return {
        "success": True,
        "businesses": [b.model_dump(mode="json") for b in businesses],
        "count": len(businesses),
    }


@router.get("/api/businesses-stats", response_model=BusinessStatsResponse)
def businesses_stats(
    user: AuthenticatedUser = Depends(get_current_user),
    store=Depends(get_directory_store),
):
    return BusinessStatsResponse(stats=compute_business_stats(store))


# ============================================================================
# Opportunities
# ============================================================================

@router.get("/api/opportunities", response_model=OpportunityListResponse)
def list_opportunities(
    type: Optional[Literal["offer", "demand"]] = None,
    category: Optional[str] = None,
    country: Optional[str] = None,
    status: Literal["active", "closed", "all"] = "active",
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    repo: OpportunityRepository = Depends(get_opportunity_repository),
):
    filters = OpportunityFilters(
        type=type,
        category=category,
        country=country,
        status=None if status == "all" else status,
        page=page,
        limit=limit,
    )
    opportunities, total = repo.search(filters)
    return OpportunityListResponse(
        opportunities=opportunities,
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/api/opportunities/{opportunity_id}", response_model=OpportunityResponse)
def get_opportunity(
    opportunity_id: int,
    repo: OpportunityRepository = Depends(get_opportunity_repository),
):
    return OpportunityResponse(opportunity=repo.view(opportunity_id))


@router.post("/api/opportunities", response_model=OpportunityResponse, status_code=201)
def create_opportunity(
    payload: OpportunityCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    repo: OpportunityRepository = Depends(get_opportunity_repository),
):
    opportunity = repo.create(user.user_id, payload)
    return OpportunityResponse(message="Opportunity created", opportunity=opportunity)


@router.put("/api/opportunities/{opportunity_id}", response_model=OpportunityResponse)
def update_opportunity(
    opportunity_id: int,
    payload: OpportunityUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    repo: OpportunityRepository = Depends(get_opportunity_repository),
):
    opportunity = repo.update(opportunity_id, user.user_id, payload)
    return OpportunityResponse(message="Opportunity updated", opportunity=opportunity)


@router.post("/api/opportunities/{opportunity_id}/close", response_model=OpportunityResponse)
def close_opportunity(
    opportunity_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    repo: OpportunityRepository = Depends(get_opportunity_repository),
):
    opportunity = repo.close(opportunity_id, user.user_id)
    return OpportunityResponse(message="Opportunity closed", opportunity=opportunity)


@router.delete("/api/opportunities/{opportunity_id}")
def delete_opportunity(
    opportunity_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    repo: OpportunityRepository = Depends(get_opportunity_repository),
):
    repo.delete(opportunity_id, user.user_id)
    return {"success": True, "message": "Opportunity deleted"}


@router.get("/api/my-opportunities")
def my_opportunities(
    user: AuthenticatedUser = Depends(get_current_user),
    repo: OpportunityRepository = Depends(get_opportunity_repository),
):
    opportunities = repo.list_for_user(user.user_id)
    return {
        "success": True,
        "opportunities": [o.model_dump(mode="json") for o in opportunities],
        "count": len(opportunities),
    }
