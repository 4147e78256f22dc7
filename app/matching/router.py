"""
Matching Endpoints

GET /api/opportunities/{opportunity_id}/matches - Ranked businesses for an opportunity
GET /api/matching/health                         - Module health

Version: matching_v1
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.config import Settings, get_settings
from app.dependencies import get_directory_store
from .match import rank_matches
from .models import MatchResponse

router = APIRouter(tags=["matching"])


@router.get("/api/matching/health")
def matching_health():
    """Health check for the matching module. Does not touch the store."""
    return {
        "status": "ok",
        "module": "matching",
        "version": "matching_v1",
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/api/opportunities/{opportunity_id}/matches", response_model=MatchResponse)
def get_matches(
    opportunity_id: int,
    limit: Optional[int] = Query(None, description="Maximum matches returned"),
    match_category: bool = Query(
        False,
        description="Only businesses whose business_type equals the opportunity category",
    ),
    store=Depends(get_directory_store),
    settings: Settings = Depends(get_settings),
):
    """
    Rank active businesses for an opportunity, best first.

    Out-of-range limits are rejected with 400, unknown opportunities
    with 404. Viewing matches does not count as viewing the opportunity.
    """
    result = rank_matches(
        store,
        opportunity_id,
        limit=settings.default_match_limit if limit is None else limit,
        match_category=match_category,
        max_limit=settings.max_match_limit,
    )
    return MatchResponse(result=result)
