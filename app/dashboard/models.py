"""
Dashboard Models

Aggregation snapshot returned by compute_dashboard. Every breakdown
carries the capped top-N buckets plus an `other` remainder, so
`sum(items) + other == total` always holds.

Version: dashboard_v1
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class CountBucket(BaseModel):
    key: str
    count: int = Field(ge=0)


class Breakdown(BaseModel):
    """Grouped counts ordered by count descending, ties by key ascending."""
    column: str
    items: List[CountBucket] = Field(default_factory=list)
    other: int = Field(
        default=0,
        ge=0,
        description="Count outside the top-N buckets"
    )
    total: int = Field(default=0, ge=0)


class BusinessAggregates(BaseModel):
    total_active: int = 0
    in_country: Optional[int] = Field(
        default=None,
        description="Active businesses in the requested country; null when no country given"
    )
    by_country: Breakdown


class OpportunityAggregates(BaseModel):
    total_active: int = 0
    offers: int = 0
    demands: int = 0
    in_country: Optional[int] = None
    by_category: Breakdown


class DashboardSnapshot(BaseModel):
    """
    Freshly computed platform statistics.

    Sub-counts come from independent reads and are not a point-in-time
    snapshot across queries.
    """
    country: Optional[str] = None
    top_n: int
    businesses: BusinessAggregates
    opportunities: OpportunityAggregates
    generated_at: str = Field(
        default_factory=lambda: datetime.utcnow().isoformat()
    )
    version: str = "dashboard_v1"


class DashboardResponse(BaseModel):
    success: bool = True
    dashboard: DashboardSnapshot


class BreakdownResponse(BaseModel):
    success: bool = True
    entity: str
    breakdown: Breakdown


class BusinessStats(BaseModel):
    total: int
    by_country: List[CountBucket]
    recent_week: int
    countries_supported: int


class BusinessStatsResponse(BaseModel):
    success: bool = True
    stats: BusinessStats
