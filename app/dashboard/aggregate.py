"""
Aggregation Reporter

Computes grouped counts over businesses and opportunities on demand.
Nothing is cached: each call issues its own reads against the store and
combines them locally. Store outages propagate as ServiceUnavailable;
an empty store yields an all-zero snapshot.
"""

from typing import Dict, List, Optional, Tuple

from app.shared.errors import InvalidArgument
from app.shared.vocabulary import BRICS_PLUS_COUNTRIES
from app.store.directory import check_column
from .models import (
    Breakdown,
    BusinessAggregates,
    BusinessStats,
    CountBucket,
    DashboardSnapshot,
    OpportunityAggregates,
)

DEFAULT_TOP_N = 10
MAX_TOP_N = 50
RECENT_DAYS = 7


def validate_top_n(top_n: int, max_top_n: int = MAX_TOP_N) -> int:
    if isinstance(top_n, bool) or not isinstance(top_n, int):
        raise InvalidArgument(f"top_n must be an integer, got {top_n!r}")
    if top_n < 1 or top_n > max_top_n:
        raise InvalidArgument(f"top_n must be between 1 and {max_top_n}, got {top_n}")
    return top_n


def cap_breakdown(column: str, rows: List[Tuple[str, int]], top_n: int) -> Breakdown:
    """
    Order rows (count desc, key asc), keep the first top_n and fold the
    rest into `other`.
    """
    ordered = sorted(rows, key=lambda kv: (-kv[1], kv[0]))
    top = ordered[:top_n]
    total = sum(count for _, count in ordered)
    shown = sum(count for _, count in top)
    return Breakdown(
        column=column,
        items=[CountBucket(key=key, count=count) for key, count in top],
        other=total - shown,
        total=total,
    )


def grouped_breakdown(
    store,
    entity: str,
    column: str,
    top_n: int = DEFAULT_TOP_N,
    restrict: Optional[Dict[str, str]] = None,
) -> Breakdown:
    """Capped grouping of active rows of `entity` by an allow-listed column."""
    check_column(entity, column)
    validate_top_n(top_n)
    rows = store.grouped_counts(entity, column, restrict)
    return cap_breakdown(column, rows, top_n)


def compute_dashboard(
    store,
    user_country: Optional[str] = None,
    top_n: int = DEFAULT_TOP_N,
) -> DashboardSnapshot:
    """
    Build the dashboard snapshot.

    Totals are derived from the uncapped groupings they break down, so
    totals always equal the sum of their breakdowns.
    """
    validate_top_n(top_n)
    country = user_country.strip() if user_country and user_country.strip() else None

    businesses_by_country = grouped_breakdown(store, "businesses", "country", top_n)
    opportunities_by_category = grouped_breakdown(store, "opportunities", "category", top_n)
    by_type = dict(store.grouped_counts("opportunities", "type"))

    businesses_in_country = None
    opportunities_in_country = None
    if country is not None:
        businesses_in_country = store.count_active("businesses", {"country": country})
        opportunities_in_country = store.count_active("opportunities", {"country": country})

    return DashboardSnapshot(
        country=country,
        top_n=top_n,
        businesses=BusinessAggregates(
            total_active=businesses_by_country.total,
            in_country=businesses_in_country,
            by_country=businesses_by_country,
        ),
        opportunities=OpportunityAggregates(
            total_active=opportunities_by_category.total,
            offers=by_type.get("offer", 0),
            demands=by_type.get("demand", 0),
            in_country=opportunities_in_country,
            by_category=opportunities_by_category,
        ),
    )


def compute_business_stats(store, recent_days: int = RECENT_DAYS) -> BusinessStats:
    """Directory statistics for the businesses listing page."""
    by_country = store.grouped_counts("businesses", "country")
    return BusinessStats(
        total=sum(count for _, count in by_country),
        by_country=[CountBucket(key=key, count=count) for key, count in by_country],
        recent_week=store.count_created_since("businesses", recent_days),
        countries_supported=len(BRICS_PLUS_COUNTRIES),
    )
