"""
Matching Core Logic

Opportunity -> Business ranking:
1. Resolve the opportunity (NotFound when absent)
2. Pull candidate businesses from the store (active, same country or
   interested in it, optionally same category)
3. Score each candidate
4. Stable sort by score, descending
5. Truncate to the requested limit

Scoring:
- 10 when the business is located in the opportunity's country
- 5 when the opportunity's country is one of the business's countries of interest
- 0 otherwise (never returned)

Equal scores keep store insertion order. The function is a pure read:
it never touches the opportunity's view counter.

Version: matching_v1
"""

from typing import List, Optional, Tuple
from datetime import datetime

from app.directory.models import Business, Opportunity
from app.shared.errors import InvalidArgument, NotFound
from .models import MatchAudit, MatchResult, RankedMatch

SAME_COUNTRY_SCORE = 10
INTEREST_SCORE = 5

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def score_match(opportunity: Opportunity, business: Business) -> int:
    """
    Compatibility score between one opportunity and one business.

    Deterministic and non-negative. Direct country equality wins even
    when the business declares no countries of interest.
    """
    if business.country == opportunity.country:
        return SAME_COUNTRY_SCORE
    if opportunity.country in business.countries_of_interest:
        return INTEREST_SCORE
    return 0


def validate_limit(limit: int, max_limit: int = MAX_LIMIT) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgument(f"limit must be an integer, got {limit!r}")
    if limit < 1 or limit > max_limit:
        raise InvalidArgument(f"limit must be between 1 and {max_limit}, got {limit}")
    return limit


def score_candidates(
    opportunity: Opportunity,
    candidates: List[Business],
    category: Optional[str] = None,
) -> List[Tuple[Business, int]]:
    """
    Score candidates in the order given, dropping anything the ranking
    must never return: inactive businesses, zero scores, and category
    mismatches when a category filter is set.
    """
    scored: List[Tuple[Business, int]] = []
    for business in candidates:
        if not business.is_active:
            continue
        if category is not None and business.business_type != category:
            continue
        score = score_match(opportunity, business)
        if score > 0:
            scored.append((business, score))
    return scored


def sort_by_score(scored: List[Tuple[Business, int]]) -> List[Tuple[Business, int]]:
    """Highest score first; sorted() is stable so ties keep input order."""
    return sorted(scored, key=lambda pair: -pair[1])


def rank_matches(
    store,
    opportunity_id: int,
    limit: int = DEFAULT_LIMIT,
    match_category: bool = False,
    max_limit: int = MAX_LIMIT,
) -> MatchResult:
    """
    Rank candidate businesses for an opportunity.

    Args:
        store: Anything implementing fetch_opportunity / list_match_candidates
        opportunity_id: Opportunity to match
        limit: Maximum number of matches returned (1..max_limit)
        match_category: Only keep businesses whose business_type equals
            the opportunity category
        max_limit: Upper bound accepted for `limit`

    Returns:
        MatchResult with matches sorted non-increasing by score

    Raises:
        InvalidArgument: limit out of range
        NotFound: opportunity does not exist
        ServiceUnavailable: store unreachable (propagated from the store)
    """
    validate_limit(limit, max_limit)
    processed_at = datetime.utcnow().isoformat()

    opportunity = store.fetch_opportunity(opportunity_id)
    if opportunity is None:
        raise NotFound(f"Opportunity {opportunity_id} not found")

    category = opportunity.category if match_category else None
    candidates = store.list_match_candidates(opportunity.country, category)

    ranked = sort_by_score(score_candidates(opportunity, candidates, category))

    matches = [
        RankedMatch(rank=position, score=score, business=business)
        for position, (business, score) in enumerate(ranked[:limit], start=1)
    ]

    audit = MatchAudit(
        candidates_considered=len(candidates),
        candidates_excluded=len(candidates) - len(ranked),
        limit=limit,
        truncated=len(ranked) > limit,
        processed_at=processed_at,
    )

    return MatchResult(
        opportunity_id=opportunity.id,
        opportunity_country=opportunity.country,
        category_filter=category,
        matches=matches,
        match_hash=MatchResult.compute_hash(opportunity.id, matches),
        audit=audit,
    )
