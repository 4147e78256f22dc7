"""
BRICS+ Business Hub Matching Layer

Opportunity -> Business matching.

Answers: "Given a posted offer or demand, which listed companies are the
best trade partners for it?"

- Scores by country: same country beats declared interest
- Never returns inactive businesses
- Deterministic: ties keep insertion order

Version: matching_v1
"""

from .models import (
    MatchResult,
    RankedMatch,
    MatchAudit,
    MatchResponse,
)
from .match import (
    score_match,
    rank_matches,
    SAME_COUNTRY_SCORE,
    INTEREST_SCORE,
)

__all__ = [
    "MatchResult",
    "RankedMatch",
    "MatchAudit",
    "MatchResponse",
    "score_match",
    "rank_matches",
    "SAME_COUNTRY_SCORE",
    "INTEREST_SCORE",
]

__version__ = "matching_v1"
