"""
Matching Models

Pydantic models for ranked Opportunity -> Business matches and their
audit trail. A match is derived on demand and never persisted.

Version: matching_v1
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
import hashlib
import json

from app.directory.models import Business


class RankedMatch(BaseModel):
    """One candidate Business with its compatibility score."""
    rank: int = Field(ge=1, description="1-based position in the ranking")
    score: int = Field(ge=0, description="10 same country, 5 country of interest")
    business: Business


class MatchAudit(BaseModel):
    """How the ranking was produced."""
    candidates_considered: int
    candidates_excluded: int = Field(
        description="Candidates dropped for scoring 0, being inactive, or failing the category filter"
    )
    limit: int
    truncated: bool = Field(
        description="True when more scored candidates existed than the limit"
    )
    processed_at: str = Field(
        default_factory=lambda: datetime.utcnow().isoformat()
    )

    class Config:
        extra = "forbid"


class MatchResult(BaseModel):
    opportunity_id: int
    opportunity_country: str
    category_filter: Optional[str] = None
    matches: List[RankedMatch]
    match_hash: str = Field(
        description="Deterministic hash of the (business_id, score) sequence"
    )
    audit: MatchAudit
    version: str = "matching_v1"

    class Config:
        extra = "forbid"

    @classmethod
    def compute_hash(cls, opportunity_id: int, matches: List[RankedMatch]) -> str:
        """
        Order matters: two rankings with the same members in a different
        order hash differently.
        """
        hash_input = {
            "opportunity": opportunity_id,
            "ranking": [[m.business.id, m.score] for m in matches],
        }
        hash_str = json.dumps(hash_input, sort_keys=True)
        return f"sha256:{hashlib.sha256(hash_str.encode()).hexdigest()[:16]}"


class MatchResponse(BaseModel):
    """API response wrapper for a ranking."""
    success: bool = True
    result: MatchResult
    generated_at: datetime = Field(default_factory=datetime.utcnow)
