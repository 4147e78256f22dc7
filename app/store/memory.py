"""
In-Memory Directory Store

Implements the same read interface as DirectoryStore over plain lists.
Used for local development without PostgreSQL and by the test suite.
Insertion order plays the role of the SERIAL id ordering.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from app.directory.models import Business, Opportunity
from app.shared.errors import ServiceUnavailable
from .directory import check_column, check_entity, check_restrict


def _is_active(entity: str, record) -> bool:
    if entity == "businesses":
        return record.is_active
    return record.status == "active"


class InMemoryDirectoryStore:
    """List-backed store. Set available=False to simulate an outage."""

    def __init__(
        self,
        businesses: Optional[List[Business]] = None,
        opportunities: Optional[List[Opportunity]] = None,
        available: bool = True,
    ):
        self.businesses: List[Business] = list(businesses or [])
        self.opportunities: List[Opportunity] = list(opportunities or [])
        self.available = available

    def _require_available(self) -> None:
        if not self.available:
            raise ServiceUnavailable("Database service unavailable")

    def _records(self, entity: str) -> list:
        return self.businesses if entity == "businesses" else self.opportunities

    def add_business(self, business: Business) -> Business:
        self.businesses.append(business)
        return business

    def add_opportunity(self, opportunity: Opportunity) -> Opportunity:
        self.opportunities.append(opportunity)
        return opportunity

    def is_available(self) -> bool:
        return self.available

    def fetch_opportunity(self, opportunity_id: int) -> Optional[Opportunity]:
        self._require_available()
        for opp in self.opportunities:
            if opp.id == opportunity_id:
                return opp
        return None

    def list_match_candidates(
        self,
        country: str,
        category: Optional[str] = None,
    ) -> List[Business]:
        self._require_available()
        return [
            b for b in self.businesses
            if b.is_active
            and (b.country == country or country in b.countries_of_interest)
            and (category is None or b.business_type == category)
        ]

    def count_active(self, entity: str, restrict: Optional[Dict[str, str]] = None) -> int:
        check_entity(entity)
        restrict = check_restrict(entity, restrict)
        self._require_available()
        return sum(
            1 for r in self._records(entity)
            if _is_active(entity, r)
            and all(getattr(r, col) == val for col, val in restrict.items())
        )

    def grouped_counts(
        self,
        entity: str,
        column: str,
        restrict: Optional[Dict[str, str]] = None,
    ) -> List[Tuple[str, int]]:
        check_column(entity, column)
        restrict = check_restrict(entity, restrict)
        self._require_available()

        counts: Dict[str, int] = {}
        for r in self._records(entity):
            if not _is_active(entity, r):
                continue
            if not all(getattr(r, col) == val for col, val in restrict.items()):
                continue
            key = getattr(r, column)
            counts[key] = counts.get(key, 0) + 1

        return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))

    def count_created_since(self, entity: str, days: int) -> int:
        check_entity(entity)
        self._require_available()
        cutoff = datetime.utcnow() - timedelta(days=days)
        return sum(
            1 for r in self._records(entity)
            if r.created_at is not None and r.created_at >= cutoff
        )
