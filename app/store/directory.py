"""
Directory Store: read interface for the matching engine and the dashboard.

Operations:
- fetch_opportunity(id)
- list_match_candidates(country, category)
- count_active(entity, restrict)
- grouped_counts(entity, column, restrict)
- count_created_since(entity, days)

Table and column names are interpolated into SQL, so every one of them
is checked against ACTIVE_PREDICATES / GROUPABLE_COLUMNS first.
"""

from typing import Dict, List, Optional, Tuple

from app.directory.models import Business, Opportunity
from app.shared.errors import InvalidArgument
from .connection import Database

# "active" means different things per table
ACTIVE_PREDICATES: Dict[str, str] = {
    "businesses": "is_active = TRUE",
    "opportunities": "status = 'active'",
}

GROUPABLE_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "businesses": ("country", "business_type"),
    "opportunities": ("category", "type", "country"),
}


def check_entity(entity: str) -> None:
    if entity not in ACTIVE_PREDICATES:
        raise InvalidArgument(
            f"Unknown entity '{entity}'. Allowed: {', '.join(ACTIVE_PREDICATES)}"
        )


def check_column(entity: str, column: str) -> None:
    check_entity(entity)
    allowed = GROUPABLE_COLUMNS[entity]
    if column not in allowed:
        raise InvalidArgument(
            f"Unknown grouping column '{column}' for {entity}. Allowed: {', '.join(allowed)}"
        )


def check_restrict(entity: str, restrict: Optional[Dict[str, str]]) -> Dict[str, str]:
    restrict = restrict or {}
    for column in restrict:
        check_column(entity, column)
    return restrict


def _active_where(entity: str, restrict: Dict[str, str]) -> Tuple[str, list]:
    clauses = [ACTIVE_PREDICATES[entity]]
    params: list = []
    for column, value in restrict.items():
        clauses.append(f"{column} = %s")
        params.append(value)
    return " AND ".join(clauses), params


class DirectoryStore:
    """PostgreSQL-backed reads used by rank_matches and compute_dashboard."""

    def __init__(self, db: Database):
        self.db = db

    def is_available(self) -> bool:
        return self.db.is_available()

    def fetch_opportunity(self, opportunity_id: int) -> Optional[Opportunity]:
        with self.db.cursor() as cur:
            cur.execute("SELECT * FROM opportunities WHERE id = %s", (opportunity_id,))
            row = cur.fetchone()
        return Opportunity(**row) if row else None

    def list_match_candidates(
        self,
        country: str,
        category: Optional[str] = None,
    ) -> List[Business]:
        """
        Active businesses located in `country` or interested in it,
        in insertion order.
        """
        sql = """
            SELECT * FROM businesses
            WHERE is_active = TRUE
              AND (country = %s OR %s = ANY(countries_of_interest))
        """
        params: list = [country, country]
        if category is not None:
            sql += " AND business_type = %s"
            params.append(category)
        sql += " ORDER BY id ASC"

        with self.db.cursor() as cur:
            cur.execute(sql, params)
            rows = cur.fetchall()
        return [Business(**row) for row in rows]

    def count_active(self, entity: str, restrict: Optional[Dict[str, str]] = None) -> int:
        check_entity(entity)
        restrict = check_restrict(entity, restrict)
        where, params = _active_where(entity, restrict)

        with self.db.cursor() as cur:
            cur.execute(f"SELECT COUNT(*) AS count FROM {entity} WHERE {where}", params)
            return int(cur.fetchone()["count"])

    def grouped_counts(
        self,
        entity: str,
        column: str,
        restrict: Optional[Dict[str, str]] = None,
    ) -> List[Tuple[str, int]]:
        """
        Full (uncapped) grouping of active rows by `column`,
        ordered by count descending then key ascending.
        """
        check_column(entity, column)
        restrict = check_restrict(entity, restrict)
        where, params = _active_where(entity, restrict)

        with self.db.cursor() as cur:
            cur.execute(
                f"""
                SELECT {column} AS bucket, COUNT(*) AS count
                FROM {entity}
                WHERE {where}
                GROUP BY {column}
                ORDER BY count DESC, bucket ASC
                """,
                params,
            )
            rows = cur.fetchall()
        return [(row["bucket"], int(row["count"])) for row in rows]

    def count_created_since(self, entity: str, days: int) -> int:
        """Rows created in the last `days` days, active or not."""
        check_entity(entity)
        with self.db.cursor() as cur:
            cur.execute(
                f"SELECT COUNT(*) AS count FROM {entity} "
                f"WHERE created_at >= NOW() - (%s * INTERVAL '1 day')",
                (days,),
            )
            return int(cur.fetchone()["count"])
