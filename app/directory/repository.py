"""
Business and Opportunity persistence.

Mutations check ownership first: an absent record is NotFound, a record
owned by someone else is Forbidden. SET clauses are built only from the
update models' UPDATABLE_FIELDS.
"""

import logging
from typing import Any, Dict, List, Tuple

from app.shared.errors import Forbidden, InvalidArgument, NotFound
from app.store.connection import Database
from .models import (
    Business,
    BusinessCreate,
    BusinessFilters,
    BusinessListing,
    BusinessUpdate,
    Opportunity,
    OpportunityCreate,
    OpportunityFilters,
    OpportunityUpdate,
)

logger = logging.getLogger(__name__)


def _require_owner(cur, table: str, record_id: int, user_id: int, label: str) -> None:
    cur.execute(f"SELECT user_id FROM {table} WHERE id = %s", (record_id,))
    row = cur.fetchone()
    if not row:
        raise NotFound(f"{label} {record_id} not found")
    if row["user_id"] != user_id:
        logger.warning(f"User {user_id} denied access to {label.lower()} {record_id}")
        raise Forbidden(f"Access denied: this {label.lower()} belongs to another user")


def _set_clause(fields: Dict[str, Any], allowed: Tuple[str, ...]) -> Tuple[str, list]:
    for column in fields:
        if column not in allowed:
            raise InvalidArgument(f"Field '{column}' cannot be updated")
    clause = ", ".join(f"{column} = %s" for column in fields)
    return clause, list(fields.values())


class BusinessRepository:

    def __init__(self, db: Database):
        self.db = db

    def list_active(self, filters: BusinessFilters) -> Tuple[List[BusinessListing], int]:
        """Active businesses matching the filters, newest first, plus the total count."""
        where = ["b.is_active = TRUE"]
        params: list = []

        if filters.country:
            where.append("b.country = %s")
            params.append(filters.country)
        if filters.business_type:
            where.append("b.business_type = %s")
            params.append(filters.business_type)
        if filters.search:
            where.append(
                "(b.company_name ILIKE %s OR b.description ILIKE %s OR b.products_services ILIKE %s)"
            )
            pattern = f"%{filters.search}%"
            params.extend([pattern, pattern, pattern])

        where_sql = " AND ".join(where)
        offset = (filters.page - 1) * filters.limit

        with self.db.cursor() as cur:
            cur.execute(
                f"""
                SELECT b.*, u.name AS user_name, u.email AS user_email
                FROM businesses b
                LEFT JOIN users u ON b.user_id = u.id
                WHERE {where_sql}
                ORDER BY b.created_at DESC, b.id DESC
                LIMIT %s OFFSET %s
                """,
                params + [filters.limit, offset],
            )
            rows = cur.fetchall()

            cur.execute(f"SELECT COUNT(*) AS count FROM businesses b WHERE {where_sql}", params)
            total = int(cur.fetchone()["count"])

        return [BusinessListing(**row) for row in rows], total

    def get_active(self, business_id: int) -> BusinessListing:
        with self.db.cursor() as cur:
            cur.execute(
                """
                SELECT b.*, u.name AS user_name, u.email AS user_email
                FROM businesses b
                LEFT JOIN users u ON b.user_id = u.id
                WHERE b.id = %s AND b.is_active = TRUE
                """,
                (business_id,),
            )
            row = cur.fetchone()
        if not row:
            raise NotFound(f"Business {business_id} not found")
        return BusinessListing(**row)

    def create(self, user_id: int, data: BusinessCreate) -> Business:
        with self.db.cursor() as cur:
            cur.execute(
                """
                INSERT INTO businesses (
                    user_id, company_name, description, country, business_type,
                    products_services, contact_email, contact_phone, website,
                    address, annual_revenue, employee_count, countries_of_interest, tags
                ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING *
                """,
                (
                    user_id,
                    data.company_name,
                    data.description,
                    data.country,
                    data.business_type,
                    data.products_services,
                    data.contact_email,
                    data.contact_phone,
                    data.website,
                    data.address,
                    data.annual_revenue,
                    data.employee_count,
                    data.countries_of_interest,
                    data.tags,
                ),
            )
            row = cur.fetchone()
        logger.info(f"User {user_id} created business {row['id']}")
        return Business(**row)

    def update(self, business_id: int, user_id: int, data: BusinessUpdate) -> Business:
        fields = data.to_update_fields()
        clause, values = _set_clause(fields, BusinessUpdate.UPDATABLE_FIELDS)

        with self.db.cursor() as cur:
            _require_owner(cur, "businesses", business_id, user_id, "Business")
            cur.execute(
                f"""
                UPDATE businesses
                SET {clause}, updated_at = CURRENT_TIMESTAMP
                WHERE id = %s
                RETURNING *
                """,
                values + [business_id],
            )
            row = cur.fetchone()
        return Business(**row)

    def delete(self, business_id: int, user_id: int) -> None:
        with self.db.cursor() as cur:
            _require_owner(cur, "businesses", business_id, user_id, "Business")
            cur.execute("DELETE FROM businesses WHERE id = %s", (business_id,))
        logger.info(f"User {user_id} deleted business {business_id}")

    def list_for_user(self, user_id: int) -> List[Business]:
        with self.db.cursor() as cur:
            cur.execute(
                "SELECT * FROM businesses WHERE user_id = %s ORDER BY created_at DESC, id DESC",
                (user_id,),
            )
            rows = cur.fetchall()
        return [Business(**row) for row in rows]


class OpportunityRepository:

    def __init__(self, db: Database):
        self.db = db

    def search(self, filters: OpportunityFilters) -> Tuple[List[Opportunity], int]:
        where = ["TRUE"]
        params: list = []

        for column in ("type", "category", "country", "status"):
            value = getattr(filters, column)
            if value:
                where.append(f"{column} = %s")
                params.append(value)

        where_sql = " AND ".join(where)
        offset = (filters.page - 1) * filters.limit

        with self.db.cursor() as cur:
            cur.execute(
                f"""
                SELECT * FROM opportunities
                WHERE {where_sql}
                ORDER BY created_at DESC, id DESC
                LIMIT %s OFFSET %s
                """,
                params + [filters.limit, offset],
            )
            rows = cur.fetchall()

            cur.execute(f"SELECT COUNT(*) AS count FROM opportunities WHERE {where_sql}", params)
            total = int(cur.fetchone()["count"])

        return [Opportunity(**row) for row in rows], total

    def view(self, opportunity_id: int) -> Opportunity:
        """Fetch an opportunity and count the view."""
        with self.db.cursor() as cur:
            cur.execute(
                "UPDATE opportunities SET views = views + 1 WHERE id = %s RETURNING *",
                (opportunity_id,),
            )
            row = cur.fetchone()
        if not row:
            raise NotFound(f"Opportunity {opportunity_id} not found")
        return Opportunity(**row)

    def create(self, user_id: int, data: OpportunityCreate) -> Opportunity:
        with self.db.cursor() as cur:
            cur.execute(
                """
                INSERT INTO opportunities (user_id, title, description, type, category, country, tags)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                RETURNING *
                """,
                (
                    user_id,
                    data.title,
                    data.description,
                    data.type,
                    data.category,
                    data.country,
                    data.tags,
                ),
            )
            row = cur.fetchone()
        logger.info(f"User {user_id} created opportunity {row['id']}")
        return Opportunity(**row)

    def update(self, opportunity_id: int, user_id: int, data: OpportunityUpdate) -> Opportunity:
        fields = data.to_update_fields()
        clause, values = _set_clause(fields, OpportunityUpdate.UPDATABLE_FIELDS)

        with self.db.cursor() as cur:
            _require_owner(cur, "opportunities", opportunity_id, user_id, "Opportunity")
            cur.execute(
                f"""
                UPDATE opportunities
                SET {clause}, updated_at = CURRENT_TIMESTAMP
                WHERE id = %s
                RETURNING *
                """,
                values + [opportunity_id],
            )
            row = cur.fetchone()
        return Opportunity(**row)

    def close(self, opportunity_id: int, user_id: int) -> Opportunity:
        return self.update(opportunity_id, user_id, OpportunityUpdate(status="closed"))

    def delete(self, opportunity_id: int, user_id: int) -> None:
        with self.db.cursor() as cur:
            _require_owner(cur, "opportunities", opportunity_id, user_id, "Opportunity")
            cur.execute("DELETE FROM opportunities WHERE id = %s", (opportunity_id,))
        logger.info(f"User {user_id} deleted opportunity {opportunity_id}")

    def list_for_user(self, user_id: int) -> List[Opportunity]:
        with self.db.cursor() as cur:
            cur.execute(
                "SELECT * FROM opportunities WHERE user_id = %s ORDER BY created_at DESC, id DESC",
                (user_id,),
            )
            rows = cur.fetchall()
        return [Opportunity(**row) for row in rows]
