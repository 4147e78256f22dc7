"""
Directory Repository Tests

Owner-scoped mutations against a scripted psycopg2 cursor.

Tests validate:
- Absent record -> NotFound before any UPDATE / DELETE is issued
- Record owned by another user -> Forbidden, nothing written
- SET clause built only from UPDATABLE_FIELDS
- close() sets status to closed
- view() increments the view counter
"""

from contextlib import contextmanager
from unittest.mock import MagicMock

import pytest

from app.directory.models import BusinessUpdate, OpportunityUpdate
from app.directory.repository import BusinessRepository, OpportunityRepository
from app.shared.errors import Forbidden, InvalidArgument, NotFound


class FakeDatabase:

    def __init__(self, cursor):
        self.cur = cursor

    @contextmanager
    def cursor(self):
        yield self.cur


def scripted_cursor(*rows):
    """Cursor whose successive fetchone() calls return `rows` in order."""
    cur = MagicMock()
    cur.fetchone.side_effect = list(rows)
    return cur


def executed_sql(cur):
    return [c.args[0] for c in cur.execute.call_args_list]


BUSINESS_ROW = {
    "id": 5,
    "user_id": 1,
    "company_name": "Acme",
    "description": "Solar panels",
    "country": "Brazil",
    "business_type": "Energy",
    "countries_of_interest": ["India"],
    "tags": ["solar"],
    "is_active": True,
}

OPPORTUNITY_ROW = {
    "id": 9,
    "user_id": 1,
    "title": "Solar export",
    "type": "offer",
    "category": "Energy",
    "country": "Brazil",
    "tags": [],
    "status": "active",
    "views": 0,
}


# ============================================================================
# Ownership Checks
# ============================================================================

class TestOwnership:

    @pytest.mark.parametrize("mutate", [
        lambda repo: repo.update(5, 1, BusinessUpdate(description="x")),
        lambda repo: repo.delete(5, 1),
    ])
    def test_business_absent(self, mutate):
        cur = scripted_cursor(None)
        with pytest.raises(NotFound):
            mutate(BusinessRepository(FakeDatabase(cur)))

        assert len(executed_sql(cur)) == 1
        assert executed_sql(cur)[0].startswith("SELECT user_id FROM businesses")

    @pytest.mark.parametrize("mutate", [
        lambda repo: repo.update(9, 1, OpportunityUpdate(title="x")),
        lambda repo: repo.close(9, 1),
        lambda repo: repo.delete(9, 1),
    ])
    def test_opportunity_absent(self, mutate):
        cur = scripted_cursor(None)
        with pytest.raises(NotFound):
            mutate(OpportunityRepository(FakeDatabase(cur)))

        assert len(executed_sql(cur)) == 1

    @pytest.mark.parametrize("mutate", [
        lambda repo: repo.update(5, 1, BusinessUpdate(description="x")),
        lambda repo: repo.delete(5, 1),
    ])
    def test_business_owned_by_another_user(self, mutate):
        cur = scripted_cursor({"user_id": 2})
        with pytest.raises(Forbidden):
            mutate(BusinessRepository(FakeDatabase(cur)))

        assert not any("UPDATE" in sql or "DELETE" in sql for sql in executed_sql(cur))

    @pytest.mark.parametrize("mutate", [
        lambda repo: repo.update(9, 1, OpportunityUpdate(title="x")),
        lambda repo: repo.close(9, 1),
        lambda repo: repo.delete(9, 1),
    ])
    def test_opportunity_owned_by_another_user(self, mutate):
        cur = scripted_cursor({"user_id": 2})
        with pytest.raises(Forbidden):
            mutate(OpportunityRepository(FakeDatabase(cur)))

        assert not any("UPDATE" in sql or "DELETE" in sql for sql in executed_sql(cur))

    def test_owner_can_delete(self):
        cur = scripted_cursor({"user_id": 1})
        BusinessRepository(FakeDatabase(cur)).delete(5, 1)

        sql, params = cur.execute.call_args.args
        assert sql == "DELETE FROM businesses WHERE id = %s"
        assert params == (5,)


# ============================================================================
# Updates
# ============================================================================

class TestUpdates:

    def test_set_clause_from_allow_list(self):
        cur = scripted_cursor({"user_id": 1}, dict(BUSINESS_ROW, description="Wind"))
        repo = BusinessRepository(FakeDatabase(cur))

        business = repo.update(5, 1, BusinessUpdate(tags=["wind"], description="Wind"))

        sql, params = cur.execute.call_args.args
        assert "SET description = %s, tags = %s, updated_at = CURRENT_TIMESTAMP" in sql
        assert params == ["Wind", ["wind"], 5]
        assert business.description == "Wind"

    def test_set_clause_never_contains_other_columns(self):
        cur = scripted_cursor({"user_id": 1}, BUSINESS_ROW)
        BusinessRepository(FakeDatabase(cur)).update(5, 1, BusinessUpdate(company_name="Acme"))

        sql = cur.execute.call_args.args[0]
        set_part = sql.split("SET", 1)[1].split("WHERE", 1)[0]
        columns = [piece.split("=")[0].strip() for piece in set_part.split(",")]
        assert set(columns) - {"updated_at"} <= set(BusinessUpdate.UPDATABLE_FIELDS)
        assert "user_id" not in columns

    def test_empty_update_issues_no_sql(self):
        cur = scripted_cursor()
        with pytest.raises(InvalidArgument):
            BusinessRepository(FakeDatabase(cur)).update(5, 1, BusinessUpdate())
        cur.execute.assert_not_called()

    def test_close_sets_status(self):
        cur = scripted_cursor({"user_id": 1}, dict(OPPORTUNITY_ROW, status="closed"))

        opportunity = OpportunityRepository(FakeDatabase(cur)).close(9, 1)

        sql, params = cur.execute.call_args.args
        assert "SET status = %s" in sql
        assert params == ["closed", 9]
        assert opportunity.status == "closed"


# ============================================================================
# View Counter
# ============================================================================

class TestView:

    def test_view_increments_counter(self):
        cur = scripted_cursor(dict(OPPORTUNITY_ROW, views=4))

        opportunity = OpportunityRepository(FakeDatabase(cur)).view(9)

        sql, params = cur.execute.call_args.args
        assert "SET views = views + 1" in sql
        assert params == (9,)
        assert opportunity.views == 4

    def test_view_absent(self):
        cur = scripted_cursor(None)
        with pytest.raises(NotFound):
            OpportunityRepository(FakeDatabase(cur)).view(404)
