"""
Directory Store Tests

psycopg2 is mocked; no database is required.

Tests validate:
- statement_timeout is applied to every connection
- OperationalError surfaces as ServiceUnavailable, with rollback and close
- Missing DATABASE_URL is an outage, not a crash
- Candidate query shape and row mapping
- Table / column allow-lists before any SQL runs
"""

from contextlib import contextmanager
from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from app.shared.errors import InvalidArgument, ServiceUnavailable
from app.store.connection import Database
from app.store.directory import DirectoryStore


def mock_connection(cursor=None):
    conn = MagicMock()
    cur = cursor or MagicMock()
    conn.cursor.return_value.__enter__.return_value = cur
    return conn, cur


class FakeDatabase:
    """Hands out one pre-built cursor; records nothing else."""

    def __init__(self, cursor):
        self.cur = cursor

    @contextmanager
    def cursor(self):
        yield self.cur


# ============================================================================
# Connection Tests
# ============================================================================

class TestDatabase:

    def test_statement_timeout_applied(self):
        conn, _ = mock_connection()
        with patch("app.store.connection.psycopg2.connect", return_value=conn) as connect:
            db = Database("postgresql://localhost/db", statement_timeout_ms=1234, connect_timeout_s=3)
            with db.cursor() as cur:
                cur.execute("SELECT 1")

        kwargs = connect.call_args.kwargs
        assert kwargs["options"] == "-c statement_timeout=1234"
        assert kwargs["connect_timeout"] == 3
        conn.commit.assert_called_once()
        conn.close.assert_called_once()

    def test_missing_url_is_unavailable(self):
        db = Database(None)
        with pytest.raises(ServiceUnavailable):
            with db.connect():
                pass
        assert db.is_available() is False

    def test_connect_failure_is_unavailable(self):
        with patch(
            "app.store.connection.psycopg2.connect",
            side_effect=psycopg2.OperationalError("could not connect"),
        ):
            db = Database("postgresql://localhost/db")
            with pytest.raises(ServiceUnavailable):
                db.server_time()
            assert db.is_available() is False

    def test_operational_error_mid_query(self):
        """A statement timeout rolls back, closes, and reports an outage."""
        conn, cur = mock_connection()
        cur.execute.side_effect = psycopg2.OperationalError("canceling statement due to statement timeout")
        with patch("app.store.connection.psycopg2.connect", return_value=conn):
            db = Database("postgresql://localhost/db")
            with pytest.raises(ServiceUnavailable):
                with db.cursor() as c:
                    c.execute("SELECT pg_sleep(10)")

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        conn.close.assert_called_once()

    def test_other_errors_propagate_unchanged(self):
        conn, _ = mock_connection()
        with patch("app.store.connection.psycopg2.connect", return_value=conn):
            db = Database("postgresql://localhost/db")
            with pytest.raises(KeyError):
                with db.connect():
                    raise KeyError("boom")

        conn.rollback.assert_called_once()
        conn.close.assert_called_once()

    def test_is_available(self):
        conn, cur = mock_connection()
        cur.fetchone.return_value = {"?column?": 1}
        with patch("app.store.connection.psycopg2.connect", return_value=conn):
            assert Database("postgresql://localhost/db").is_available() is True
        cur.execute.assert_called_once_with("SELECT 1")


# ============================================================================
# DirectoryStore Tests
# ============================================================================

BUSINESS_ROW = {
    "id": 1,
    "user_id": 4,
    "company_name": "Acme",
    "country": "Brazil",
    "business_type": "Energy",
    "countries_of_interest": None,
    "tags": ["solar"],
    "is_active": True,
}


class TestDirectoryStore:

    def test_fetch_opportunity(self):
        cur = MagicMock()
        cur.fetchone.return_value = {
            "id": 9, "title": "Solar", "type": "offer", "category": "Energy",
            "country": "Brazil", "status": "active", "tags": None, "views": 3,
        }
        opp = DirectoryStore(FakeDatabase(cur)).fetch_opportunity(9)

        assert opp.id == 9
        assert opp.tags == []
        assert cur.execute.call_args.args[1] == (9,)

    def test_fetch_missing_opportunity(self):
        cur = MagicMock()
        cur.fetchone.return_value = None
        assert DirectoryStore(FakeDatabase(cur)).fetch_opportunity(9) is None

    def test_candidates_query(self):
        cur = MagicMock()
        cur.fetchall.return_value = [BUSINESS_ROW]
        store = DirectoryStore(FakeDatabase(cur))

        businesses = store.list_match_candidates("Brazil")

        sql, params = cur.execute.call_args.args
        assert "is_active = TRUE" in sql
        assert "ANY(countries_of_interest)" in sql
        assert sql.rstrip().endswith("ORDER BY id ASC")
        assert params == ["Brazil", "Brazil"]
        assert businesses[0].countries_of_interest == []

    def test_candidates_query_with_category(self):
        cur = MagicMock()
        cur.fetchall.return_value = []
        DirectoryStore(FakeDatabase(cur)).list_match_candidates("Brazil", "Energy")

        sql, params = cur.execute.call_args.args
        assert "business_type = %s" in sql
        assert params == ["Brazil", "Brazil", "Energy"]

    def test_grouped_counts(self):
        cur = MagicMock()
        cur.fetchall.return_value = [
            {"bucket": "China", "count": 3},
            {"bucket": "Brazil", "count": 2},
        ]
        rows = DirectoryStore(FakeDatabase(cur)).grouped_counts(
            "businesses", "country", restrict={"business_type": "Energy"}
        )

        sql, params = cur.execute.call_args.args
        assert "GROUP BY country" in sql
        assert "ORDER BY count DESC, bucket ASC" in sql
        assert params == ["Energy"]
        assert rows == [("China", 3), ("Brazil", 2)]

    def test_count_active_uses_status_for_opportunities(self):
        cur = MagicMock()
        cur.fetchone.return_value = {"count": 4}
        count = DirectoryStore(FakeDatabase(cur)).count_active("opportunities", {"type": "offer"})

        sql, params = cur.execute.call_args.args
        assert "status = 'active'" in sql
        assert "type = %s" in sql
        assert params == ["offer"]
        assert count == 4

    @pytest.mark.parametrize("entity,column", [
        ("businesses", "contact_email"),
        ("opportunities", "category) OR (1=1"),
        ("pg_user", "usename"),
    ])
    def test_rejects_before_querying(self, entity, column):
        cur = MagicMock()
        store = DirectoryStore(FakeDatabase(cur))

        with pytest.raises(InvalidArgument):
            store.grouped_counts(entity, column)
        with pytest.raises(InvalidArgument):
            store.count_active(entity, {column: "x"})
        cur.execute.assert_not_called()
