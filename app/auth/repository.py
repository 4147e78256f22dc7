"""
User persistence.
"""

import logging
from typing import List, Optional, Tuple

from psycopg2 import errors as pg_errors

from app.shared.errors import Conflict, NotFound
from app.store.connection import Database
from .models import RegisterRequest, UserProfile

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = "id, name, email, company_name, country, business_segment, created_at"


class UserRepository:

    def __init__(self, db: Database):
        self.db = db

    def create(self, request: RegisterRequest, password_hash: str) -> UserProfile:
        try:
            with self.db.cursor() as cur:
                cur.execute("SELECT id FROM users WHERE email = %s", (request.email,))
                if cur.fetchone():
                    raise Conflict("A user with this email already exists")

                cur.execute(
                    f"""
                    INSERT INTO users (name, email, password, company_name, country, business_segment)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    RETURNING {PROFILE_COLUMNS}
                    """,
                    (
                        request.name,
                        request.email,
                        password_hash,
                        request.company_name,
                        request.country,
                        request.business_segment,
                    ),
                )
                row = cur.fetchone()
        except pg_errors.UniqueViolation:
            # concurrent registration with the same email
            raise Conflict("A user with this email already exists")

        logger.info(f"Registered user {row['id']}")
        return UserProfile(**row)

    def get_credentials(self, email: str) -> Optional[Tuple[UserProfile, str]]:
        """Profile plus stored password hash, or None for an unknown email."""
        with self.db.cursor() as cur:
            cur.execute(
                f"SELECT {PROFILE_COLUMNS}, password FROM users WHERE email = %s",
                (email,),
            )
            row = cur.fetchone()
        if not row:
            return None
        row = dict(row)
        password_hash = row.pop("password")
        return UserProfile(**row), password_hash

    def get(self, user_id: int) -> UserProfile:
        with self.db.cursor() as cur:
            cur.execute(f"SELECT {PROFILE_COLUMNS} FROM users WHERE id = %s", (user_id,))
            row = cur.fetchone()
        if not row:
            raise NotFound(f"User {user_id} not found")
        return UserProfile(**row)

    def list_all(self) -> List[UserProfile]:
        with self.db.cursor() as cur:
            cur.execute(f"SELECT {PROFILE_COLUMNS} FROM users ORDER BY created_at DESC")
            rows = cur.fetchall()
        return [UserProfile(**row) for row in rows]
