"""
Password hashing and access tokens.

- bcrypt for password hashes
- HS256 JWTs carrying {user_id, email, iat, exp}
- get_current_user: FastAPI dependency reading "Authorization: Bearer <token>"
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, Header

from app.config import Settings, get_settings
from app.shared.errors import Forbidden, Unauthorized
from .models import PASSWORD_MAX_BYTES, AuthenticatedUser

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    encoded = password.encode("utf-8")
    # no stored hash can come from a password bcrypt refused
    if not hashed or len(encoded) > PASSWORD_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        logger.warning("Stored password hash is malformed")
        return False


def create_access_token(
    user_id: int,
    email: str,
    settings: Settings,
    now: Optional[datetime] = None,
) -> str:
    now = now or datetime.now(timezone.utc)
    payload = {
        "user_id": user_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=settings.jwt_expires_hours)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> AuthenticatedUser:
    """
    Verify signature and expiry.

    Raises Forbidden for expired or invalid tokens.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise Forbidden("Token expired")
    except jwt.InvalidTokenError:
        raise Forbidden("Invalid token")

    if "user_id" not in payload or "email" not in payload:
        raise Forbidden("Invalid token")
    return AuthenticatedUser(user_id=payload["user_id"], email=payload["email"])


def parse_bearer(authorization: Optional[str]) -> str:
    if not authorization:
        raise Unauthorized("Access token required")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("Authorization header must be 'Bearer <token>'")
    return token.strip()


def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> AuthenticatedUser:
    """
    Resolve the caller from the Authorization header.

    401 when missing, 403 when invalid or expired.
    """
    token = parse_bearer(authorization)
    return decode_access_token(token, settings)
