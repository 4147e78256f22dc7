"""
BRICS+ Business Hub Configuration
=================================
Environment-driven settings, loaded once per process.

Variables:
- DATABASE_URL            PostgreSQL DSN for the directory store
- JWT_SECRET              Signing secret for access tokens
- JWT_ALGORITHM           Default HS256
- JWT_EXPIRES_HOURS       Default 24
- CORS_ORIGINS            Comma separated, default "*"
- STATEMENT_TIMEOUT_MS    Per-statement timeout enforced by the store
- CONNECT_TIMEOUT_S       Connection timeout for the store
- DEFAULT_MATCH_LIMIT     Default ranking length (20)
- MAX_MATCH_LIMIT         Upper bound for ranking length (100)
- DASHBOARD_TOP_N         Default breakdown cap (10)
- LOG_LEVEL               Default INFO
"""

import os
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

logger = logging.getLogger(__name__)

DEV_JWT_SECRET = "dev-insecure-jwt-secret-change-me"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default


@dataclass(frozen=True)
class Settings:
    database_url: Optional[str]
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expires_hours: int = 24
    cors_origins: tuple = ("*",)
    statement_timeout_ms: int = 5000
    connect_timeout_s: int = 5
    default_match_limit: int = 20
    max_match_limit: int = 100
    dashboard_top_n: int = 10
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        jwt_secret = os.getenv("JWT_SECRET")
        if not jwt_secret:
            logger.warning("JWT_SECRET not configured, using development secret")
            jwt_secret = DEV_JWT_SECRET

        origins: List[str] = [
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        ]

        return cls(
            database_url=os.getenv("DATABASE_URL") or None,
            jwt_secret=jwt_secret,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_expires_hours=_int_env("JWT_EXPIRES_HOURS", 24),
            cors_origins=tuple(origins) or ("*",),
            statement_timeout_ms=_int_env("STATEMENT_TIMEOUT_MS", 5000),
            connect_timeout_s=_int_env("CONNECT_TIMEOUT_S", 5),
            default_match_limit=_int_env("DEFAULT_MATCH_LIMIT", 20),
            max_match_limit=_int_env("MAX_MATCH_LIMIT", 100),
            dashboard_top_n=_int_env("DASHBOARD_TOP_N", 10),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings. Call get_settings.cache_clear() after changing env."""
    return Settings.from_env()
