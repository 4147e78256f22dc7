"""
Directory Schema Bootstrap

Idempotent DDL for users, businesses and opportunities. Run once at
startup; failure is logged and the API keeps serving (store-backed
routes then answer 503).
"""

import logging

from app.shared.errors import ServiceUnavailable
from .connection import Database

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "directory_v1"

CREATE_USERS_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id SERIAL PRIMARY KEY,
    name VARCHAR(100) NOT NULL,
    email VARCHAR(255) UNIQUE NOT NULL,
    password VARCHAR(255) NOT NULL,
    company_name VARCHAR(255) NOT NULL,
    country VARCHAR(100),
    business_segment VARCHAR(100),
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

CREATE_BUSINESSES_SQL = """
CREATE TABLE IF NOT EXISTS businesses (
    id SERIAL PRIMARY KEY,
    user_id INTEGER REFERENCES users(id) ON DELETE CASCADE,
    company_name VARCHAR(255) NOT NULL,
    description TEXT,
    country VARCHAR(100) NOT NULL,
    business_type VARCHAR(100) NOT NULL,
    products_services TEXT,
    contact_email VARCHAR(255),
    contact_phone VARCHAR(50),
    website VARCHAR(255),
    address TEXT,
    annual_revenue VARCHAR(100),
    employee_count VARCHAR(50),
    countries_of_interest TEXT[] NOT NULL DEFAULT '{}',
    tags TEXT[] NOT NULL DEFAULT '{}',
    is_verified BOOLEAN DEFAULT FALSE,
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

CREATE_OPPORTUNITIES_SQL = """
CREATE TABLE IF NOT EXISTS opportunities (
    id SERIAL PRIMARY KEY,
    user_id INTEGER REFERENCES users(id) ON DELETE CASCADE,
    title VARCHAR(255) NOT NULL,
    description TEXT,
    type VARCHAR(10) NOT NULL CHECK (type IN ('offer', 'demand')),
    category VARCHAR(100) NOT NULL,
    country VARCHAR(100) NOT NULL,
    tags TEXT[] NOT NULL DEFAULT '{}',
    status VARCHAR(10) NOT NULL DEFAULT 'active' CHECK (status IN ('active', 'closed')),
    views INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

CREATE_INDEXES_SQL = """
CREATE INDEX IF NOT EXISTS idx_businesses_country ON businesses(country);
CREATE INDEX IF NOT EXISTS idx_businesses_business_type ON businesses(business_type);
CREATE INDEX IF NOT EXISTS idx_businesses_tags ON businesses USING gin(tags);
CREATE INDEX IF NOT EXISTS idx_businesses_interests ON businesses USING gin(countries_of_interest);
CREATE INDEX IF NOT EXISTS idx_opportunities_country ON opportunities(country);
CREATE INDEX IF NOT EXISTS idx_opportunities_category ON opportunities(category);
CREATE INDEX IF NOT EXISTS idx_opportunities_status ON opportunities(status);
"""

SCHEMA_STATEMENTS = [
    ("users", CREATE_USERS_SQL),
    ("businesses", CREATE_BUSINESSES_SQL),
    ("opportunities", CREATE_OPPORTUNITIES_SQL),
    ("indexes", CREATE_INDEXES_SQL),
]


def init_schema(db: Database) -> bool:
    """
    Create tables and indexes if missing.

    Returns True when the schema is in place, False when the store could
    not be reached.
    """
    try:
        with db.cursor() as cur:
            for name, sql in SCHEMA_STATEMENTS:
                cur.execute(sql)
                logger.info(f"Schema step '{name}' applied")
    except ServiceUnavailable as e:
        logger.error(f"Schema bootstrap skipped: {e.message}")
        return False

    logger.info(f"Directory schema ready ({SCHEMA_VERSION})")
    return True
