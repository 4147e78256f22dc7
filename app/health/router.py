"""
Service Health Endpoints
========================
- GET /               - Service banner with store status and country list
- GET /api/health     - Liveness plus store availability
- GET /api/countries  - BRICS+ countries, categories and opportunity vocabulary
- GET /api/test-db    - Round trip to the database (503 when unreachable)

Store status is probed per request; there is no cached "connected" flag.
"""

from datetime import datetime

from fastapi import APIRouter, Depends

from app.dependencies import get_database
from app.shared.vocabulary import (
    BRICS_PLUS_COUNTRIES,
    CATEGORIES,
    OPPORTUNITY_STATUSES,
    OPPORTUNITY_TYPES,
)
from app.store.connection import Database

API_VERSION = "1.0.0"

router = APIRouter(tags=["Health"])


def _now() -> str:
    return datetime.utcnow().isoformat() + "Z"


def _store_status(db: Database) -> str:
    return "connected" if db.is_available() else "disconnected"


@router.get("/")
def root(db: Database = Depends(get_database)):
    return {
        "success": True,
        "message": "BRICS+ Business Hub API",
        "timestamp": _now(),
        "database": _store_status(db),
        "countries": BRICS_PLUS_COUNTRIES,
    }


@router.get("/api/health")
def health(db: Database = Depends(get_database)):
    return {
        "success": True,
        "message": "BRICS+ Business Hub API online",
        "timestamp": _now(),
        "database": _store_status(db),
        "version": API_VERSION,
    }


@router.get("/api/countries")
def countries():
    return {
        "success": True,
        "countries": BRICS_PLUS_COUNTRIES,
        "count": len(BRICS_PLUS_COUNTRIES),
        "categories": CATEGORIES,
        "opportunity_types": list(OPPORTUNITY_TYPES),
        "opportunity_statuses": list(OPPORTUNITY_STATUSES),
        "timestamp": _now(),
    }


@router.get("/api/test-db")
def test_db(db: Database = Depends(get_database)):
    # ServiceUnavailable from server_time() becomes a 503
    current_time = db.server_time()
    return {
        "success": True,
        "message": "Database is working",
        "current_time": current_time.isoformat() if hasattr(current_time, "isoformat") else str(current_time),
    }
