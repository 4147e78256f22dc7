"""
BRICS+ Business Hub API Server
Business matchmaking directory for BRICS+ trade
Version 1.0.0

- Users, businesses and opportunities (owner-scoped CRUD)
- Opportunity -> business match ranking
- Dashboard aggregates
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth.router import router as auth_router
from app.config import get_settings
from app.dashboard.router import router as dashboard_router
from app.dependencies import database_for
from app.directory.router import router as directory_router
from app.health.router import API_VERSION, router as health_router
from app.matching.router import router as matching_router
from app.shared.errors import DirectoryError
from app.store.schema import init_schema

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ============================================
# App Configuration
# ============================================
settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = database_for(
        settings.database_url,
        settings.statement_timeout_ms,
        settings.connect_timeout_s,
    )
    if init_schema(db):
        logger.info("Database: CONNECTED")
    else:
        logger.warning("Database: DISCONNECTED (store-backed routes will answer 503)")
    yield


app = FastAPI(
    title="BRICS+ Business Hub API",
    description="Business matchmaking directory for BRICS+ trade",
    version=API_VERSION,
    lifespan=lifespan,
)

# ============================================
# CORS Configuration
# ============================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# ============================================
# Error Mapping
# ============================================
@app.exception_handler(DirectoryError)
async def directory_error_handler(request: Request, exc: DirectoryError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "INTERNAL_ERROR", "message": "Internal server error"},
    )


# ============================================
# Routers
# ============================================
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(matching_router)
app.include_router(directory_router)
app.include_router(dashboard_router)
