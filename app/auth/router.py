"""
Auth Endpoints

GET  /api/auth           - Auth module info
POST /api/auth/register  - Create a user, returns an access token
POST /api/auth/login     - Exchange credentials for an access token
GET  /api/auth/profile   - Caller's profile (auth)
GET  /api/users          - All users, newest first (auth)
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.dependencies import get_user_repository
from app.shared.errors import Unauthorized
from .models import (
    AuthenticatedUser,
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    UserListResponse,
)
from .repository import UserRepository
from .security import (
    create_access_token,
    get_current_user,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.get("/api/auth")
def auth_info():
    return {
        "success": True,
        "message": "BRICS+ Business Hub authentication",
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "endpoints": {
            "register": "POST /api/auth/register",
            "login": "POST /api/auth/login",
            "profile": "GET /api/auth/profile (protected)",
        },
    }


@router.post("/api/auth/register", response_model=AuthResponse, status_code=201)
def register(
    payload: RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
):
    user = users.create(payload, hash_password(payload.password))
    token = create_access_token(user.id, user.email, settings)
    return AuthResponse(message="User registered", user=user, token=token)


@router.post("/api/auth/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
):
    found = users.get_credentials(payload.email)
    if found is None or not verify_password(payload.password, found[1]):
        logger.warning(f"Failed login for {payload.email}")
        raise Unauthorized("Invalid credentials")

    user = found[0]
    token = create_access_token(user.id, user.email, settings)
    return AuthResponse(message="Login successful", user=user, token=token)


@router.get("/api/auth/profile", response_model=ProfileResponse)
def profile(
    current: AuthenticatedUser = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    return ProfileResponse(user=users.get(current.user_id))


@router.get("/api/users", response_model=UserListResponse)
def list_users(
    current: AuthenticatedUser = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    all_users = users.list_all()
    return UserListResponse(users=all_users, count=len(all_users))
