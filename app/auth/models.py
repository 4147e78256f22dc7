"""
Auth Models

Registration, login, and the public user profile. The password hash
never leaves the repository layer.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


# bcrypt rejects passwords longer than 72 bytes of UTF-8
PASSWORD_MAX_BYTES = 72


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6, max_length=PASSWORD_MAX_BYTES)
    company_name: str = Field(min_length=1, max_length=255)
    country: Optional[str] = Field(default=None, max_length=100)
    business_segment: Optional[str] = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes in UTF-8")
        return v

    @field_validator("name", "company_name")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserProfile(BaseModel):
    id: int
    name: str
    email: str
    company_name: str
    country: Optional[str] = None
    business_segment: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthenticatedUser(BaseModel):
    """Identity carried by a verified access token."""
    user_id: int
    email: str


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    user: UserProfile
    token: str


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserProfile


class UserListResponse(BaseModel):
    success: bool = True
    users: List[UserProfile]
    count: int
