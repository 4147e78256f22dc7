"""
Directory Models

Pydantic models for Businesses and Opportunities: stored records,
create payloads, and allow-listed update payloads.

Update payloads never reach SQL as arbitrary keys. Each update model
declares UPDATABLE_FIELDS and the repository builds its SET clause from
that tuple only.
"""

from datetime import datetime
from typing import Any, ClassVar, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from app.shared.errors import InvalidArgument
from app.shared.vocabulary import (
    CATEGORIES,
    invalid_countries,
    normalize_tags,
)


def _list_or_empty(v: Any) -> Any:
    # TEXT[] columns come back as None when NULL
    return [] if v is None else v


def _check_category(v: Optional[str], label: str) -> Optional[str]:
    if v is None:
        return v
    if v not in CATEGORIES:
        raise ValueError(
            f"Invalid {label}: {v}. Valid values: {', '.join(CATEGORIES)}"
        )
    return v


def _check_interests(v: Optional[List[str]]) -> Optional[List[str]]:
    if v is None:
        return v
    bad = invalid_countries(v)
    if bad:
        raise ValueError(f"Invalid BRICS+ countries: {', '.join(bad)}")
    # keep order, drop duplicates
    return list(dict.fromkeys(v))


def _required_text(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


# ============================================================================
# Stored records
# ============================================================================

class Business(BaseModel):
    """A directory listing for a company."""
    id: int
    user_id: Optional[int] = None
    company_name: str
    description: Optional[str] = None
    country: str
    business_type: str
    products_services: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    annual_revenue: Optional[str] = None
    employee_count: Optional[str] = None
    countries_of_interest: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    is_verified: bool = False
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("countries_of_interest", "tags", mode="before")
    @classmethod
    def null_arrays(cls, v):
        return _list_or_empty(v)


class BusinessListing(Business):
    """Business row joined with its owner's public details."""
    user_name: Optional[str] = None
    user_email: Optional[str] = None


class Opportunity(BaseModel):
    """A posted offer or demand, tagged with category and country."""
    id: int
    user_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    type: Literal["offer", "demand"]
    category: str
    country: str
    tags: List[str] = Field(default_factory=list)
    status: Literal["active", "closed"] = "active"
    views: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def null_arrays(cls, v):
        return _list_or_empty(v)


# ============================================================================
# Businesses: create / update
# ============================================================================

class BusinessCreate(BaseModel):
    company_name: str = Field(min_length=1, max_length=255)
    country: str = Field(min_length=1, max_length=100)
    business_type: str
    description: Optional[str] = None
    products_services: Optional[str] = None
    contact_email: Optional[str] = Field(default=None, max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=50)
    website: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = None
    annual_revenue: Optional[str] = Field(default=None, max_length=100)
    employee_count: Optional[str] = Field(default=None, max_length=50)
    countries_of_interest: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    class Config:
        extra = "forbid"

    @field_validator("company_name", "country")
    @classmethod
    def strip_required(cls, v):
        return _required_text(v)

    @field_validator("business_type")
    @classmethod
    def known_business_type(cls, v):
        return _check_category(v, "business_type")

    @field_validator("countries_of_interest")
    @classmethod
    def known_interests(cls, v):
        return _check_interests(v)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v):
        return normalize_tags(v)


class BusinessUpdate(BaseModel):
    """Partial update. Only the declared fields can ever be written."""

    UPDATABLE_FIELDS: ClassVar[Tuple[str, ...]] = (
        "company_name",
        "description",
        "country",
        "business_type",
        "products_services",
        "contact_email",
        "contact_phone",
        "website",
        "address",
        "annual_revenue",
        "employee_count",
        "countries_of_interest",
        "tags",
        "is_active",
    )
    NOT_NULL_FIELDS: ClassVar[Tuple[str, ...]] = (
        "company_name",
        "country",
        "business_type",
        "countries_of_interest",
        "tags",
        "is_active",
    )

    company_name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    country: Optional[str] = Field(default=None, max_length=100)
    business_type: Optional[str] = None
    products_services: Optional[str] = None
    contact_email: Optional[str] = Field(default=None, max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=50)
    website: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = None
    annual_revenue: Optional[str] = Field(default=None, max_length=100)
    employee_count: Optional[str] = Field(default=None, max_length=50)
    countries_of_interest: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    is_active: Optional[bool] = None

    class Config:
        extra = "forbid"

    @field_validator("company_name", "country")
    @classmethod
    def strip_required(cls, v):
        return _required_text(v)

    @field_validator("business_type")
    @classmethod
    def known_business_type(cls, v):
        return _check_category(v, "business_type")

    @field_validator("countries_of_interest")
    @classmethod
    def known_interests(cls, v):
        return _check_interests(v)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v):
        return normalize_tags(v) if v is not None else v

    def to_update_fields(self) -> Dict[str, Any]:
        return _update_fields(self, self.UPDATABLE_FIELDS, self.NOT_NULL_FIELDS)


# ============================================================================
# Opportunities: create / update
# ============================================================================

class OpportunityCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    type: Literal["offer", "demand"]
    category: str
    country: str = Field(min_length=1, max_length=100)
    tags: List[str] = Field(default_factory=list)

    class Config:
        extra = "forbid"

    @field_validator("title", "country")
    @classmethod
    def strip_required(cls, v):
        return _required_text(v)

    @field_validator("category")
    @classmethod
    def known_category(cls, v):
        return _check_category(v, "category")

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v):
        return normalize_tags(v)


class OpportunityUpdate(BaseModel):
    UPDATABLE_FIELDS: ClassVar[Tuple[str, ...]] = (
        "title",
        "description",
        "type",
        "category",
        "country",
        "tags",
        "status",
    )
    NOT_NULL_FIELDS: ClassVar[Tuple[str, ...]] = (
        "title", "type", "category", "country", "tags", "status",
    )

    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    type: Optional[Literal["offer", "demand"]] = None
    category: Optional[str] = None
    country: Optional[str] = Field(default=None, max_length=100)
    tags: Optional[List[str]] = None
    status: Optional[Literal["active", "closed"]] = None

    class Config:
        extra = "forbid"

    @field_validator("title", "country")
    @classmethod
    def strip_required(cls, v):
        return _required_text(v)

    @field_validator("category")
    @classmethod
    def known_category(cls, v):
        return _check_category(v, "category")

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v):
        return normalize_tags(v) if v is not None else v

    def to_update_fields(self) -> Dict[str, Any]:
        return _update_fields(self, self.UPDATABLE_FIELDS, self.NOT_NULL_FIELDS)


def _update_fields(
    model: BaseModel,
    allowed: Tuple[str, ...],
    not_null: Tuple[str, ...],
) -> Dict[str, Any]:
    """
    Collect explicitly-set fields in allow-list order.

    Raises InvalidArgument when nothing is set or a NOT NULL column is
    explicitly set to null.
    """
    provided = model.model_dump(exclude_unset=True)
    fields: Dict[str, Any] = {}
    for name in allowed:
        if name not in provided:
            continue
        if provided[name] is None and name in not_null:
            raise InvalidArgument(f"Field '{name}' cannot be null")
        fields[name] = provided[name]

    if not fields:
        raise InvalidArgument(
            f"No updatable fields provided. Allowed: {', '.join(allowed)}"
        )
    return fields


# ============================================================================
# Query filters
# ============================================================================

class BusinessFilters(BaseModel):
    country: Optional[str] = None
    business_type: Optional[str] = None
    search: Optional[str] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class OpportunityFilters(BaseModel):
    type: Optional[Literal["offer", "demand"]] = None
    category: Optional[str] = None
    country: Optional[str] = None
    status: Optional[Literal["active", "closed"]] = "active"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


# ============================================================================
# Response models
# ============================================================================

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=(total + limit - 1) // limit if limit else 0,
        )


class BusinessResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    business: Business


class BusinessDetailResponse(BaseModel):
    success: bool = True
    business: BusinessListing


class BusinessListResponse(BaseModel):
    success: bool = True
    businesses: List[BusinessListing]
    pagination: Pagination


class OpportunityResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    opportunity: Opportunity


class OpportunityListResponse(BaseModel):
    success: bool = True
    opportunities: List[Opportunity]
    pagination: Pagination
