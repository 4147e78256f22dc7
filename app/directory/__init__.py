"""
BRICS+ Business Hub Directory

Businesses and Opportunities: models, persistence, and CRUD endpoints.
"""

from .models import (
    Business,
    BusinessCreate,
    BusinessUpdate,
    Opportunity,
    OpportunityCreate,
    OpportunityUpdate,
)

__all__ = [
    "Business",
    "BusinessCreate",
    "BusinessUpdate",
    "Opportunity",
    "OpportunityCreate",
    "OpportunityUpdate",
]
