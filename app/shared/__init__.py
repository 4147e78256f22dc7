"""BRICS+ Business Hub Shared Utilities"""

from .errors import (
    DirectoryError,
    InvalidArgument,
    Unauthorized,
    Forbidden,
    NotFound,
    Conflict,
    ServiceUnavailable,
)
from .vocabulary import (
    BRICS_PLUS_COUNTRIES,
    CATEGORIES,
    OPPORTUNITY_TYPES,
    OPPORTUNITY_STATUSES,
)

__all__ = [
    "DirectoryError",
    "InvalidArgument",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "Conflict",
    "ServiceUnavailable",
    "BRICS_PLUS_COUNTRIES",
    "CATEGORIES",
    "OPPORTUNITY_TYPES",
    "OPPORTUNITY_STATUSES",
]
