"""
BRICS+ Business Hub Dashboard

Aggregate counts over the directory, computed fresh on every call.

Version: dashboard_v1
"""

from .models import (
    Breakdown,
    CountBucket,
    DashboardSnapshot,
    BusinessStats,
)
from .aggregate import (
    compute_dashboard,
    compute_business_stats,
    grouped_breakdown,
)

__all__ = [
    "Breakdown",
    "CountBucket",
    "DashboardSnapshot",
    "BusinessStats",
    "compute_dashboard",
    "compute_business_stats",
    "grouped_breakdown",
]

__version__ = "dashboard_v1"
