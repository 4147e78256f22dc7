"""
Fixed vocabularies for the directory.

Countries of interest must come from BRICS_PLUS_COUNTRIES. Opportunity
categories and business types share CATEGORIES so the optional
category filter of the matcher compares like with like.
"""

from typing import Iterable, List

BRICS_PLUS_COUNTRIES: List[str] = [
    "Brazil", "Russia", "India", "China", "South Africa",
    "Argentina", "Egypt", "Ethiopia", "Iran", "Saudi Arabia",
    "United Arab Emirates", "Mexico", "Nigeria", "Turkey",
    "Indonesia", "Bangladesh", "Vietnam", "Thailand", "Malaysia",
]

CATEGORIES: List[str] = [
    "Agriculture",
    "Construction",
    "Education",
    "Energy",
    "Finance",
    "Food & Beverage",
    "Healthcare",
    "Logistics",
    "Manufacturing",
    "Mining",
    "Retail",
    "Technology",
    "Textiles",
    "Tourism",
    "Other",
]

OPPORTUNITY_TYPES = ("offer", "demand")
OPPORTUNITY_STATUSES = ("active", "closed")


def invalid_countries(countries: Iterable[str]) -> List[str]:
    """Return the entries that are not BRICS+ countries, in input order."""
    return [c for c in countries if c not in BRICS_PLUS_COUNTRIES]


def normalize_tags(tags: Iterable[str]) -> List[str]:
    """Strip, drop empties and de-duplicate while keeping first-seen order."""
    seen = set()
    result = []
    for tag in tags:
        cleaned = tag.strip()
        if cleaned and cleaned.lower() not in seen:
            seen.add(cleaned.lower())
            result.append(cleaned)
    return result
