"""
Signal dataclasses for feed relevance scoring.
Each signal is one additive component of a candidate's relevance score.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class PreferenceSignal:
    """Signal for service types the user prefers."""
    score: float  # 100 for an exact job match, 50 per matching offer service
    matches: int = 0


@dataclass
class CategorySignal:
    """Signal for a job in the same category as a preferred service."""
    score: float  # 0 or 30 points
    category: Optional[str] = None


@dataclass
class FreshnessSignal:
    """Signal for how recently the candidate was created."""
    score: float  # 0-50 points
    hours_old: float = 0.0


@dataclass
class PriceSignal:
    """Signal for price attractiveness."""
    score: float  # 0-30 points
    price: Optional[float] = None


@dataclass
class ExtrasSignal:
    """Signal for food, accommodation and transport included in an offer."""
    score: float  # 0-30 points
    count: int = 0


@dataclass
class ProximitySignal:
    """Signal for distance from the user."""
    score: float  # 0-80 points
    distance_km: Optional[float] = None  # None when the candidate has no coordinates
