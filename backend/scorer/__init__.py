"""
Scorer package for feed relevance.
Provides distance helpers, signal extraction and scoring functionality.
"""

from .engine import ScoringEngine, Relevance, build_engine
from .extractor import SignalExtractor, category_prefix
from .geo import haversine_km, distance_to_candidate
from .signals import (
    PreferenceSignal,
    CategorySignal,
    FreshnessSignal,
    PriceSignal,
    ExtrasSignal,
    ProximitySignal
)

__all__ = [
    'ScoringEngine',
    'Relevance',
    'build_engine',
    'SignalExtractor',
    'category_prefix',
    'haversine_km',
    'distance_to_candidate',
    'PreferenceSignal',
    'CategorySignal',
    'FreshnessSignal',
    'PriceSignal',
    'ExtrasSignal',
    'ProximitySignal',
]
