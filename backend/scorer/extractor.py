"""
Signal extraction module for feed relevance scoring.
Computes each score component from a candidate's attributes.
"""

from datetime import datetime
from typing import FrozenSet, Iterable, Optional
from .geo import distance_to_candidate
from .signals import (
    PreferenceSignal,
    CategorySignal,
    FreshnessSignal,
    PriceSignal,
    ExtrasSignal,
    ProximitySignal
)
from config import Config
from models import Coordinate, OfferCandidate, OfferExtras

SECONDS_PER_HOUR = 3600.0


def category_prefix(service_type_id: str) -> str:
    """Category part of a service type id: the text before the first '_'."""
    return service_type_id.split('_', 1)[0]


class SignalExtractor:
    """Extracts scoring signals from jobs and offers."""

    def __init__(self, config: Config):
        """
        Initialize signal extractor with configuration.

        Args:
            config: Configuration object with scoring weights
        """
        self.config = config
        self.weights = config.scoring_weights

    def extract_job_preference(
        self,
        service_type_id: str,
        preferred: FrozenSet[str]
    ) -> PreferenceSignal:
        """
        Exact match between the job's service type and the preferred ones.

        Args:
            service_type_id: Service type requested by the job
            preferred: Preferred service type ids

        Returns:
            PreferenceSignal with full points on a match, 0 otherwise
        """
        if service_type_id in preferred:
            return PreferenceSignal(score=self.weights.job_preference_match, matches=1)
        return PreferenceSignal(score=0, matches=0)

    def extract_category(
        self,
        service_type_id: str,
        preferred: FrozenSet[str]
    ) -> CategorySignal:
        """
        Match on the category prefix of the job's service type.
        Counts in addition to an exact preference match.

        Args:
            service_type_id: Service type requested by the job
            preferred: Preferred service type ids

        Returns:
            CategorySignal with the matched category, if any
        """
        category = category_prefix(service_type_id)
        if any(category_prefix(p) == category for p in preferred):
            return CategorySignal(score=self.weights.job_category_match, category=category)
        return CategorySignal(score=0)

    def extract_offer_preference(
        self,
        service_type_ids: Iterable[str],
        preferred: FrozenSet[str]
    ) -> PreferenceSignal:
        """
        Count the offer's service types that the user prefers.
        Every match adds points, an offer can advertise several services.
        """
        matches = sum(1 for s in service_type_ids if s in preferred)
        return PreferenceSignal(
            score=matches * self.weights.offer_preference_match,
            matches=matches
        )

    def extract_freshness(self, created_at: datetime, now: datetime) -> FreshnessSignal:
        """
        Linear decay from freshness_max points to 0, one point per hour.

        Args:
            created_at: Candidate creation time
            now: Reference time

        Returns:
            FreshnessSignal, never negative and never above freshness_max
        """
        hours_old = max(0.0, (now - created_at).total_seconds() / SECONDS_PER_HOUR)
        score = max(0.0, self.weights.freshness_max - hours_old)
        return FreshnessSignal(score=score, hours_old=hours_old)

    def extract_job_price(self, offer_amount: float) -> PriceSignal:
        """Price attractiveness of a job offer, capped at price_cap points."""
        score = min(offer_amount / self.weights.job_price_divisor, self.weights.price_cap)
        return PriceSignal(score=max(0.0, score), price=offer_amount)

    def extract_offer_price(self, offer: OfferCandidate) -> PriceSignal:
        """
        Price attractiveness of a worker offer.
        Uses the daily price, then the hourly one; the per-unit price is not ranked.
        """
        price = offer.price_per_day or offer.price_per_hour
        if not price:
            return PriceSignal(score=0, price=None)
        score = min(price / self.weights.offer_price_divisor, self.weights.price_cap)
        return PriceSignal(score=max(0.0, score), price=price)

    def extract_extras(self, extras: OfferExtras) -> ExtrasSignal:
        count = sum([
            extras.provides_food,
            extras.provides_accommodation,
            extras.provides_transport,
        ])
        return ExtrasSignal(score=count * self.weights.extras_bonus, count=count)

    def extract_proximity(
        self,
        user_location: Coordinate,
        candidate_location: Optional[Coordinate]
    ) -> ProximitySignal:
        """
        Bucketed bonus by distance from the user.

        Args:
            user_location: Where the user is (or the default location)
            candidate_location: Candidate coordinates, may be None

        Returns:
            ProximitySignal with the distance; unknown distance scores 0
        """
        distance = distance_to_candidate(user_location, candidate_location)
        if distance is None:
            return ProximitySignal(score=0, distance_km=None)

        for bracket in self.weights.proximity_brackets:
            if distance <= bracket.max_km:
                return ProximitySignal(score=bracket.points, distance_km=distance)

        return ProximitySignal(score=0, distance_km=distance)
