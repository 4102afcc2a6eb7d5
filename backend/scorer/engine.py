"""
Scoring engine for feed relevance.
Adds up the signal components into a single ordering key per candidate.
"""

from datetime import datetime, timezone
from typing import List, Optional
from dataclasses import dataclass, field
from .extractor import SignalExtractor
from config import Config
from models import Coordinate, JobCandidate, OfferCandidate, UserPreferences


@dataclass
class Relevance:
    """
    Relevance of one candidate for one user.

    The score is an unbounded ordering key, not a probability. Signals are
    kept for logging and tests only.
    """
    score: float
    distance: Optional[float]
    signals: List[object] = field(default_factory=list)


class ScoringEngine:
    """Calculates relevance scores for jobs (worker view) and offers (producer view)."""

    def __init__(self, config: Config, extractor: SignalExtractor):
        """
        Initialize scoring engine.

        Args:
            config: Configuration object with scoring weights
            extractor: SignalExtractor instance for extracting signals
        """
        self.config = config
        self.extractor = extractor

    def score_job(
        self,
        job: JobCandidate,
        preferences: UserPreferences,
        user_location: Coordinate,
        now: Optional[datetime] = None
    ) -> Relevance:
        """
        Score a job from a worker's point of view.

        Args:
            job: Job candidate
            preferences: The worker's preferences
            user_location: The worker's location (or the default location)
            now: Reference time, defaults to the current UTC time

        Returns:
            Relevance with score and distance (None when the job has no coordinates)
        """
        now = now or datetime.now(timezone.utc)
        preferred = preferences.preferred_service_types

        preference = self.extractor.extract_job_preference(job.service_type_id, preferred)
        category = self.extractor.extract_category(job.service_type_id, preferred)
        freshness = self.extractor.extract_freshness(job.created_at, now)
        price = self.extractor.extract_job_price(job.offer_amount)
        proximity = self.extractor.extract_proximity(user_location, job.location)

        signals = [preference, category, freshness, price, proximity]
        return Relevance(
            score=sum(s.score for s in signals),
            distance=proximity.distance_km,
            signals=signals
        )

    def score_offer(
        self,
        offer: OfferCandidate,
        preferences: UserPreferences,
        user_location: Coordinate,
        now: Optional[datetime] = None
    ) -> Relevance:
        """
        Score a worker offer from a producer's point of view.

        Args:
            offer: Offer candidate
            preferences: The producer's preferences
            user_location: The producer's location (or the default location)
            now: Reference time, defaults to the current UTC time

        Returns:
            Relevance with score and distance (None when the offer has no coordinates)
        """
        now = now or datetime.now(timezone.utc)
        preferred = preferences.preferred_service_types

        preference = self.extractor.extract_offer_preference(offer.service_type_ids, preferred)
        freshness = self.extractor.extract_freshness(offer.created_at, now)
        price = self.extractor.extract_offer_price(offer)
        extras = self.extractor.extract_extras(offer.extras)
        proximity = self.extractor.extract_proximity(user_location, offer.location)

        signals = [preference, freshness, price, extras, proximity]
        return Relevance(
            score=sum(s.score for s in signals),
            distance=proximity.distance_km,
            signals=signals
        )


def build_engine(config: Config) -> ScoringEngine:
    """Scoring engine wired with its signal extractor."""
    return ScoringEngine(config, SignalExtractor(config))
