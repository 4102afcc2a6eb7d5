"""
Feed assembly: exclusion, scoring and ranking of candidates.

The score only lives on ScoredCandidate inside this module. Callers get
FeedItem records, which carry the distance for display and radius filtering
but no score.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import AbstractSet, Generic, Iterable, List, Optional, TypeVar

from models import Coordinate, JobCandidate, OfferCandidate, UserPreferences
from scorer import ScoringEngine

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FeedItem(Generic[T]):
    """Ranked candidate as exposed to the presentation layer."""
    candidate: T
    calculated_distance: Optional[float] = None

    @property
    def id(self) -> str:
        return self.candidate.id


@dataclass
class ScoredCandidate(Generic[T]):
    """Candidate with its relevance, used only while ranking."""
    candidate: T
    score: float
    distance_km: Optional[float]


class FeedAssembler:
    """Builds the ordered job and offer feeds."""

    def __init__(self, engine: ScoringEngine):
        self.engine = engine

    def build_job_feed(
        self,
        candidates: Iterable[JobCandidate],
        dismissed_ids: AbstractSet[str],
        preferences: UserPreferences,
        user_location: Coordinate,
        now: Optional[datetime] = None
    ) -> List[FeedItem[JobCandidate]]:
        """
        Rank open jobs for a worker.

        Args:
            candidates: Jobs from the candidate source, in fetch order
            dismissed_ids: Ids the worker swiped away
            preferences: The worker's preferences
            user_location: Worker location, or the default location
            now: Reference time for freshness

        Returns:
            Every non-dismissed job, best first
        """
        now = now or datetime.now(timezone.utc)
        scored = []
        for job in candidates:
            if job.id in dismissed_ids:
                continue
            relevance = self.engine.score_job(job, preferences, user_location, now)
            scored.append(ScoredCandidate(job, relevance.score, relevance.distance))

        feed = self._rank(scored)
        logger.debug(f"Built job feed: {len(feed)} jobs ({len(dismissed_ids)} dismissed ids)")
        return feed

    def build_offer_feed(
        self,
        candidates: Iterable[OfferCandidate],
        exclude_owner_id: Optional[str],
        preferences: UserPreferences,
        user_location: Coordinate,
        now: Optional[datetime] = None
    ) -> List[FeedItem[OfferCandidate]]:
        """
        Rank worker offers for a producer.
        The producer's own offers never appear, whatever their score.

        Args:
            candidates: Offers from the candidate source, in fetch order
            exclude_owner_id: Id of the user viewing the feed
            preferences: The producer's preferences
            user_location: Producer location, or the default location
            now: Reference time for freshness

        Returns:
            Every offer not owned by the viewer, best first
        """
        now = now or datetime.now(timezone.utc)
        scored = []
        for offer in candidates:
            if exclude_owner_id is not None and offer.worker_id == exclude_owner_id:
                continue
            relevance = self.engine.score_offer(offer, preferences, user_location, now)
            scored.append(ScoredCandidate(offer, relevance.score, relevance.distance))

        feed = self._rank(scored)
        logger.debug(f"Built offer feed: {len(feed)} offers")
        return feed

    @staticmethod
    def _rank(scored: List[ScoredCandidate[T]]) -> List[FeedItem[T]]:
        # sorted() is stable: equal scores keep fetch order
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)
        return [FeedItem(s.candidate, s.distance_km) for s in ranked]
