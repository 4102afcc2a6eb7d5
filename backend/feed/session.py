"""
Feed session: the state behind one user's home feed.

Holds the ranked job and offer feeds, the selected radius and the dismissal
store. Loads fetch through the source runner; the radius filter is applied on
every read, never by refetching.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union

from config import Config
from database import Database
from models import Coordinate, JobCandidate, OfferCandidate, UserPreferences
from scorer import build_engine
from sources.adapters import get_source
from sources.runner import SourceRunner
from .assembler import FeedAssembler, FeedItem
from .dismissals import DismissalStore
from .radius import RadiusFilter, filter_by_radius

logger = logging.getLogger(__name__)


@dataclass
class FeedSnapshot:
    """Result of one feed load."""
    jobs: List[FeedItem[JobCandidate]] = field(default_factory=list)
    offers: List[FeedItem[OfferCandidate]] = field(default_factory=list)
    location: Optional[Coordinate] = None
    used_default_location: bool = False
    generation: int = 0


class FeedSession:
    """Feed state for a single user session."""

    def __init__(
        self,
        config: Config,
        runner: SourceRunner,
        dismissals: DismissalStore,
        assembler: FeedAssembler,
        user_id: str,
        worker_level: int = 1
    ):
        """
        Args:
            config: Configuration with default location and radius
            runner: Runner fetching candidates, preferences and location
            dismissals: Persisted dismissed-job set
            assembler: Feed assembler
            user_id: User viewing the feed
            worker_level: Level used for job eligibility
        """
        self.config = config
        self.runner = runner
        self.dismissals = dismissals
        self.assembler = assembler
        self.user_id = user_id
        self.worker_level = worker_level
        self.default_location = Coordinate(
            latitude=config.location.default_latitude,
            longitude=config.location.default_longitude,
        )
        self._radius = RadiusFilter.parse(config.feed.default_radius)
        self._snapshot = FeedSnapshot()
        self._generation = 0

    @property
    def snapshot(self) -> FeedSnapshot:
        return self._snapshot

    @property
    def radius(self) -> RadiusFilter:
        return self._radius

    @radius.setter
    def radius(self, value: Union[RadiusFilter, int, str]):
        self._radius = RadiusFilter.parse(value)

    def load(self, now: Optional[datetime] = None) -> FeedSnapshot:
        """
        Fetch and rank both feeds.

        A load that finishes after a newer one has started is discarded;
        the newest result always wins.

        Args:
            now: Reference time for freshness

        Returns:
            The snapshot now held by the session
        """
        self._generation += 1
        generation = self._generation

        fetched = self.runner.fetch_all(self.user_id, self.worker_level)
        dismissed = self.dismissals.load()

        location = fetched.location
        used_default = location is None
        if used_default:
            logger.warning(
                f"Location unavailable, using default "
                f"({self.default_location.latitude}, {self.default_location.longitude})"
            )
            location = self.default_location

        preferences = fetched.preferences or UserPreferences.empty(self.user_id)

        snapshot = FeedSnapshot(
            jobs=self.assembler.build_job_feed(
                fetched.jobs, dismissed, preferences, location, now
            ),
            offers=self.assembler.build_offer_feed(
                fetched.offers, self.user_id, preferences, location, now
            ),
            location=location,
            used_default_location=used_default,
            generation=generation,
        )

        if generation != self._generation:
            logger.info(f"Discarding stale feed load {generation} (latest is {self._generation})")
            return self._snapshot

        self._snapshot = snapshot
        logger.info(f"Feed loaded: jobs={len(snapshot.jobs)} offers={len(snapshot.offers)}")
        return snapshot

    def refresh(self, now: Optional[datetime] = None) -> FeedSnapshot:
        """Pull-to-refresh: forget dismissals, then reload."""
        self.dismissals.reset()
        return self.load(now)

    def dismiss(self, job_id: str):
        """Swipe a job away; the held feed is pruned without refetching."""
        self._snapshot.jobs = self.dismissals.dismiss(job_id, self._snapshot.jobs)

    def visible_jobs(self) -> List[FeedItem[JobCandidate]]:
        return filter_by_radius(self._snapshot.jobs, self._radius)

    def visible_offers(self) -> List[FeedItem[OfferCandidate]]:
        return filter_by_radius(self._snapshot.offers, self._radius)


def create_session(
    config: Config,
    user_id: str,
    worker_level: int = 1,
    location_provider=None
) -> FeedSession:
    """
    Wire a session from configuration: storage, source, runner and scorer.

    Args:
        config: Loaded configuration
        user_id: User viewing the feed
        worker_level: Level used for job eligibility
        location_provider: Callable returning the device Coordinate or None

    Raises:
        ValueError: If the configured adapter or radius is unknown
        StorageError: If the storage database cannot be opened
    """
    storage = Database(config.storage.db_path)
    runner = SourceRunner(config, get_source(config.source), location_provider)
    return FeedSession(
        config,
        runner,
        DismissalStore(storage, config.storage.dismissed_key),
        FeedAssembler(build_engine(config)),
        user_id,
        worker_level,
    )
