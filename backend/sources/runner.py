"""
Source runner with parallel execution.

Fetches candidates, preferences and the device location concurrently, with
timeout protection and failure isolation: a failed or slow call yields its
empty value instead of blocking or breaking the feed.
"""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
import logging

from models import Coordinate, JobCandidate, OfferCandidate, UserPreferences
from sources.base import BaseSource

logger = logging.getLogger(__name__)

LocationProvider = Callable[[], Optional[Coordinate]]


@dataclass
class FetchResult:
    """Everything one feed load needs from the outside world."""
    jobs: List[JobCandidate] = field(default_factory=list)
    offers: List[OfferCandidate] = field(default_factory=list)
    preferences: Optional[UserPreferences] = None
    location: Optional[Coordinate] = None  # None when geolocation is unavailable
    errors: Dict[str, str] = field(default_factory=dict)


class SourceRunner:
    """
    Coordinates the single-shot calls behind one feed load.

    Features:
    - Parallel execution with ThreadPoolExecutor
    - Timeout protection per call (source.timeout seconds)
    - Failure isolation (one failed call doesn't affect the others)
    - No retries; the collaborators own their retry policy
    """

    def __init__(self, config, source: BaseSource, location_provider: Optional[LocationProvider] = None):
        """
        Initialize source runner.

        Args:
            config: Config object with source settings
            source: Candidate source
            location_provider: Callable returning the device location, or None
        """
        self.config = config
        self.source = source
        self.location_provider = location_provider
        self.timeout = config.source.timeout
        self.max_workers = 4  # parallel workers

    def fetch_all(self, user_id: str, worker_level: int = 1) -> FetchResult:
        """
        Run all fetches in parallel with timeout.
        Continue on individual failures.

        Args:
            user_id: User viewing the feed
            worker_level: Worker level used for job eligibility

        Returns:
            FetchResult with whatever could be fetched and the failures by call name
        """
        result = FetchResult()
        calls = {
            "jobs": lambda: self.source.fetch_jobs(worker_level),
            "offers": self.source.fetch_offers,
            "preferences": lambda: self.source.fetch_preferences(user_id),
        }
        if self.location_provider is not None:
            calls["location"] = self.location_provider

        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            # Submit all fetch tasks
            future_map = {executor.submit(call): name for name, call in calls.items()}

            # Collect results in submission order
            for future, name in future_map.items():
                try:
                    value = future.result(timeout=self.timeout)
                    if value is not None:
                        setattr(result, name, value)
                except FuturesTimeoutError:
                    result.errors[name] = "Timeout"
                    logger.error(f"[{name}] Timeout after {self.timeout}s")
                except Exception as e:
                    result.errors[name] = str(e)
                    logger.error(f"[{name}] Error: {str(e)}")
        finally:
            # Don't wait for calls that timed out; their results are discarded
            executor.shutdown(wait=False)

        logger.info(
            f"Fetched jobs={len(result.jobs)} offers={len(result.offers)} "
            f"preferences={'yes' if result.preferences else 'no'} "
            f"location={'yes' if result.location else 'no'}"
        )
        return result
