"""
Base interface for candidate sources.

Every source MUST:
1. Return jobs already limited to status "open" and to the worker's level
2. Return offers already limited to public, active offers
3. Return empty results on failure rather than raising (the runner relies on it)
4. Skip records that cannot be parsed, logging a warning for each
5. Leave relevance ranking and radius filtering to the feed assembler
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar
import logging

from models import JobCandidate, OfferCandidate, UserPreferences

T = TypeVar("T")


class BaseSource(ABC):
    """
    Abstract base class for the data collaborator behind the feed.

    Implementations read from a local mock data file or from the REST backend.
    """

    def __init__(self, source_config):
        """
        Initialize source with its configuration.

        Args:
            source_config: SourceConfig object with adapter, base_url, data_path, timeout
        """
        self.source = source_config
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def fetch_jobs(self, worker_level: int = 1) -> List[JobCandidate]:
        """
        Fetch open jobs the worker is allowed to take.

        Args:
            worker_level: Level of the worker viewing the feed

        Returns:
            List of JobCandidate objects. Returns empty list on failure.
        """
        raise NotImplementedError

    @abstractmethod
    def fetch_offers(self) -> List[OfferCandidate]:
        """
        Fetch public, active worker offers.

        Returns:
            List of OfferCandidate objects. Returns empty list on failure.
        """
        raise NotImplementedError

    @abstractmethod
    def fetch_preferences(self, user_id: str) -> Optional[UserPreferences]:
        """
        Fetch a user's preferences.

        Returns:
            UserPreferences, or None if the user has none or the fetch failed
        """
        raise NotImplementedError

    def _parse_records(
        self,
        records: Iterable[Dict[str, Any]],
        parse: Callable[[Dict[str, Any]], T],
        kind: str
    ) -> List[T]:
        """Parse records one by one, skipping the ones that are malformed."""
        parsed = []
        for record in records:
            try:
                parsed.append(parse(record))
            except (KeyError, TypeError, ValueError) as e:
                record_id = record.get('id') if isinstance(record, dict) else None
                self.logger.warning(f"Skipping {kind} with invalid fields: id={record_id} ({e})")
        return parsed
