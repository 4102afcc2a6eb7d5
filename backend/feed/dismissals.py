"""
Persisted set of jobs the user swiped away.

Reads fail open (an unreadable set counts as empty) and writes never undo
the in-memory dismissal, so a dismissed card does not come back during the
session even when storage is broken.
"""

import json
import logging
from typing import FrozenSet, Iterable, List, Set

from database import KeyValueStorage, StorageError
from .assembler import FeedItem

logger = logging.getLogger(__name__)

DEFAULT_KEY = "dismissed_jobs_v1"


class DismissalStore:
    """Dismissed job ids for the current device."""

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_KEY):
        """
        Args:
            storage: Key-value storage holding the JSON array of ids
            key: Storage key
        """
        self.storage = storage
        self.key = key
        self._dismissed: Set[str] = set()

    @property
    def dismissed(self) -> FrozenSet[str]:
        return frozenset(self._dismissed)

    def load(self) -> FrozenSet[str]:
        """
        Read the persisted set and merge it into memory.

        Returns:
            Dismissed ids; empty if storage cannot be read or decoded
        """
        try:
            raw = self.storage.get_item(self.key)
            stored = json.loads(raw) if raw else []
            if not isinstance(stored, list):
                raise ValueError(f"expected a JSON array, got {type(stored).__name__}")
            self._dismissed.update(str(job_id) for job_id in stored)
        except (StorageError, ValueError) as e:
            logger.warning(f"Could not read dismissed jobs ({self.key}): {e}")
        return self.dismissed

    def dismiss(self, job_id: str, feed: Iterable[FeedItem] = ()) -> List[FeedItem]:
        """
        Dismiss a job. Dismissing the same id again changes nothing.

        Args:
            job_id: Job to hide
            feed: Feed currently shown

        Returns:
            The feed without the dismissed job
        """
        if job_id not in self._dismissed:
            self._dismissed.add(job_id)
            self._persist()
        return [item for item in feed if item.id != job_id]

    def reset(self):
        """Forget every dismissal. Only for an explicit full refresh."""
        self._dismissed.clear()
        try:
            self.storage.remove_item(self.key)
        except StorageError as e:
            logger.error(f"Could not clear dismissed jobs ({self.key}): {e}")

    def _persist(self):
        try:
            self.storage.set_item(self.key, json.dumps(sorted(self._dismissed)))
        except StorageError as e:
            logger.error(f"Could not save dismissed jobs ({self.key}): {e}")
