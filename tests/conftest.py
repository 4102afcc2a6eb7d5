"""
Shared fixtures: a fixed clock, a user location and candidate builders.
"""

from datetime import datetime, timedelta, timezone

import pytest

from config import Config
from database import KeyValueStorage, StorageError
from feed import FeedAssembler
from models import Coordinate, JobCandidate, OfferCandidate, OfferExtras, UserPreferences
from scorer import SignalExtractor, ScoringEngine

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)
USER = Coordinate(latitude=0.0, longitude=0.0)

# One degree of longitude on the equator is about 111.19 km
KM_PER_DEGREE = 111.19492664455873


def at_km(km: float) -> Coordinate:
    """Point due east of USER at the given distance."""
    return Coordinate(latitude=0.0, longitude=km / KM_PER_DEGREE)


def make_job(job_id="job-1", service_type_id="colheita", offer_amount=500.0,
             hours_old=0.0, km=None, **kwargs) -> JobCandidate:
    return JobCandidate(
        id=job_id,
        service_type_id=service_type_id,
        offer_amount=offer_amount,
        created_at=NOW - timedelta(hours=hours_old),
        location=at_km(km) if km is not None else None,
        **kwargs
    )


def make_offer(offer_id="offer-1", worker_id="worker-1", service_type_ids=("colheita",),
               hours_old=0.0, km=None, extras=None, **kwargs) -> OfferCandidate:
    return OfferCandidate(
        id=offer_id,
        worker_id=worker_id,
        service_type_ids=tuple(service_type_ids),
        created_at=NOW - timedelta(hours=hours_old),
        location=at_km(km) if km is not None else None,
        extras=extras or OfferExtras(),
        **kwargs
    )


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage."""

    def __init__(self, data=None):
        self.data = dict(data or {})

    def get_item(self, key):
        return self.data.get(key)

    def set_item(self, key, value):
        self.data[key] = value

    def remove_item(self, key):
        self.data.pop(key, None)


class BrokenStorage(KeyValueStorage):
    """Storage whose every call fails."""

    def get_item(self, key):
        raise StorageError("disk I/O error")

    def set_item(self, key, value):
        raise StorageError("disk I/O error")

    def remove_item(self, key):
        raise StorageError("disk I/O error")


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def engine(config):
    return ScoringEngine(config, SignalExtractor(config))


@pytest.fixture
def extractor(config):
    return SignalExtractor(config)


@pytest.fixture
def assembler(engine):
    return FeedAssembler(engine)


@pytest.fixture
def no_preferences():
    return UserPreferences.empty("user-1")


@pytest.fixture
def harvest_preferences():
    return UserPreferences(user_id="user-1", preferred_service_types=frozenset({"harvest_cocoa"}))
