"""
End-to-end feed session tests: load, radius selection, dismissal and refresh.
"""

import os

import pytest

from config import Config, FeedConfig
from feed import DismissalStore, FeedAssembler, FeedSession, RadiusFilter, create_session
from models import Coordinate, UserPreferences
from scorer import build_engine
from sources import BaseSource, FetchResult, SourceRunner
from conftest import NOW, USER, BrokenStorage, MemoryStorage, make_job, make_offer


class StaticSource(BaseSource):
    """Source returning fixed candidates."""

    def __init__(self, source_config, jobs=(), offers=(), preferences=None):
        super().__init__(source_config)
        self.jobs = list(jobs)
        self.offers = list(offers)
        self.preferences = preferences
        self.job_fetches = 0

    def fetch_jobs(self, worker_level=1):
        self.job_fetches += 1
        return list(self.jobs)

    def fetch_offers(self):
        return list(self.offers)

    def fetch_preferences(self, user_id):
        return self.preferences


J1 = make_job("J1", "harvest_cocoa", offer_amount=1500, hours_old=0, km=5)
J2 = make_job("J2", "masonry", offer_amount=100, hours_old=49, km=80)


def build_session(config, source, location_provider=lambda: USER, storage=None, user_id="worker-1"):
    runner = SourceRunner(config, source, location_provider)
    return FeedSession(
        config,
        runner,
        DismissalStore(storage if storage is not None else MemoryStorage()),
        FeedAssembler(build_engine(config)),
        user_id,
    )


@pytest.fixture
def source(config):
    return StaticSource(
        config.source,
        jobs=[J2, J1],
        preferences=UserPreferences("worker-1", frozenset({"harvest_cocoa"})),
    )


@pytest.fixture
def session(config, source):
    return build_session(config, source)


def visible_ids(session):
    return [item.id for item in session.visible_jobs()]


def test_load_ranks_jobs(session):
    snapshot = session.load(NOW)
    assert [item.id for item in snapshot.jobs] == ["J1", "J2"]
    assert snapshot.location == USER
    assert not snapshot.used_default_location


def test_scenario_radius_fifty_keeps_near_job(session):
    session.load(NOW)
    session.radius = 50
    assert visible_ids(session) == ["J1"]


def test_radius_change_does_not_refetch(session, source):
    session.load(NOW)
    for radius in (10, 25, 50, 100, "unbounded"):
        session.radius = radius
        session.visible_jobs()
    assert source.job_fetches == 1
    assert visible_ids(session) == ["J1", "J2"]


def test_scenario_dismissed_job_stays_hidden_after_reload(session):
    session.load(NOW)
    session.dismiss("J1")
    assert visible_ids(session) == ["J2"]

    session.load(NOW)
    session.radius = RadiusFilter.UNBOUNDED
    assert visible_ids(session) == ["J2"]


def test_scenario_refresh_brings_dismissed_jobs_back(session):
    session.load(NOW)
    session.dismiss("J1")
    session.load(NOW)

    session.refresh(NOW)
    assert visible_ids(session) == ["J1", "J2"]


def test_dismissal_survives_storage_failure(config, source):
    session = build_session(config, source, storage=BrokenStorage())
    session.load(NOW)
    session.dismiss("J1")
    session.load(NOW)
    assert visible_ids(session) == ["J2"]


def test_default_radius_from_config(source):
    config = Config(feed=FeedConfig(default_radius=25))
    session = build_session(config, source)
    session.load(NOW)
    assert session.radius is RadiusFilter.KM_25
    assert visible_ids(session) == ["J1"]


def test_invalid_radius_is_rejected(session):
    with pytest.raises(ValueError):
        session.radius = 42


def test_missing_location_uses_default(config, source):
    session = build_session(config, source, location_provider=lambda: None)
    snapshot = session.load(NOW)
    assert snapshot.used_default_location
    assert snapshot.location == Coordinate(-3.7167, -53.7333)
    # Both jobs are near (0, 0), thousands of km from the default location
    assert [item.id for item in snapshot.jobs] == ["J1", "J2"]
    assert all(item.calculated_distance > 4000 for item in snapshot.jobs)


def test_failing_location_provider_uses_default(config, source):
    def gps():
        raise RuntimeError("permission denied")

    session = build_session(config, source, location_provider=gps)
    snapshot = session.load(NOW)
    assert snapshot.used_default_location
    assert len(snapshot.jobs) == 2


def test_missing_preferences_still_builds_feed(config):
    source = StaticSource(config.source, jobs=[J1, J2], preferences=None)
    snapshot = build_session(config, source).load(NOW)
    assert [item.id for item in snapshot.jobs] == ["J1", "J2"]


def test_offer_feed_excludes_own_offers(config):
    offers = [
        make_offer("mine", worker_id="producer-1", km=1),
        make_offer("theirs", worker_id="worker-2", km=1),
    ]
    source = StaticSource(config.source, offers=offers)
    session = build_session(config, source, user_id="producer-1")
    session.load(NOW)
    assert [item.id for item in session.visible_offers()] == ["theirs"]


def test_visible_offers_use_radius(config):
    offers = [make_offer("near", km=3), make_offer("far", km=400), make_offer("unknown")]
    session = build_session(config, StaticSource(config.source, offers=offers))
    session.load(NOW)
    session.radius = 10
    assert [item.id for item in session.visible_offers()] == ["near", "unknown"]


class ReentrantRunner:
    """Starts a newer load while the first one is still in flight."""

    def __init__(self, results):
        self.results = list(results)
        self.session = None
        self.calls = 0

    def fetch_all(self, user_id, worker_level=1):
        self.calls += 1
        result = self.results.pop(0)
        if self.calls == 1:
            self.session.load(NOW)
        return result


def test_stale_load_is_discarded(config):
    runner = ReentrantRunner([
        FetchResult(jobs=[make_job("stale")], location=USER),
        FetchResult(jobs=[make_job("fresh")], location=USER),
    ])
    session = FeedSession(
        config, runner, DismissalStore(MemoryStorage()),
        FeedAssembler(build_engine(config)), "worker-1",
    )
    runner.session = session

    snapshot = session.load(NOW)
    assert [item.id for item in snapshot.jobs] == ["fresh"]
    assert snapshot.generation == 2
    assert [item.id for item in session.snapshot.jobs] == ["fresh"]


SAMPLE_FEED = os.path.join(os.path.dirname(__file__), "..", "backend", "data", "sample_feed.json")


def test_create_session_with_sample_data(tmp_path):
    config = Config()
    config.source.data_path = SAMPLE_FEED
    config.storage.db_path = str(tmp_path / "feed.db")

    session = create_session(config, "worker-1")
    snapshot = session.load(NOW)

    assert snapshot.used_default_location
    # closed and level-3 jobs are not eligible for a level-1 worker
    assert [item.id for item in snapshot.jobs] == [
        "job-colheita-km140", "job-poda-medicilandia", "job-rocagem-sem-gps"
    ]
    assert snapshot.jobs[2].calculated_distance is None
    # own offer and private offer are left out
    assert [item.id for item in snapshot.offers] == ["offer-maria"]

    session.radius = 25
    assert [item.id for item in session.visible_jobs()] == [
        "job-colheita-km140", "job-rocagem-sem-gps"
    ]

    session.dismiss("job-colheita-km140")
    reopened = create_session(config, "worker-1").load(NOW)
    assert "job-colheita-km140" not in [item.id for item in reopened.jobs]
