"""Tests for the in-memory analysis cache."""

from datetime import datetime, timedelta, timezone

import pytest

from compass.cache import AnalysisCache, hash_decision


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return AnalysisCache(ttl_seconds=60, clock=clock)


class TestHashDecision:
    def test_stable(self, job_offer):
        assert hash_decision(job_offer) == hash_decision(job_offer)

    def test_title_does_not_matter(self, job_offer):
        before = hash_decision(job_offer)
        job_offer.title = "Renamed"
        assert hash_decision(job_offer) == before

    def test_weight_change_matters(self, job_offer):
        before = hash_decision(job_offer)
        job_offer.factors[0].weight = 41
        assert hash_decision(job_offer) != before

    def test_emotional_context_matters(self, job_offer):
        before = hash_decision(job_offer)
        job_offer.emotional_context.initial_stress_level = 9
        assert hash_decision(job_offer) != before


class TestAnalysisCache:
    def test_miss(self, cache):
        assert cache.get("d1", "h1") is None

    def test_hit_counts(self, cache):
        cache.put("d1", "h1", {"overallScore": 50}, {"recommendation": "x"})
        cache.get("d1", "h1")
        entry = cache.get("d1", "h1")
        assert entry.hit_count == 2
        assert entry.analysis == {"overallScore": 50}

    def test_hash_must_match(self, cache):
        cache.put("d1", "h1", {}, {})
        assert cache.get("d1", "h2") is None

    def test_expires_after_ttl(self, cache, clock):
        cache.put("d1", "h1", {}, {})
        clock.advance(59)
        assert cache.get("d1", "h1") is not None
        clock.advance(1)
        assert cache.get("d1", "h1") is None
        assert len(cache) == 0

    def test_latest_prefers_newest(self, cache, clock):
        cache.put("d1", "old", {"v": 1}, {})
        clock.advance(10)
        cache.put("d1", "new", {"v": 2}, {})
        cache.put("d2", "other", {"v": 3}, {})
        assert cache.latest("d1").analysis == {"v": 2}

    def test_latest_missing(self, cache):
        assert cache.latest("d1") is None

    def test_clear_only_that_decision(self, cache):
        cache.put("d1", "a", {}, {})
        cache.put("d1", "b", {}, {})
        cache.put("d2", "a", {}, {})
        assert cache.clear("d1") == 2
        assert len(cache) == 1

    def test_purge_expired(self, cache, clock):
        cache.put("d1", "a", {}, {})
        clock.advance(30)
        cache.put("d2", "a", {}, {})
        clock.advance(40)
        assert cache.purge_expired() == 1
        assert cache.latest("d2") is not None
