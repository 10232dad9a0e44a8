import pytest

from eventboard.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(ttl_seconds=60, clock=clock)


def test_get_missing_key_returns_none(cache):
    assert cache.get("nope") is None


def test_put_then_get_within_ttl(cache, clock):
    cache.put("floors", [1, 2])
    clock.advance(59)

    assert cache.get("floors") == [1, 2]


def test_entry_expires_and_is_evicted(cache, clock):
    cache.put("floors", [1, 2])
    clock.advance(60)

    assert cache.get("floors") is None
    assert len(cache) == 0
    assert cache.expiry("floors") is None


def test_expiry_reports_deadline(cache, clock):
    cache.put("rooms", "x")
    assert cache.expiry("rooms") == clock.now + 60


def test_put_refreshes_deadline(cache, clock):
    cache.put("rooms", "old")
    clock.advance(50)
    cache.put("rooms", "new")
    clock.advance(30)

    assert cache.get("rooms") == "new"


def test_clear(cache):
    cache.put("a", 1)
    cache.put("b", 2)
    cache.clear()

    assert len(cache) == 0


def test_expiry_is_none_once_entry_expired(cache, clock):
    cache.put("rooms", "x")
    clock.advance(60)

    assert cache.expiry("rooms") is None
    assert len(cache) == 0
