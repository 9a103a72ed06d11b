"""Tests for the bounded, sliding-expiry response cache."""

import pytest

from pointer_api.cache import ResponseCache, cache_key
from pointer_api.models import ClassificationResult
from tests.conftest import CW_TOKEN, EVM_TOKEN, FACTORY_DENOM, IBC_DENOM


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def _result(address: str) -> ClassificationResult:
    return ClassificationResult.base_asset(address, "EVM")


def test_set_then_get_returns_value(clock):
    cache = ResponseCache(max_size=10, ttl_seconds=300, clock=clock)
    value = _result(EVM_TOKEN)

    assert cache.set(EVM_TOKEN, value)
    assert cache.get(EVM_TOKEN) == value
    assert len(cache) == 1


def test_entry_expires_after_ttl(clock):
    cache = ResponseCache(max_size=10, ttl_seconds=300, clock=clock)
    cache.set(EVM_TOKEN, _result(EVM_TOKEN))

    clock.advance(300)

    assert cache.get(EVM_TOKEN) is None
    assert len(cache) == 0


def test_access_slides_expiry(clock):
    cache = ResponseCache(max_size=10, ttl_seconds=300, clock=clock)
    cache.set(EVM_TOKEN, _result(EVM_TOKEN))

    clock.advance(200)
    assert cache.get(EVM_TOKEN) is not None
    clock.advance(200)
    assert cache.get(EVM_TOKEN) is not None
    clock.advance(301)
    assert cache.get(EVM_TOKEN) is None


def test_least_recently_used_entry_is_evicted(clock):
    cache = ResponseCache(max_size=2, ttl_seconds=300, clock=clock)
    cache.set("0x" + "1" * 40, _result("0x" + "1" * 40))
    cache.set("0x" + "2" * 40, _result("0x" + "2" * 40))

    cache.get("0x" + "1" * 40)
    cache.set("0x" + "3" * 40, _result("0x" + "3" * 40))

    assert cache.get("0x" + "2" * 40) is None
    assert cache.get("0x" + "1" * 40) is not None
    assert cache.get("0x" + "3" * 40) is not None
    assert len(cache) == 2


def test_error_results_are_not_cached(clock):
    cache = ResponseCache(max_size=10, ttl_seconds=300, clock=clock)

    assert not cache.set(EVM_TOKEN, ClassificationResult.failure(EVM_TOKEN, "boom"))
    assert cache.get(EVM_TOKEN) is None


def test_evm_keys_are_case_insensitive(clock):
    cache = ResponseCache(max_size=10, ttl_seconds=300, clock=clock)
    cache.set(EVM_TOKEN, _result(EVM_TOKEN))

    assert cache.get(EVM_TOKEN.lower()) is not None
    assert cache.get(EVM_TOKEN.upper().replace("0X", "0x")) is not None


def test_cache_key_keeps_denoms_verbatim():
    assert cache_key(EVM_TOKEN) == EVM_TOKEN.lower()
    assert cache_key(CW_TOKEN) == CW_TOKEN
    assert cache_key(IBC_DENOM) == IBC_DENOM
    assert cache_key(FACTORY_DENOM) == FACTORY_DENOM


def test_stats_track_hits_and_misses(clock):
    cache = ResponseCache(max_size=10, ttl_seconds=300, clock=clock)
    cache.set(EVM_TOKEN, _result(EVM_TOKEN))

    cache.get(EVM_TOKEN)
    cache.get(CW_TOKEN)

    assert cache.stats() == {"size": 1, "max_size": 10, "hits": 1, "misses": 1}

    cache.clear()
    assert cache.stats() == {"size": 0, "max_size": 10, "hits": 0, "misses": 0}


def test_defaults_come_from_config():
    cache = ResponseCache()

    assert cache.max_size == 500
    assert cache.ttl_seconds == 300


@pytest.mark.parametrize("kwargs", [{"max_size": 0}, {"ttl_seconds": 0}])
def test_invalid_bounds_are_rejected(kwargs):
    with pytest.raises(ValueError):
        ResponseCache(**kwargs)
