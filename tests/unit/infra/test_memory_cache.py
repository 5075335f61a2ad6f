"""Tests for the in-memory artifact cache."""

from __future__ import annotations

import pytest

from forge_core.interfaces.cache import ArtifactCache
from forge_infra.cache.memory_cache import InMemoryArtifactCache
from tests.mocks.mock_factories import make_chunk


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.mark.unit
class TestInMemoryArtifactCache:
    """Test InMemoryArtifactCache."""

    def test_satisfies_protocol(self) -> None:
        """The cache is a structural ArtifactCache."""
        assert isinstance(InMemoryArtifactCache(ttl_seconds=10), ArtifactCache)

    def test_set_and_get(self) -> None:
        """Stored chunks are returned before expiry."""
        cache = InMemoryArtifactCache(ttl_seconds=10, clock=FakeClock())
        cache.set("k", [make_chunk()])
        assert cache.get("k") == [make_chunk()]

    def test_miss(self) -> None:
        """Unknown keys return None."""
        assert InMemoryArtifactCache(ttl_seconds=10).get("missing") is None

    def test_expired_entry_not_served(self) -> None:
        """Entries at or past their TTL are dropped on read."""
        clock = FakeClock()
        cache = InMemoryArtifactCache(ttl_seconds=10, clock=clock)
        cache.set("k", [make_chunk()])
        clock.now = 10
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_returned_list_is_a_copy(self) -> None:
        """Mutating a returned list does not change the cache."""
        cache = InMemoryArtifactCache(ttl_seconds=10, clock=FakeClock())
        cache.set("k", [make_chunk()])
        cache.get("k").clear()  # type: ignore[union-attr]
        assert cache.get("k") == [make_chunk()]

    def test_delete(self) -> None:
        """Deleted keys are gone; deleting twice is harmless."""
        cache = InMemoryArtifactCache(ttl_seconds=10)
        cache.set("k", [])
        cache.delete("k")
        cache.delete("k")
        assert cache.get("k") is None

    def test_evict_expired(self) -> None:
        """Bulk eviction removes only stale entries and reports the count."""
        clock = FakeClock()
        cache = InMemoryArtifactCache(ttl_seconds=10, clock=clock)
        cache.set("old", [])
        clock.now = 5
        cache.set("new", [])
        clock.now = 12
        assert cache.evict_expired() == 1
        assert len(cache) == 1
        assert cache.get("new") == []

    def test_clear(self) -> None:
        """clear empties the cache."""
        cache = InMemoryArtifactCache(ttl_seconds=10)
        cache.set("a", [])
        cache.set("b", [])
        cache.clear()
        assert len(cache) == 0
