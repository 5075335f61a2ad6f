"""In-memory implementation of ArtifactCache with an injectable clock."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from forge_core.models.artifact import ArtifactChunk


@dataclass(frozen=True)
class _Entry:
    """A cached value and the clock reading after which it is stale."""

    chunks: tuple[ArtifactChunk, ...]
    expires_at: float


class InMemoryArtifactCache:
    """Process-local TTL cache. Expired entries are never served.

    Stale entries are dropped lazily on read or in bulk via evict_expired().
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize with a TTL and a monotonic clock returning seconds."""
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    def get(self, key: str) -> list[ArtifactChunk] | None:
        """Retrieve unexpired chunks by key."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return list(entry.chunks)

    def set(self, key: str, chunks: list[ArtifactChunk]) -> None:
        """Store chunks under a key, replacing any previous entry."""
        self._entries[key] = _Entry(
            chunks=tuple(chunks),
            expires_at=self._clock() + self._ttl,
        )

    def delete(self, key: str) -> None:
        """Delete a key from the cache."""
        self._entries.pop(key, None)

    def evict_expired(self) -> int:
        """Remove all expired entries and return how many were dropped."""
        now = self._clock()
        expired = [k for k, e in self._entries.items() if now >= e.expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        """Number of stored entries, including ones not yet evicted."""
        return len(self._entries)
