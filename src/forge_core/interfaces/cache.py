"""Abstract artifact cache interface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from forge_core.models.artifact import ArtifactChunk


@runtime_checkable
class ArtifactCache(Protocol):
    """Cache of ingested chunks keyed by source identity; implementations can be swapped."""

    def get(self, key: str) -> list[ArtifactChunk] | None:
        """Retrieve unexpired chunks by key, or None if absent or expired."""
        ...

    def set(self, key: str, chunks: list[ArtifactChunk]) -> None:
        """Store chunks under a key."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key from the cache."""
        ...

    def evict_expired(self) -> int:
        """Drop all expired entries and return how many were removed."""
        ...
