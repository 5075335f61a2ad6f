"""Split raw candidate text into bounded, source-tagged chunks."""

from __future__ import annotations

from forge_core.constants import CHUNK_SIZE_CHARS
from forge_core.models.artifact import ArtifactChunk, SourceType


def chunk_text(
    text: str,
    source: SourceType,
    base_url: str | None = None,
) -> list[ArtifactChunk]:
    """Accumulate lines into chunks of roughly CHUNK_SIZE_CHARS characters.

    A chunk is emitted each time the line buffer reaches the threshold, plus a
    final partial chunk. Chunks keep the original text order and are never empty.
    """
    chunks: list[ArtifactChunk] = []
    buffer = ""

    for line in text.split("\n"):
        buffer += line + "\n"
        if len(buffer) >= CHUNK_SIZE_CHARS:
            _append_chunk(chunks, buffer, source, base_url)
            buffer = ""

    _append_chunk(chunks, buffer, source, base_url)
    return chunks


def _append_chunk(
    chunks: list[ArtifactChunk],
    buffer: str,
    source: SourceType,
    base_url: str | None,
) -> None:
    """Append the stripped buffer as a chunk unless it is blank."""
    body = buffer.strip()
    if not body:
        return
    chunks.append(
        ArtifactChunk(
            id=f"{source.value}-chunk-{len(chunks)}",
            source=source,
            url=base_url,
            text=body,
        )
    )
