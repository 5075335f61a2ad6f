"""Tests for the line-buffer chunker."""

from __future__ import annotations

import pytest

from forge_core.constants import CHUNK_SIZE_CHARS
from forge_core.models.artifact import SourceType
from forge_engine.chunking import chunk_text


@pytest.mark.unit
class TestChunkText:
    """Test chunk_text."""

    def test_short_text_single_chunk(self) -> None:
        """Text under the threshold becomes one stripped chunk."""
        chunks = chunk_text("  Senior engineer.\nReact and TypeScript.\n", SourceType.RESUME)
        assert len(chunks) == 1
        assert chunks[0].id == "resume-chunk-0"
        assert chunks[0].text == "Senior engineer.\nReact and TypeScript."
        assert chunks[0].source is SourceType.RESUME

    def test_long_text_splits_at_threshold(self) -> None:
        """Chunks close once the buffer reaches the threshold."""
        lines = ["x" * 99 for _ in range(20)]
        chunks = chunk_text("\n".join(lines), SourceType.PORTFOLIO)
        # 100 chars per buffered line: closes after 8, 16, then a 4-line remainder
        assert [c.id for c in chunks] == [
            "portfolio-chunk-0",
            "portfolio-chunk-1",
            "portfolio-chunk-2",
        ]
        assert all(len(c.text) < CHUNK_SIZE_CHARS for c in chunks)
        assert chunks[2].text.count("\n") == 3

    def test_preserves_order_and_content(self) -> None:
        """Joined chunks reproduce every non-blank line in order."""
        lines = [f"line {i} " + "y" * 90 for i in range(30)]
        chunks = chunk_text("\n".join(lines), SourceType.RESUME)
        rebuilt = "\n".join(c.text for c in chunks).split("\n")
        assert rebuilt == lines

    def test_empty_text(self) -> None:
        """Blank input produces no chunks."""
        assert chunk_text("", SourceType.RESUME) == []
        assert chunk_text("\n\n   \n", SourceType.RESUME) == []

    def test_base_url_propagated(self) -> None:
        """Every chunk carries the base URL."""
        chunks = chunk_text("Case study", SourceType.PORTFOLIO, "https://jane.dev")
        assert chunks[0].url == "https://jane.dev"
