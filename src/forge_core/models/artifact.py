"""Candidate artifact models: source tags and text chunks."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class SourceType(StrEnum):
    """Where a piece of candidate text came from."""

    RESUME = "resume"
    GITHUB = "github"  # Code-hosting profile and repositories
    PORTFOLIO = "portfolio"
    WRITING = "writing"
    LINKEDIN = "linkedin"  # Professional profile network
    OTHER = "other"


class ArtifactChunk(BaseModel):
    """A bounded, source-tagged span of raw candidate text."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Chunk identifier, unique within an ingestion pass")
    source: SourceType = Field(description="Source the text was taken from")
    url: str | None = Field(default=None, description="Link back to the source artifact")
    text: str = Field(description="Chunk text")
