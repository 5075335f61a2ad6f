"""Keyword-baseline retrieval of requirement-relevant chunks."""

from __future__ import annotations

from forge_core.constants import DEFAULT_TOP_K_CHUNKS
from forge_core.models.artifact import ArtifactChunk
from forge_core.models.job import Requirement
from forge_engine.text import tokenize
from forge_infra.vector.similarity import find_top_k_similar


def build_query(requirement: Requirement) -> str:
    """Join label, synonyms, and evidence hints into one query string."""
    return " ".join([requirement.label, *requirement.synonyms, *requirement.evidence_hints])


def retrieve_top_chunks(
    requirement: Requirement,
    chunks: list[ArtifactChunk],
    k: int = DEFAULT_TOP_K_CHUNKS,
) -> list[ArtifactChunk]:
    """Return the top-K chunks by Jaccard similarity to the requirement query.

    Ties keep the original chunk order, so the result is deterministic.
    """
    query_tokens = tokenize(build_query(requirement))
    indexed = [(str(i), tokenize(chunk.text)) for i, chunk in enumerate(chunks)]
    ranked = find_top_k_similar(query_tokens, indexed, top_k=k)
    return [chunks[int(idx)] for idx, _score in ranked]
