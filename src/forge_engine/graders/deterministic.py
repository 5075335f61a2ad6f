"""Deterministic evidence grader: substring matching with source-based tiers."""

from __future__ import annotations

import re

from forge_core.constants import (
    DEFAULT_CLAIM_FALLBACK_STRENGTH,
    SNIPPET_CONTEXT_AFTER,
    SNIPPET_CONTEXT_BEFORE,
    TIER_BASE_STRENGTH,
    TIER_UPGRADE,
)
from forge_core.models.artifact import ArtifactChunk, SourceType
from forge_core.models.evidence import EvidenceItem, ProofTier, RequirementEvidence
from forge_core.models.job import Requirement
from forge_engine.text import normalize_text

# Initial tier inferred from where a match was found; resume claims wait for corroboration
SOURCE_TIER: dict[SourceType, ProofTier] = {
    SourceType.GITHUB: ProofTier.VERIFIED_ARTIFACT,
    SourceType.PORTFOLIO: ProofTier.STRONG_SIGNAL,
    SourceType.WRITING: ProofTier.STRONG_SIGNAL,
    SourceType.LINKEDIN: ProofTier.WEAK_SIGNAL,
    SourceType.RESUME: ProofTier.CLAIM_ONLY,
    SourceType.OTHER: ProofTier.WEAK_SIGNAL,
}

_URL_TOKEN_RE = re.compile(r"https?://|www\.|github\.com/", re.IGNORECASE)

MATCH_RELEVANCE = 0.8
MATCH_RECENCY = 0.7
FALLBACK_RELEVANCE = 0.3
FALLBACK_RECENCY = 0.5
RELATED_SNIPPET = "Related terms found but no direct match"
NO_EVIDENCE_SNIPPET = "No evidence found"


def match_quality(term: str) -> float:
    """Longer matched terms are less likely to be accidental hits."""
    if len(term) > 10:
        return 0.9
    if len(term) > 5:
        return 0.7
    return 0.5


def _term_pattern(term: str) -> re.Pattern[str]:
    """Case-insensitive pattern that tolerates any whitespace between words."""
    return re.compile(r"\s+".join(re.escape(word) for word in term.split()), re.IGNORECASE)


class DeterministicGrader:
    """Grade evidence by locating requirement terms in the retrieved chunks.

    Never fails: every requirement receives at least one item.
    """

    def __init__(self, claim_fallback_strength: float = DEFAULT_CLAIM_FALLBACK_STRENGTH) -> None:
        """Initialize with the strength given to related-but-unmatched mentions."""
        self.claim_fallback_strength = claim_fallback_strength

    async def grade_requirement(
        self,
        requirement: Requirement,
        retrieved_chunks: list[ArtifactChunk],
    ) -> RequirementEvidence:
        """Async adapter so this grader satisfies the EvidenceGrader protocol."""
        return self.grade(requirement, retrieved_chunks)

    def grade(
        self,
        requirement: Requirement,
        chunks: list[ArtifactChunk],
    ) -> RequirementEvidence:
        """Grade one requirement synchronously."""
        terms = [
            t for t in (normalize_text(s) for s in [requirement.label, *requirement.synonyms]) if t
        ]
        patterns = [(term, _term_pattern(term)) for term in terms]

        items: list[EvidenceItem] = []
        for chunk in chunks:
            item = self._grade_chunk(requirement, chunk, patterns)
            if item is not None:
                items.append(item)

        if not items:
            items.append(self._fallback_item(requirement, chunks, terms))

        return RequirementEvidence(requirement_id=requirement.id, items=items)

    def _grade_chunk(
        self,
        requirement: Requirement,
        chunk: ArtifactChunk,
        patterns: list[tuple[str, re.Pattern[str]]],
    ) -> EvidenceItem | None:
        """Return an item for the first term found in the chunk, if any."""
        for term, pattern in patterns:
            match = pattern.search(chunk.text)
            if match is None:
                continue

            start = max(0, match.start() - SNIPPET_CONTEXT_BEFORE)
            end = min(len(chunk.text), match.end() + SNIPPET_CONTEXT_AFTER)
            snippet = chunk.text[start:end].strip()

            tier = SOURCE_TIER[chunk.source]
            if _URL_TOKEN_RE.search(snippet):
                tier = TIER_UPGRADE[tier]

            return EvidenceItem(
                requirement_id=requirement.id,
                proof_tier=tier,
                strength=TIER_BASE_STRENGTH[tier] * match_quality(term),
                relevance=MATCH_RELEVANCE,
                recency=MATCH_RECENCY,
                snippet=snippet,
                source=chunk.source,
                url=chunk.url,
            )
        return None

    def _fallback_item(
        self,
        requirement: Requirement,
        chunks: list[ArtifactChunk],
        terms: list[str],
    ) -> EvidenceItem:
        """Emit CLAIM_ONLY for a loose word-level mention, else NONE."""
        all_text = normalize_text(" ".join(c.text for c in chunks))
        has_related = any(
            word in all_text for term in terms for word in term.split() if len(word) > 3
        )

        if has_related:
            return EvidenceItem(
                requirement_id=requirement.id,
                proof_tier=ProofTier.CLAIM_ONLY,
                strength=self.claim_fallback_strength,
                relevance=FALLBACK_RELEVANCE,
                recency=FALLBACK_RECENCY,
                snippet=RELATED_SNIPPET,
                source=SourceType.OTHER,
            )
        return EvidenceItem(
            requirement_id=requirement.id,
            proof_tier=ProofTier.NONE,
            strength=0.0,
            relevance=0.0,
            recency=FALLBACK_RECENCY,
            snippet=NO_EVIDENCE_SNIPPET,
            source=SourceType.OTHER,
        )
