"""Cross-source corroboration: upgrade claims repeated in candidate-controlled sources."""

from __future__ import annotations

from forge_core.constants import (
    CORROBORATION_CODE_HOST_MIN_MATCHES,
    CORROBORATION_MAX_TERMS,
    CORROBORATION_PORTFOLIO_MIN_MATCHES,
)
from forge_core.models.artifact import ArtifactChunk, SourceType
from forge_core.models.evidence import EvidenceItem, ProofTier
from forge_engine.text import normalize_text
from forge_engine.verification import append_note

_UPGRADABLE = (ProofTier.CLAIM_ONLY, ProofTier.WEAK_SIGNAL)


def source_text(chunks: list[ArtifactChunk], source: SourceType) -> str:
    """Normalized concatenation of all chunk texts from one source."""
    return normalize_text(" ".join(c.text for c in chunks if c.source == source))


def snippet_terms(snippet: str) -> list[str]:
    """The first few meaningful words of a snippet."""
    words = [t for t in normalize_text(snippet).split(" ") if len(t) > 3]
    return words[:CORROBORATION_MAX_TERMS]


def detect_corroboration(
    items: list[EvidenceItem],
    all_chunks: list[ArtifactChunk],
) -> list[EvidenceItem]:
    """Return items with CLAIM_ONLY/WEAK_SIGNAL upgraded where other sources agree.

    Tiers only ever move up; uncorroborated items are returned unchanged.
    """
    github_text = source_text(all_chunks, SourceType.GITHUB)
    portfolio_text = source_text(all_chunks, SourceType.PORTFOLIO)

    return [_corroborate(item, github_text, portfolio_text) for item in items]


def _corroborate(item: EvidenceItem, github_text: str, portfolio_text: str) -> EvidenceItem:
    if item.proof_tier not in _UPGRADABLE:
        return item

    terms = snippet_terms(item.snippet)
    corroborated_by: list[SourceType] = []

    github_matches = sum(1 for t in terms if t in github_text)
    if github_matches >= CORROBORATION_CODE_HOST_MIN_MATCHES:
        corroborated_by.append(SourceType.GITHUB)

    portfolio_matches = sum(1 for t in terms if t in portfolio_text)
    if portfolio_matches >= CORROBORATION_PORTFOLIO_MIN_MATCHES:
        corroborated_by.append(SourceType.PORTFOLIO)

    if not corroborated_by:
        return item

    by_code_host = SourceType.GITHUB in corroborated_by
    new_tier = item.proof_tier
    if item.proof_tier == ProofTier.CLAIM_ONLY:
        new_tier = ProofTier.STRONG_SIGNAL if by_code_host else ProofTier.WEAK_SIGNAL
    elif by_code_host:
        new_tier = ProofTier.STRONG_SIGNAL

    names = ", ".join(s.value for s in corroborated_by)
    return item.model_copy(
        update={
            "proof_tier": new_tier,
            "corroborated_by": corroborated_by,
            "notes": append_note(item.notes, f"Corroborated by: {names}"),
        }
    )
