"""Tests for cross-source corroboration."""

from __future__ import annotations

import pytest

from forge_core.models.artifact import ArtifactChunk, SourceType
from forge_core.models.evidence import EvidenceItem, ProofTier
from forge_engine.corroboration import detect_corroboration, snippet_terms
from tests.mocks.mock_factories import make_chunk, make_evidence_item

CLAIM = "Five years building React dashboards with TypeScript"

PORTFOLIO = make_chunk(
    id="portfolio-chunk-0",
    source=SourceType.PORTFOLIO,
    text="Case study: React dashboards for a logistics startup",
)


def _claim(tier: ProofTier = ProofTier.CLAIM_ONLY, **overrides: object) -> EvidenceItem:
    return make_evidence_item(proof_tier=tier, snippet=CLAIM, source=SourceType.RESUME, **overrides)


@pytest.mark.unit
class TestSnippetTerms:
    """Test snippet_terms."""

    def test_filters_short_words_and_caps(self) -> None:
        """Only words longer than three characters, at most ten."""
        terms = snippet_terms("a b the react " + " ".join(f"word{i}" for i in range(20)))
        assert terms[0] == "react"
        assert len(terms) == 10


@pytest.mark.unit
class TestDetectCorroboration:
    """Test detect_corroboration."""

    def test_claim_upgraded_by_code_host(self) -> None:
        """Three shared terms in code-host text lift a claim to STRONG_SIGNAL."""
        github = make_chunk(
            source=SourceType.GITHUB,
            text="React dashboards written in TypeScript over five years",
        )
        [item] = detect_corroboration([_claim()], [github])
        assert item.proof_tier is ProofTier.STRONG_SIGNAL
        assert item.corroborated_by == [SourceType.GITHUB]
        assert item.notes == "Corroborated by: github"

    def test_claim_upgraded_by_portfolio(self) -> None:
        """Portfolio-only corroboration lifts a claim to WEAK_SIGNAL."""
        [item] = detect_corroboration([_claim()], [PORTFOLIO])
        assert item.proof_tier is ProofTier.WEAK_SIGNAL
        assert item.corroborated_by == [SourceType.PORTFOLIO]

    def test_weak_needs_code_host(self) -> None:
        """WEAK_SIGNAL does not move on portfolio support alone."""
        [item] = detect_corroboration([_claim(ProofTier.WEAK_SIGNAL)], [PORTFOLIO])
        assert item.proof_tier is ProofTier.WEAK_SIGNAL
        assert item.corroborated_by == [SourceType.PORTFOLIO]

    def test_weak_upgraded_by_code_host(self) -> None:
        """WEAK_SIGNAL becomes STRONG_SIGNAL with code-host support."""
        github = make_chunk(source=SourceType.GITHUB, text="years of react dashboards, typescript")
        [item] = detect_corroboration([_claim(ProofTier.WEAK_SIGNAL)], [github, PORTFOLIO])
        assert item.proof_tier is ProofTier.STRONG_SIGNAL
        assert item.corroborated_by == [SourceType.GITHUB, SourceType.PORTFOLIO]
        assert item.notes == "Corroborated by: github, portfolio"

    def test_existing_notes_kept(self) -> None:
        """Corroboration notes are appended."""
        [item] = detect_corroboration([_claim(notes="graded")], [PORTFOLIO])
        assert item.notes == "graded | Corroborated by: portfolio"

    def test_strong_tiers_untouched(self) -> None:
        """Only CLAIM_ONLY and WEAK_SIGNAL are eligible."""
        strong = _claim(ProofTier.STRONG_SIGNAL)
        assert detect_corroboration([strong], [PORTFOLIO]) == [strong]

    def test_resume_text_never_corroborates(self) -> None:
        """Resume chunks are not an independent source."""
        resume = make_chunk(text=CLAIM)
        claim = _claim()
        assert detect_corroboration([claim], [resume]) == [claim]

    def test_never_downgrades(self, code_host_chunk: ArtifactChunk) -> None:
        """Output tiers are never below input tiers."""
        items = [_claim(t) for t in ProofTier]
        out = detect_corroboration(items, [code_host_chunk, PORTFOLIO])
        assert all(o.proof_tier.rank >= i.proof_tier.rank for i, o in zip(items, out, strict=True))
