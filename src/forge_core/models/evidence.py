"""Evidence models: proof tiers, graded items, per-requirement evidence."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from forge_core.models.artifact import SourceType


class ProofTier(StrEnum):
    """Discrete strength level of a piece of evidence, richest first."""

    VERIFIED_ARTIFACT = "VERIFIED_ARTIFACT"
    STRONG_SIGNAL = "STRONG_SIGNAL"
    WEAK_SIGNAL = "WEAK_SIGNAL"
    CLAIM_ONLY = "CLAIM_ONLY"
    NONE = "NONE"

    @property
    def rank(self) -> int:
        """Ordinal position, 4 for VERIFIED_ARTIFACT down to 0 for NONE."""
        return _TIER_RANK[self]


_TIER_RANK: dict[ProofTier, int] = {
    ProofTier.VERIFIED_ARTIFACT: 4,
    ProofTier.STRONG_SIGNAL: 3,
    ProofTier.WEAK_SIGNAL: 2,
    ProofTier.CLAIM_ONLY: 1,
    ProofTier.NONE: 0,
}


class EvidenceItem(BaseModel):
    """A single graded piece of evidence for one requirement."""

    model_config = ConfigDict(frozen=True)

    requirement_id: str = Field(description="Requirement this evidence supports")
    proof_tier: ProofTier = Field(description="Graded proof strength")
    strength: float = Field(ge=0.0, le=1.0, description="How strongly the snippet proves it")
    relevance: float = Field(ge=0.0, le=1.0, description="How on-topic the snippet is")
    recency: float = Field(ge=0.0, le=1.0, description="1.0 = current, 0.0 = very old")
    snippet: str = Field(min_length=1, description="Quoted text the grade is based on")
    source: SourceType = Field(description="Source the snippet was quoted from")
    url: str | None = Field(default=None, description="Link to the underlying artifact")
    notes: str | None = Field(default=None, description="Grader and verifier annotations")
    corroborated_by: list[SourceType] = Field(
        default_factory=list, description="Independent sources repeating the claim"
    )


class RequirementEvidence(BaseModel):
    """All evidence items for one requirement in one scoring run.

    Also the strict schema that external grader output must satisfy.
    """

    model_config = ConfigDict(frozen=True)

    requirement_id: str = Field(description="Requirement these items belong to")
    items: list[EvidenceItem] = Field(description="Graded evidence items")
