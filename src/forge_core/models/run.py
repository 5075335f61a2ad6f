"""Scoring run configuration and result models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from forge_core.models.evidence import RequirementEvidence


class ForgeConfig(BaseModel):
    """Tunable knobs for a single scoring run."""

    model_config = ConfigDict(frozen=True)

    capability_threshold: float = Field(
        default=40, ge=0, le=100, description="Fixed gate threshold (tau), 0-100"
    )
    top_k_chunks_per_req: int = Field(
        default=8, ge=1, description="Chunks retrieved per requirement"
    )
    strict_evidence_mode: bool = Field(
        default=False, description="Ungrounded snippets become NONE instead of a downgrade"
    )
    pool_relative_tau: bool = Field(
        default=True, description="Derive tau from the candidate pool when scores are given"
    )
    soft_must_haves: bool = Field(
        default=True, description="Missing must-haves subtract points instead of passing silently"
    )
    corroboration_boost: bool = Field(
        default=True, description="Upgrade claims repeated in code-host or portfolio text"
    )
    learning_velocity_boost: bool = Field(
        default=True, description="Add a bonus for self-directed learning signals"
    )


class ContextWeights(BaseModel):
    """Relative weights of the four soft-skill dimensions."""

    model_config = ConfigDict(frozen=True)

    teamwork: float = Field(default=0.25, ge=0.0, le=1.0)
    communication: float = Field(default=0.25, ge=0.0, le=1.0)
    adaptability: float = Field(default=0.25, ge=0.0, le=1.0)
    ownership: float = Field(default=0.25, ge=0.0, le=1.0)


class ContextScores(BaseModel):
    """Per-dimension soft-skill scores."""

    model_config = ConfigDict(frozen=True)

    teamwork: float = Field(ge=0.0, le=1.0)
    communication: float = Field(ge=0.0, le=1.0)
    adaptability: float = Field(ge=0.0, le=1.0)
    ownership: float = Field(ge=0.0, le=1.0)


class ForgeDebug(BaseModel):
    """How the gate and bonuses were derived for a result."""

    model_config = ConfigDict(frozen=True)

    tau_used: float = Field(description="Gate threshold that was applied")
    tau_source: Literal["fixed", "pool_relative"] = Field(description="Where tau came from")
    corroborations_applied: int = Field(ge=0, description="Items upgraded by corroboration")
    learning_velocity_bonus: float = Field(
        ge=0.0, description="Points added to the capability score for learning velocity"
    )


class ForgeResult(BaseModel):
    """Outcome of scoring one candidate against one job. Read-only."""

    model_config = ConfigDict(frozen=True)

    capability_score_verified: int = Field(
        ge=0, le=100, description="Gated score from verifiable evidence, after penalties"
    )
    capability_score_total: int = Field(
        ge=0, le=100, description="Auxiliary score that also credits claims"
    )
    pass_gate: bool = Field(description="Whether the verified score reached tau")
    missing_must_haves: list[str] = Field(description="Labels of unsupported must-haves")
    must_have_penalty: int = Field(ge=0, description="Points subtracted for missing must-haves")
    context_scores: ContextScores = Field(description="Per-dimension soft-skill scores")
    context_score: float = Field(ge=0.0, le=1.0, description="Aggregate soft-skill score")
    forge_score: int = Field(ge=0, description="Final composite score")
    confidence: float = Field(ge=0.0, le=1.0, description="Confidence in the assessment")
    evidence_matrix: list[RequirementEvidence] = Field(description="Evidence per requirement")
    debug: ForgeDebug = Field(description="Gate and bonus provenance")
