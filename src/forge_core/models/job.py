"""Job specification models: requirements and the spec that orders them."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Requirement(BaseModel):
    """One weighted, importance-tagged criterion a job expects evidence for."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable requirement identifier")
    label: str = Field(min_length=1, description="Short requirement label, e.g. 'React'")
    type: Literal["skill", "experience", "responsibility", "constraint"] = Field(
        description="Requirement category"
    )
    importance: Literal["must", "should", "nice"] = Field(
        description="How critical the requirement is"
    )
    weight: float = Field(ge=0.0, le=1.0, description="Relative weight in aggregation")
    synonyms: list[str] = Field(
        default_factory=list, description="Alternate names used for matching and retrieval"
    )
    evidence_hints: list[str] = Field(
        default_factory=list, description="Extra terms that help retrieval find evidence"
    )


class JobSpec(BaseModel):
    """Structured job specification. Immutable once scoring begins."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Job title")
    seniority: Literal["intern", "junior", "mid", "senior", "staff", "lead"] | None = Field(
        default=None, description="Target seniority level"
    )
    domain: str | None = Field(default=None, description="Business or technical domain")
    requirements: list[Requirement] = Field(description="Ordered requirements rubric")

    @property
    def total_weight(self) -> float:
        """Sum of requirement weights (expected to be close to 1)."""
        return sum(r.weight for r in self.requirements)
