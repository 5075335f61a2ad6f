"""Confidence in an assessment, from coverage, strong coverage, and depth."""

from __future__ import annotations

import math

from forge_core.constants import CONFIDENCE_DEPTH_SATURATION_ITEMS
from forge_core.models.evidence import ProofTier, RequirementEvidence
from forge_core.models.job import JobSpec
from forge_engine.text import clamp01

_COVERED_TIERS = frozenset(
    {ProofTier.VERIFIED_ARTIFACT, ProofTier.STRONG_SIGNAL, ProofTier.WEAK_SIGNAL}
)
_STRONG_TIERS = frozenset({ProofTier.VERIFIED_ARTIFACT, ProofTier.STRONG_SIGNAL})

COVERAGE_WEIGHT = 0.4
STRONG_COVERAGE_WEIGHT = 0.35
DEPTH_WEIGHT = 0.25


def compute_confidence(job: JobSpec, matrix: list[RequirementEvidence]) -> float:
    """Return confidence in [0, 1]; more evidence never lowers it."""
    by_req = {m.requirement_id: m for m in matrix}
    n_reqs = len(job.requirements)

    covered = 0
    strong = 0
    for req in job.requirements:
        evidence = by_req.get(req.id)
        tiers = {it.proof_tier for it in evidence.items} if evidence else set()
        if tiers & _COVERED_TIERS:
            covered += 1
        if tiers & _STRONG_TIERS:
            strong += 1

    coverage = covered / n_reqs if n_reqs else 0.0
    strong_coverage = strong / n_reqs if n_reqs else 0.0

    total_items = sum(len(m.items) for m in matrix)
    depth = clamp01(math.log(1 + total_items) / math.log(1 + CONFIDENCE_DEPTH_SATURATION_ITEMS))

    return clamp01(
        COVERAGE_WEIGHT * coverage + STRONG_COVERAGE_WEIGHT * strong_coverage + DEPTH_WEIGHT * depth
    )
