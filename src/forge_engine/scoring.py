"""Requirement scoring and weighted capability aggregation."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field

from forge_core.constants import (
    MUST_HAVE_MAX_PENALTY,
    MUST_HAVE_MIN_SCORE,
    MUST_HAVE_PENALTY_POINTS,
    PROOF_MULTIPLIER,
    PROOF_MULTIPLIER_VERIFIED,
    RECENCY_FLOOR,
    TOP_ITEM_WEIGHTS,
)
from forge_core.models.evidence import EvidenceItem, ProofTier, RequirementEvidence
from forge_core.models.job import JobSpec
from forge_engine.text import clamp01, round_half_up


@dataclass(frozen=True)
class CapabilityScore:
    """Aggregated capability scores for one candidate."""

    verified: int
    total: int
    missing_must_haves: list[str] = field(default_factory=list)
    must_have_penalty: int = 0


def recency_factor(recency: float) -> float:
    """Gentle decay that never zeroes out old but valid evidence."""
    return RECENCY_FLOOR + (1 - RECENCY_FLOOR) * math.sqrt(clamp01(recency))


def item_score(item: EvidenceItem, multipliers: Mapping[ProofTier, float]) -> float:
    """Score one item: tier multiplier x strength x relevance x recency factor."""
    return (
        multipliers[item.proof_tier]
        * clamp01(item.strength)
        * clamp01(item.relevance)
        * recency_factor(item.recency)
    )


def score_requirement(items: list[EvidenceItem], verified_only: bool = False) -> float:
    """Reduce a requirement's items to one score in [0, 1].

    The best three item scores are combined with weights 0.6/0.3/0.1,
    renormalized when fewer than three items exist.
    """
    multipliers = PROOF_MULTIPLIER_VERIFIED if verified_only else PROOF_MULTIPLIER
    scores = sorted((item_score(it, multipliers) for it in items), reverse=True)

    if not scores:
        return 0.0
    if len(scores) == 1:
        return scores[0]

    top = list(zip(scores, TOP_ITEM_WEIGHTS, strict=False))
    weight_sum = sum(w for _s, w in top)
    return sum(s * w for s, w in top) / weight_sum


def score_capability(
    job: JobSpec,
    matrix: list[RequirementEvidence],
    soft_must_haves: bool = True,
) -> CapabilityScore:
    """Weight per-requirement scores into 0-100 verified and total scores."""
    by_req = {m.requirement_id: m for m in matrix}

    weighted_verified = 0.0
    weighted_total = 0.0
    missing_must_haves: list[str] = []
    weight_total = job.total_weight

    for req in job.requirements:
        evidence = by_req.get(req.id)
        items = evidence.items if evidence else []
        req_verified = score_requirement(items, verified_only=True)
        req_total = score_requirement(items, verified_only=False)

        weighted_verified += req.weight * req_verified
        weighted_total += req.weight * req_total

        if req.importance == "must" and req_verified < MUST_HAVE_MIN_SCORE:
            missing_must_haves.append(req.label)

    score_verified = weighted_verified / weight_total * 100 if weight_total > 0 else 0.0
    score_total = weighted_total / weight_total * 100 if weight_total > 0 else 0.0

    penalty = 0
    if soft_must_haves and missing_must_haves:
        penalty = min(len(missing_must_haves) * MUST_HAVE_PENALTY_POINTS, MUST_HAVE_MAX_PENALTY)

    return CapabilityScore(
        verified=round_half_up(max(0.0, score_verified - penalty)),
        total=round_half_up(score_total),
        missing_must_haves=missing_must_haves,
        must_have_penalty=penalty,
    )
