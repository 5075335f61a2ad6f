"""Soft-skill context scoring from free text."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from forge_core.constants import (
    CONTEXT_BOOST,
    CONTEXT_CEILING,
    CONTEXT_MEDIUM_CAP,
    CONTEXT_MEDIUM_POINTS,
    CONTEXT_SIGNALS,
    CONTEXT_STRONG_CAP,
    CONTEXT_STRONG_POINTS,
    CONTEXT_WEAK_CAP,
    CONTEXT_WEAK_POINTS,
)
from forge_core.models.run import ContextScores, ContextWeights
from forge_engine.text import clamp01, normalize_text

# (tier name, points per hit, cap)
_TIER_POINTS: tuple[tuple[str, float, float], ...] = (
    ("strong", CONTEXT_STRONG_POINTS, CONTEXT_STRONG_CAP),
    ("medium", CONTEXT_MEDIUM_POINTS, CONTEXT_MEDIUM_CAP),
    ("weak", CONTEXT_WEAK_POINTS, CONTEXT_WEAK_CAP),
)


def _count_present(text: str, terms: Iterable[str]) -> int:
    return sum(1 for term in terms if term in text)


def keyword_tier_score(text: str, signals: Mapping[str, tuple[str, ...]]) -> float:
    """Score one dimension in [0, 1] from strong/medium/weak term hits.

    Each tier's contribution is capped so a pile of weak words cannot
    outweigh a single strong one.
    """
    normalized = normalize_text(text)
    points = 0.0
    for tier, per_hit, cap in _TIER_POINTS:
        points += min(_count_present(normalized, signals[tier]) * per_hit, cap)
    return clamp01(points / CONTEXT_CEILING)


def score_context_from_text(
    text: str,
    weights: ContextWeights | None = None,
) -> tuple[ContextScores, float]:
    """Score all four dimensions and their boosted weighted average."""
    weights = weights or ContextWeights()
    scores = ContextScores(
        **{dim: keyword_tier_score(text, signals) for dim, signals in CONTEXT_SIGNALS.items()}
    )

    pairs = [
        (scores.teamwork, weights.teamwork),
        (scores.communication, weights.communication),
        (scores.adaptability, weights.adaptability),
        (scores.ownership, weights.ownership),
    ]
    weight_sum = sum(w for _s, w in pairs)
    if weight_sum <= 0:
        return scores, 0.0

    average = sum(s * w for s, w in pairs) / weight_sum
    return scores, clamp01(average * CONTEXT_BOOST)
