"""Gate resolution: fixed or pool-relative capability threshold."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from forge_core.constants import (
    POOL_MIN_SIZE,
    POOL_PERCENTILE,
    POOL_TAU_MAX,
    POOL_TAU_MIN,
)
from forge_core.models.run import ForgeConfig

TauSource = Literal["fixed", "pool_relative"]


@dataclass(frozen=True)
class GateDecision:
    """Threshold applied to a candidate and whether they cleared it."""

    tau: float
    source: TauSource
    passed: bool


def compute_pool_relative_tau(
    pool_scores: Sequence[float],
    default_tau: float,
) -> tuple[float, TauSource]:
    """Use the pool's 40th percentile as tau, clamped to [25, 60].

    Pools smaller than three fall back to the fixed default.
    """
    if len(pool_scores) < POOL_MIN_SIZE:
        return default_tau, "fixed"

    ordered = sorted(pool_scores)
    p40 = ordered[math.floor(len(ordered) * POOL_PERCENTILE)]
    return max(POOL_TAU_MIN, min(POOL_TAU_MAX, p40)), "pool_relative"


def resolve_gate(
    verified_score: float,
    config: ForgeConfig,
    pool_scores: Sequence[float] | None = None,
) -> GateDecision:
    """Pick tau for this run and apply it to the verified score."""
    if config.pool_relative_tau and pool_scores:
        tau, source = compute_pool_relative_tau(pool_scores, config.capability_threshold)
    else:
        tau, source = config.capability_threshold, "fixed"
    return GateDecision(tau=tau, source=source, passed=verified_score >= tau)
