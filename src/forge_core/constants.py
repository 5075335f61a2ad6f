"""Shared constants and lookup tables for the forge scoring engine."""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

from forge_core.models.evidence import ProofTier

# Proof tier multipliers for the auxiliary "total" score
PROOF_MULTIPLIER: Final = MappingProxyType(
    {
        ProofTier.VERIFIED_ARTIFACT: 1.0,  # Owned repos, deployed projects
        ProofTier.STRONG_SIGNAL: 0.7,  # Portfolio, contributions, corroborated claims
        ProofTier.WEAK_SIGNAL: 0.4,  # Profile network, plausible but uncorroborated
        ProofTier.CLAIM_ONLY: 0.15,
        ProofTier.NONE: 0.0,
    }
)

# Proof tier multipliers for the gated "verified" score; claims count for nothing
PROOF_MULTIPLIER_VERIFIED: Final = MappingProxyType(
    {
        ProofTier.VERIFIED_ARTIFACT: 1.0,
        ProofTier.STRONG_SIGNAL: 0.7,
        ProofTier.WEAK_SIGNAL: 0.4,
        ProofTier.CLAIM_ONLY: 0.0,
        ProofTier.NONE: 0.0,
    }
)

# One-step moves through the tier ladder
TIER_UPGRADE: Final = MappingProxyType(
    {
        ProofTier.VERIFIED_ARTIFACT: ProofTier.VERIFIED_ARTIFACT,
        ProofTier.STRONG_SIGNAL: ProofTier.VERIFIED_ARTIFACT,
        ProofTier.WEAK_SIGNAL: ProofTier.STRONG_SIGNAL,
        ProofTier.CLAIM_ONLY: ProofTier.WEAK_SIGNAL,
        ProofTier.NONE: ProofTier.NONE,
    }
)
TIER_DOWNGRADE: Final = MappingProxyType(
    {
        ProofTier.VERIFIED_ARTIFACT: ProofTier.STRONG_SIGNAL,
        ProofTier.STRONG_SIGNAL: ProofTier.WEAK_SIGNAL,
        ProofTier.WEAK_SIGNAL: ProofTier.CLAIM_ONLY,
        ProofTier.CLAIM_ONLY: ProofTier.CLAIM_ONLY,
        ProofTier.NONE: ProofTier.NONE,
    }
)

# Deterministic grader base strength per inferred tier
TIER_BASE_STRENGTH: Final = MappingProxyType(
    {
        ProofTier.VERIFIED_ARTIFACT: 0.9,
        ProofTier.STRONG_SIGNAL: 0.75,
        ProofTier.WEAK_SIGNAL: 0.5,
        ProofTier.CLAIM_ONLY: 0.3,
        ProofTier.NONE: 0.0,
    }
)

# Chunking
CHUNK_SIZE_CHARS = 800
MIN_INGEST_CHARS = 50

# Retrieval
DEFAULT_TOP_K_CHUNKS = 8

# Deterministic grader
SNIPPET_CONTEXT_BEFORE = 50
SNIPPET_CONTEXT_AFTER = 100
DEFAULT_CLAIM_FALLBACK_STRENGTH = 0.2

# Snippet verification
VERIFY_MIN_TERM_LENGTH = 5
VERIFY_MIN_MATCH_RATIO = 0.5
VERIFY_MIN_EXACT_LENGTH = 8
DOWNGRADE_MAX_STRENGTH = 0.5
DOWNGRADE_MAX_RELEVANCE = 0.6

# Corroboration
CORROBORATION_MAX_TERMS = 10
CORROBORATION_CODE_HOST_MIN_MATCHES = 3
CORROBORATION_PORTFOLIO_MIN_MATCHES = 2

# Requirement scoring: best, second, third item
TOP_ITEM_WEIGHTS: Final = (0.6, 0.3, 0.1)
RECENCY_FLOOR = 0.3

# Capability aggregation
MUST_HAVE_MIN_SCORE = 0.25
MUST_HAVE_PENALTY_POINTS = 15
MUST_HAVE_MAX_PENALTY = 45

# Gate
DEFAULT_CAPABILITY_THRESHOLD = 40
POOL_MIN_SIZE = 3
POOL_PERCENTILE = 0.4
POOL_TAU_MIN = 25
POOL_TAU_MAX = 60

# Context scoring
CONTEXT_STRONG_POINTS = 3.0
CONTEXT_STRONG_CAP = 15.0
CONTEXT_MEDIUM_POINTS = 1.5
CONTEXT_MEDIUM_CAP = 7.5
CONTEXT_WEAK_POINTS = 0.5
CONTEXT_WEAK_CAP = 1.5
CONTEXT_CEILING = 24.0
CONTEXT_BOOST = 1.15

CONTEXT_SIGNALS: Final = MappingProxyType(
    {
        "teamwork": MappingProxyType(
            {
                "strong": (
                    "collaborated",
                    "cross-functional",
                    "pair programming",
                    "code review",
                    "mentored",
                    "team lead",
                ),
                "medium": ("team", "worked with", "alongside", "together", "group"),
                "weak": ("we", "our", "helped"),
            }
        ),
        "communication": MappingProxyType(
            {
                "strong": (
                    "documentation",
                    "technical writing",
                    "design doc",
                    "rfc",
                    "presented",
                    "blog post",
                    "published",
                ),
                "medium": ("readme", "explained", "stakeholder", "communicated", "wrote"),
                "weak": ("meeting", "discussed", "shared"),
            }
        ),
        "adaptability": MappingProxyType(
            {
                "strong": (
                    "migrated",
                    "refactored",
                    "learned new",
                    "pivoted",
                    "transformed",
                    "modernized",
                ),
                "medium": (
                    "adapted",
                    "multiple stacks",
                    "various technologies",
                    "different",
                    "switched",
                ),
                "weak": ("changed", "updated", "new"),
            }
        ),
        "ownership": MappingProxyType(
            {
                "strong": (
                    "owned end-to-end",
                    "led",
                    "architected",
                    "launched",
                    "shipped to production",
                    "drove",
                ),
                "medium": ("responsible for", "maintained", "primary owner", "built"),
                "weak": ("worked on", "contributed", "involved"),
            }
        ),
    }
)

# Learning velocity (code-host text only)
LEARNING_SIGNALS: Final = (
    "forked from",
    "based on",
    "inspired by",
    "learning",
    "tutorial",
    "course",
    "bootcamp",
    "self-taught",
    "practicing",
    "experimenting",
)
MODIFICATION_SIGNALS: Final = (
    "modified",
    "customized",
    "extended",
    "added",
    "improved",
    "refactored",
    "updated",
    "enhanced",
    "built on top",
)
LEARNING_VELOCITY_BONUS_POINTS = 5.0

# Confidence
CONFIDENCE_DEPTH_SATURATION_ITEMS = 40

# Code-host ingestion
CODE_HOST_MAX_REPOS = 10
CODE_HOST_CACHE_TTL_SECONDS = 600
