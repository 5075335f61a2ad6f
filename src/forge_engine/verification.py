"""Anti-hallucination check: graded snippets must be grounded in retrieved chunks."""

from __future__ import annotations

import structlog

from forge_core.constants import (
    DOWNGRADE_MAX_RELEVANCE,
    DOWNGRADE_MAX_STRENGTH,
    TIER_DOWNGRADE,
    VERIFY_MIN_EXACT_LENGTH,
    VERIFY_MIN_MATCH_RATIO,
    VERIFY_MIN_TERM_LENGTH,
)
from forge_core.models.artifact import ArtifactChunk
from forge_core.models.evidence import EvidenceItem, ProofTier, RequirementEvidence
from forge_engine.text import normalize_text

logger = structlog.get_logger()

STRICT_NOTE = "Snippet not found; strict mode => NONE."
DOWNGRADE_NOTE = "Snippet partially matched; downgraded."


def append_note(notes: str | None, note: str) -> str:
    """Append a note to existing notes using ' | ' as separator."""
    return f"{notes} | {note}" if notes else note


def is_grounded(snippet: str, corpus: str) -> bool:
    """Whether a snippet is supported by a normalized corpus.

    Grounded when at least half of its long terms occur in the corpus, or when
    the whole normalized snippet (8+ chars) is an exact substring.
    """
    normalized = normalize_text(snippet)
    terms = [t for t in normalized.split(" ") if len(t) >= VERIFY_MIN_TERM_LENGTH]
    matched = sum(1 for t in terms if t in corpus)
    ratio = matched / len(terms) if terms else 0.0
    if ratio >= VERIFY_MIN_MATCH_RATIO:
        return True
    return len(normalized) >= VERIFY_MIN_EXACT_LENGTH and normalized in corpus


def verify_evidence_snippets(
    evidence: RequirementEvidence,
    retrieved_chunks: list[ArtifactChunk],
    strict: bool = False,
) -> RequirementEvidence:
    """Return new evidence with ungrounded items downgraded (or nulled in strict mode).

    Never raises; lowering confidence in an item is the recovery path.
    """
    corpus = normalize_text("\n".join(c.text for c in retrieved_chunks))
    verified: list[EvidenceItem] = []
    rejected = 0

    for item in evidence.items:
        if is_grounded(item.snippet, corpus):
            verified.append(item)
            continue

        rejected += 1
        verified.append(_strict_reject(item) if strict else _downgrade(item))

    if rejected:
        logger.debug(
            "snippets_ungrounded",
            requirement_id=evidence.requirement_id,
            rejected=rejected,
            strict=strict,
        )

    return evidence.model_copy(update={"items": verified})


def _strict_reject(item: EvidenceItem) -> EvidenceItem:
    return item.model_copy(
        update={
            "proof_tier": ProofTier.NONE,
            "strength": 0.0,
            "relevance": 0.0,
            "recency": 0.0,
            "notes": append_note(item.notes, STRICT_NOTE),
        }
    )


def _downgrade(item: EvidenceItem) -> EvidenceItem:
    return item.model_copy(
        update={
            "proof_tier": TIER_DOWNGRADE[item.proof_tier],
            "strength": min(item.strength, DOWNGRADE_MAX_STRENGTH),
            "relevance": min(item.relevance, DOWNGRADE_MAX_RELEVANCE),
            "notes": append_note(item.notes, DOWNGRADE_NOTE),
        }
    )
