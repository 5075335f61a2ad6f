"""Lexical set similarity for keyword-baseline retrieval."""

from __future__ import annotations

from collections.abc import Iterable


def jaccard_similarity(tokens_a: Iterable[str], tokens_b: Iterable[str]) -> float:
    """Compute Jaccard similarity (intersection over union) of two token sets."""
    set_a = set(tokens_a)
    set_b = set(tokens_b)
    union = len(set_a | set_b)
    if union == 0:
        return 0.0
    return len(set_a & set_b) / union


def find_top_k_similar(
    query: list[str],
    candidates: list[tuple[str, list[str]]],
    top_k: int = 8,
) -> list[tuple[str, float]]:
    """Find top-K candidates by Jaccard similarity to the query tokens.

    Args:
        query: Tokens of the query.
        candidates: List of (id, tokens) tuples, in original order.
        top_k: Number of top results to return.

    Returns:
        List of (id, similarity_score) tuples, sorted by score descending.
        Equal scores keep their original order.
    """
    if not candidates or top_k <= 0:
        return []

    query_set = set(query)
    scores: list[tuple[str, float]] = [
        (candidate_id, jaccard_similarity(query_set, tokens))
        for candidate_id, tokens in candidates
    ]

    # list.sort is stable, so ties stay in input order
    scores.sort(key=lambda x: x[1], reverse=True)
    return scores[:top_k]
