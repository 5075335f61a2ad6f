"""Text normalization and numeric helpers shared across the engine."""

from __future__ import annotations

import math
import re

_WHITESPACE_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def normalize_text(text: str) -> str:
    """Lowercase, collapse whitespace runs to single spaces, and strip."""
    return _WHITESPACE_RE.sub(" ", text.lower()).strip()


def tokenize(text: str) -> list[str]:
    """Split normalized text into alphanumeric tokens."""
    return _NON_ALNUM_RE.sub(" ", normalize_text(text)).split()


def clamp01(value: float) -> float:
    """Clamp a value into [0, 1]."""
    return max(0.0, min(1.0, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return math.floor(value + 0.5)
