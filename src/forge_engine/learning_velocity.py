"""Learning-velocity signal: code the candidate studied and then changed."""

from __future__ import annotations

from forge_core.constants import LEARNING_SIGNALS, MODIFICATION_SIGNALS
from forge_core.models.artifact import ArtifactChunk, SourceType
from forge_engine.text import clamp01, normalize_text


def calculate_learning_velocity(chunks: list[ArtifactChunk]) -> float:
    """Return a [0, 1] score from code-host text only.

    Requires at least one learning phrase and one modification phrase;
    modification counts double.
    """
    text = normalize_text(" ".join(c.text for c in chunks if c.source == SourceType.GITHUB))
    if not text:
        return 0.0

    learning = sum(1 for phrase in LEARNING_SIGNALS if phrase in text)
    modification = sum(1 for phrase in MODIFICATION_SIGNALS if phrase in text)

    if learning == 0 or modification == 0:
        return 0.0
    return clamp01((learning + 2 * modification) / 10)
