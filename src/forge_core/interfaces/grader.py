"""Abstract evidence grader interface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from forge_core.models.artifact import ArtifactChunk
    from forge_core.models.evidence import RequirementEvidence
    from forge_core.models.job import Requirement


@runtime_checkable
class EvidenceGrader(Protocol):
    """Grades one requirement against its retrieved chunks.

    Implementations must only use the supplied chunks and should quote exact
    substrings as snippets; the engine verifies grounding either way.
    """

    async def grade_requirement(
        self,
        requirement: Requirement,
        retrieved_chunks: list[ArtifactChunk],
    ) -> RequirementEvidence:
        """Return graded evidence for a single requirement."""
        ...
