"""Domain models for the forge scoring engine."""

from forge_core.models.artifact import ArtifactChunk, SourceType
from forge_core.models.code_host import CodeHostRepo, CodeHostUser
from forge_core.models.evidence import EvidenceItem, ProofTier, RequirementEvidence
from forge_core.models.job import JobSpec, Requirement
from forge_core.models.run import (
    ContextScores,
    ContextWeights,
    ForgeConfig,
    ForgeDebug,
    ForgeResult,
)

__all__ = [
    "ArtifactChunk",
    "CodeHostRepo",
    "CodeHostUser",
    "ContextScores",
    "ContextWeights",
    "EvidenceItem",
    "ForgeConfig",
    "ForgeDebug",
    "ForgeResult",
    "JobSpec",
    "ProofTier",
    "Requirement",
    "RequirementEvidence",
    "SourceType",
]
