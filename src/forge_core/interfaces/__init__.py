"""Public interface re-exports for forge_core."""

from forge_core.interfaces.cache import ArtifactCache
from forge_core.interfaces.code_host import CodeHostClient
from forge_core.interfaces.grader import EvidenceGrader

__all__ = [
    "ArtifactCache",
    "CodeHostClient",
    "EvidenceGrader",
]
