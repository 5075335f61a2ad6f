"""Observability: structured logging and scoring context."""

from forge_engine.observability.logging import (
    bind_scoring_context,
    clear_scoring_context,
    configure_logging,
)

__all__ = [
    "bind_scoring_context",
    "clear_scoring_context",
    "configure_logging",
]
