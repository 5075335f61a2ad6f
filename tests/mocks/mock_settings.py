"""Shared mock Settings factory."""

from __future__ import annotations

from unittest.mock import MagicMock

from pydantic import SecretStr


def make_settings(**overrides: object) -> MagicMock:
    """Create a mock Settings with sensible defaults.

    Retry waits are zero so transport-retry tests do not sleep. Override any
    attribute via keyword arguments.
    """
    settings = MagicMock()
    settings.anthropic_api_key = SecretStr("sk-test")
    settings.grader_model = "claude-haiku-4-5-20251001"
    settings.grader_max_tokens = 1500
    settings.grader_temperature = 0.1
    settings.llm_max_retries = 3
    settings.llm_retry_wait_min = 0
    settings.llm_retry_wait_max = 0
    settings.max_concurrent_gradings = 5
    settings.capability_threshold = 40
    settings.top_k_chunks_per_req = 8
    settings.strict_evidence_mode = False
    settings.pool_relative_tau = True
    settings.soft_must_haves = True
    settings.corroboration_boost = True
    settings.learning_velocity_boost = True
    settings.claim_fallback_strength = 0.2
    settings.code_host_cache_ttl_seconds = 600
    settings.log_level = "INFO"
    settings.log_format = "console"

    for key, value in overrides.items():
        setattr(settings, key, value)

    return settings
