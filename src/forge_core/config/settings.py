"""Application settings using pydantic-settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from forge_core.models.run import ForgeConfig


class Settings(BaseSettings):
    """Central configuration for the forge scoring engine."""

    model_config = SettingsConfigDict(env_prefix="FORGE_", env_file=".env")

    # --- External grader ---
    anthropic_api_key: SecretStr | None = Field(
        default=None,
        description="Anthropic API key; the deterministic grader is used when unset",
    )
    grader_model: str = Field(
        default="claude-haiku-4-5-20251001",
        description="Model ID for evidence grading calls",
    )
    grader_max_tokens: int = Field(
        default=1500,
        description="Maximum output tokens per grading call",
    )
    grader_temperature: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Sampling temperature for grading calls",
    )
    llm_max_retries: int = Field(
        default=3,
        ge=1,
        description="Attempts per grading call on transport errors",
    )
    llm_retry_wait_min: float = Field(
        default=1.0,
        description="Minimum retry wait in seconds",
    )
    llm_retry_wait_max: float = Field(
        default=10.0,
        description="Maximum retry wait in seconds",
    )
    max_concurrent_gradings: int = Field(
        default=5,
        ge=1,
        description="Maximum grading calls in flight per candidate",
    )

    # --- Scoring ---
    capability_threshold: float = Field(
        default=40,
        ge=0,
        le=100,
        description="Fixed gate threshold (tau)",
    )
    top_k_chunks_per_req: int = Field(
        default=8,
        ge=1,
        description="Chunks retrieved per requirement",
    )
    strict_evidence_mode: bool = Field(
        default=False,
        description="Ungrounded snippets become NONE instead of being downgraded",
    )
    pool_relative_tau: bool = Field(
        default=True,
        description="Derive tau from pool scores when at least three are supplied",
    )
    soft_must_haves: bool = Field(
        default=True,
        description="Subtract points for missing must-haves",
    )
    corroboration_boost: bool = Field(
        default=True,
        description="Upgrade claims corroborated by code-host or portfolio text",
    )
    learning_velocity_boost: bool = Field(
        default=True,
        description="Add a bonus for learning-plus-modification signals",
    )
    claim_fallback_strength: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Strength of the deterministic grader's related-mention fallback",
    )

    # --- Ingestion ---
    code_host_cache_ttl_seconds: int = Field(
        default=600,
        ge=0,
        description="How long ingested code-host chunks stay cached",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer",
    )

    @model_validator(mode="after")
    def validate_retry_window(self) -> Settings:
        """Ensure the retry wait window is well-formed."""
        if self.llm_retry_wait_min > self.llm_retry_wait_max:
            msg = (
                f"llm_retry_wait_min ({self.llm_retry_wait_min}) "
                f"> llm_retry_wait_max ({self.llm_retry_wait_max})"
            )
            raise ValueError(msg)
        return self

    @property
    def has_llm(self) -> bool:
        """Whether an external grader can be constructed."""
        return self.anthropic_api_key is not None

    def to_forge_config(self) -> ForgeConfig:
        """Build the per-run scoring config from these settings."""
        return ForgeConfig(
            capability_threshold=self.capability_threshold,
            top_k_chunks_per_req=self.top_k_chunks_per_req,
            strict_evidence_mode=self.strict_evidence_mode,
            pool_relative_tau=self.pool_relative_tau,
            soft_must_haves=self.soft_must_haves,
            corroboration_boost=self.corroboration_boost,
            learning_velocity_boost=self.learning_velocity_boost,
        )
