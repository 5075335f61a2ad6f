"""External evidence grader backed by the Anthropic Messages API."""

from __future__ import annotations

import json
import re
import time
from typing import TYPE_CHECKING

import structlog
from anthropic import (
    APIConnectionError,
    AsyncAnthropic,
    InternalServerError,
    RateLimitError,
)
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from forge_core.exceptions import GraderUnavailableError, GradingError
from forge_core.models.evidence import RequirementEvidence
from forge_engine.prompts.evidence_grader import (
    EVIDENCE_GRADER_REPAIR,
    EVIDENCE_GRADER_SYSTEM,
    EVIDENCE_GRADER_USER,
)

if TYPE_CHECKING:
    from forge_core.config.settings import Settings
    from forge_core.models.artifact import ArtifactChunk
    from forge_core.models.job import Requirement

logger = structlog.get_logger()

# First attempt plus exactly one repair retry
SCHEMA_ATTEMPTS = 2

_TRANSIENT_ERRORS = (APIConnectionError, RateLimitError, InternalServerError)
_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def parse_requirement_evidence(text: str, requirement_id: str) -> RequirementEvidence:
    """Validate grader output against the RequirementEvidence schema.

    Tolerates prose around the outermost JSON object. Raises ValueError
    (pydantic's ValidationError included) on any schema violation.
    """
    match = _JSON_OBJECT_RE.search(text)
    payload = match.group(0) if match else text
    evidence = RequirementEvidence.model_validate_json(payload)
    if evidence.requirement_id != requirement_id:
        msg = f"requirement_id '{evidence.requirement_id}' does not match '{requirement_id}'"
        raise ValueError(msg)
    return evidence


def extract_token_usage(response: object) -> tuple[int, int]:
    """Extract input/output token counts, falling back to (0, 0)."""
    usage = getattr(response, "usage", None)
    if usage is None:
        return (0, 0)
    input_tokens = getattr(usage, "input_tokens", 0) or 0
    output_tokens = getattr(usage, "output_tokens", 0) or 0
    return (int(input_tokens), int(output_tokens))


class LLMEvidenceGrader:
    """Grade requirements with a language model, retrying once on schema violations."""

    grader_name = "llm"

    def __init__(self, settings: Settings, client: AsyncAnthropic | None = None) -> None:
        """Initialize with settings and an optional pre-built client."""
        self.settings = settings
        if client is None:
            if settings.anthropic_api_key is None:
                msg = "anthropic_api_key is required for the LLM grader"
                raise GraderUnavailableError(msg)
            client = AsyncAnthropic(api_key=settings.anthropic_api_key.get_secret_value())
        self._client = client

    async def grade_requirement(
        self,
        requirement: Requirement,
        retrieved_chunks: list[ArtifactChunk],
    ) -> RequirementEvidence:
        """Grade one requirement; raise GradingError after the repair retry fails."""
        base_prompt = self._build_prompt(requirement, retrieved_chunks)
        prompt = base_prompt
        last_error = ""

        for attempt in range(1, SCHEMA_ATTEMPTS + 1):
            text = await self._call_llm(prompt)
            try:
                return parse_requirement_evidence(text, requirement.id)
            except ValueError as e:
                last_error = str(e)
                logger.warning(
                    "grader_schema_violation",
                    grader=self.grader_name,
                    requirement_id=requirement.id,
                    attempt=attempt,
                    error=last_error[:500],
                )
                prompt = base_prompt + EVIDENCE_GRADER_REPAIR

        raise GradingError(requirement.id, SCHEMA_ATTEMPTS, last_error)

    def _build_prompt(
        self,
        requirement: Requirement,
        retrieved_chunks: list[ArtifactChunk],
    ) -> str:
        """Render the user prompt with the requirement and its chunks."""
        chunks_payload = [
            {"source": c.source.value, "url": c.url, "text": c.text} for c in retrieved_chunks
        ]
        return EVIDENCE_GRADER_USER.format(
            requirement_json=requirement.model_dump_json(),
            chunks_json=json.dumps(chunks_payload, ensure_ascii=False),
        )

    async def _call_llm(self, prompt: str) -> str:
        """Send one prompt and return the concatenated text blocks.

        Transient transport errors are retried with exponential backoff.
        """

        @retry(
            stop=stop_after_attempt(self.settings.llm_max_retries),
            wait=wait_exponential(
                multiplier=1,
                min=self.settings.llm_retry_wait_min,
                max=self.settings.llm_retry_wait_max,
            ),
            retry=retry_if_exception_type(_TRANSIENT_ERRORS),
            reraise=True,
        )
        async def _do_call() -> object:
            return await self._client.messages.create(
                model=self.settings.grader_model,
                max_tokens=self.settings.grader_max_tokens,
                temperature=self.settings.grader_temperature,
                system=EVIDENCE_GRADER_SYSTEM,
                messages=[{"role": "user", "content": prompt}],
            )

        start = time.monotonic()
        response = await _do_call()
        elapsed = time.monotonic() - start

        input_tokens, output_tokens = extract_token_usage(response)
        logger.debug(
            "llm_call_complete",
            grader=self.grader_name,
            model=self.settings.grader_model,
            duration=round(elapsed, 2),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

        blocks = getattr(response, "content", None) or []
        return "".join(
            getattr(block, "text", "") for block in blocks if getattr(block, "type", "") == "text"
        )
