"""Tests for the Anthropic-backed evidence grader."""

from __future__ import annotations

import json

import httpx
import pytest
from anthropic import APIConnectionError

from forge_core.exceptions import GraderUnavailableError, GradingError
from forge_core.models.evidence import ProofTier
from forge_engine.graders.llm import LLMEvidenceGrader, parse_requirement_evidence
from forge_engine.prompts.evidence_grader import EVIDENCE_GRADER_REPAIR, EVIDENCE_GRADER_SYSTEM
from tests.mocks.mock_factories import make_chunk, make_requirement
from tests.mocks.mock_llm import FakeAnthropicClient
from tests.mocks.mock_settings import make_settings


def _payload(requirement_id: str = "req-react", tier: str = "STRONG_SIGNAL") -> str:
    return json.dumps(
        {
            "requirement_id": requirement_id,
            "items": [
                {
                    "requirement_id": requirement_id,
                    "proof_tier": tier,
                    "strength": 0.8,
                    "relevance": 0.9,
                    "recency": 0.7,
                    "snippet": "5 years of React experience",
                    "source": "resume",
                    "url": None,
                    "notes": None,
                }
            ],
        }
    )


def _connection_error() -> APIConnectionError:
    return APIConnectionError(
        request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    )


@pytest.mark.unit
class TestParseRequirementEvidence:
    """Test parse_requirement_evidence."""

    def test_valid_json(self) -> None:
        """Well-formed output parses into RequirementEvidence."""
        ev = parse_requirement_evidence(_payload(), "req-react")
        assert ev.items[0].proof_tier is ProofTier.STRONG_SIGNAL

    def test_prose_around_json(self) -> None:
        """Text around the JSON object is ignored."""
        ev = parse_requirement_evidence(f"Here you go:\n{_payload()}\nThanks!", "req-react")
        assert ev.requirement_id == "req-react"

    def test_not_json(self) -> None:
        """Non-JSON output is a schema violation."""
        with pytest.raises(ValueError):
            parse_requirement_evidence("I cannot grade this.", "req-react")

    def test_requirement_id_mismatch(self) -> None:
        """Evidence for a different requirement is rejected."""
        with pytest.raises(ValueError, match="does not match"):
            parse_requirement_evidence(_payload("req-other"), "req-react")


@pytest.mark.unit
class TestLLMEvidenceGrader:
    """Test LLMEvidenceGrader."""

    def test_requires_key_or_client(self) -> None:
        """Without an API key or client the grader is unavailable."""
        with pytest.raises(GraderUnavailableError):
            LLMEvidenceGrader(make_settings(anthropic_api_key=None))

    @pytest.mark.asyncio
    async def test_valid_first_response(self) -> None:
        """A valid first response needs one call."""
        client = FakeAnthropicClient([_payload()])
        grader = LLMEvidenceGrader(make_settings(), client=client)  # type: ignore[arg-type]

        ev = await grader.grade_requirement(make_requirement(), [make_chunk()])

        assert ev.items[0].snippet == "5 years of React experience"
        assert len(client.calls) == 1
        call = client.calls[0]
        assert call["model"] == "claude-haiku-4-5-20251001"
        assert call["system"] == EVIDENCE_GRADER_SYSTEM
        assert "req-react" in call["messages"][0]["content"]
        assert "5 years of React experience" in call["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_repair_retry(self) -> None:
        """An invalid response triggers exactly one repair prompt."""
        client = FakeAnthropicClient(["not json", _payload()])
        grader = LLMEvidenceGrader(make_settings(), client=client)  # type: ignore[arg-type]

        ev = await grader.grade_requirement(make_requirement(), [make_chunk()])

        assert ev.requirement_id == "req-react"
        assert len(client.calls) == 2
        assert client.calls[1]["messages"][0]["content"].endswith(EVIDENCE_GRADER_REPAIR)
        assert not client.calls[0]["messages"][0]["content"].endswith(EVIDENCE_GRADER_REPAIR)

    @pytest.mark.asyncio
    async def test_grading_error_after_two_failures(self) -> None:
        """Two schema violations raise GradingError instead of grading NONE."""
        client = FakeAnthropicClient(["not json", _payload(tier="MAYBE"), _payload()])
        grader = LLMEvidenceGrader(make_settings(), client=client)  # type: ignore[arg-type]

        with pytest.raises(GradingError) as exc_info:
            await grader.grade_requirement(make_requirement(), [make_chunk()])

        assert exc_info.value.requirement_id == "req-react"
        assert exc_info.value.attempts == 2
        assert len(client.calls) == 2

    @pytest.mark.asyncio
    async def test_transient_error_retried(self) -> None:
        """Connection errors are retried by the transport layer."""
        client = FakeAnthropicClient([_connection_error(), _payload()])
        grader = LLMEvidenceGrader(make_settings(), client=client)  # type: ignore[arg-type]

        ev = await grader.grade_requirement(make_requirement(), [make_chunk()])

        assert ev.requirement_id == "req-react"
        assert len(client.calls) == 2

    @pytest.mark.asyncio
    async def test_transient_error_exhausted(self) -> None:
        """Persistent connection errors propagate after the retry budget."""
        client = FakeAnthropicClient([_connection_error() for _ in range(3)])
        grader = LLMEvidenceGrader(make_settings(), client=client)  # type: ignore[arg-type]

        with pytest.raises(APIConnectionError):
            await grader.grade_requirement(make_requirement(), [make_chunk()])
        assert len(client.calls) == 3
