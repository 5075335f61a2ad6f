"""Scoring orchestrator: retrieve, grade, verify, corroborate, aggregate, gate."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, TypeVar

import structlog

from forge_core.constants import LEARNING_VELOCITY_BONUS_POINTS
from forge_core.models.run import ContextWeights, ForgeConfig, ForgeDebug, ForgeResult
from forge_engine.confidence import compute_confidence
from forge_engine.context import score_context_from_text
from forge_engine.corroboration import detect_corroboration
from forge_engine.gate import resolve_gate
from forge_engine.graders.deterministic import DeterministicGrader
from forge_engine.learning_velocity import calculate_learning_velocity
from forge_engine.observability import bind_scoring_context, clear_scoring_context
from forge_engine.retrieval import retrieve_top_chunks
from forge_engine.scoring import score_capability
from forge_engine.text import round_half_up
from forge_engine.verification import verify_evidence_snippets

if TYPE_CHECKING:
    from forge_core.interfaces.grader import EvidenceGrader
    from forge_core.models.artifact import ArtifactChunk
    from forge_core.models.evidence import RequirementEvidence
    from forge_core.models.job import JobSpec, Requirement

logger = structlog.get_logger()

T = TypeVar("T")


async def _gather_or_cancel(coros: Iterable[Awaitable[T]]) -> list[T]:
    """Await all coroutines in order; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(c) for c in coros]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def regate(
    result: ForgeResult,
    pool_scores: Sequence[float],
    config: ForgeConfig,
) -> ForgeResult:
    """Re-apply the gate to an existing result against a new pool."""
    decision = resolve_gate(result.capability_score_verified, config, pool_scores)
    debug = result.debug.model_copy(
        update={"tau_used": decision.tau, "tau_source": decision.source}
    )
    return result.model_copy(update={"pass_gate": decision.passed, "debug": debug})


def regate_pool(
    results: Mapping[str, ForgeResult],
    config: ForgeConfig,
) -> dict[str, ForgeResult]:
    """Gate each candidate against the verified scores of everyone else."""
    if not config.pool_relative_tau:
        return dict(results)

    regated: dict[str, ForgeResult] = {}
    for candidate_id, result in results.items():
        peers = [r.capability_score_verified for cid, r in results.items() if cid != candidate_id]
        regated[candidate_id] = regate(result, peers, config)
    return regated


class _EngineBase:
    """Stages shared by the sync and async engines."""

    def __init__(self, config: ForgeConfig | None = None) -> None:
        """Initialize with run configuration."""
        self.config = config or ForgeConfig()

    def _retrieve(
        self, requirement: Requirement, chunks: list[ArtifactChunk]
    ) -> list[ArtifactChunk]:
        return retrieve_top_chunks(requirement, chunks, self.config.top_k_chunks_per_req)

    def _refine(
        self,
        evidence: RequirementEvidence,
        retrieved: list[ArtifactChunk],
        chunks: list[ArtifactChunk],
    ) -> RequirementEvidence:
        """Verify grader output against retrieved chunks, then corroborate."""
        verified = verify_evidence_snippets(
            evidence, retrieved, strict=self.config.strict_evidence_mode
        )
        if not self.config.corroboration_boost:
            return verified
        return verified.model_copy(
            update={"items": detect_corroboration(verified.items, chunks)}
        )

    def _assemble_result(
        self,
        job: JobSpec,
        chunks: list[ArtifactChunk],
        matrix: list[RequirementEvidence],
        context_weights: ContextWeights | None,
        pool_scores: Sequence[float] | None,
    ) -> ForgeResult:
        capability = score_capability(job, matrix, soft_must_haves=self.config.soft_must_haves)
        decision = resolve_gate(capability.verified, self.config, pool_scores)

        context_scores, context_score = score_context_from_text(
            "\n".join(c.text for c in chunks), context_weights
        )

        velocity = (
            calculate_learning_velocity(chunks) if self.config.learning_velocity_boost else 0.0
        )
        bonus = LEARNING_VELOCITY_BONUS_POINTS * velocity
        forge_score = round_half_up((capability.verified + bonus) * context_score)

        corroborations = sum(1 for m in matrix for it in m.items if it.corroborated_by)

        return ForgeResult(
            capability_score_verified=capability.verified,
            capability_score_total=capability.total,
            pass_gate=decision.passed,
            missing_must_haves=capability.missing_must_haves,
            must_have_penalty=capability.must_have_penalty,
            context_scores=context_scores,
            context_score=context_score,
            forge_score=forge_score,
            confidence=compute_confidence(job, matrix),
            evidence_matrix=matrix,
            debug=ForgeDebug(
                tau_used=decision.tau,
                tau_source=decision.source,
                corroborations_applied=corroborations,
                learning_velocity_bonus=bonus,
            ),
        )

    def _log_start(self, job: JobSpec, chunks: list[ArtifactChunk]) -> None:
        logger.info(
            "forge_analysis_start",
            job_title=job.title,
            requirements=len(job.requirements),
            chunks=len(chunks),
        )

    def _log_end(self, result: ForgeResult, duration: float) -> None:
        logger.info(
            "forge_analysis_end",
            duration=round(duration, 3),
            verified=result.capability_score_verified,
            total=result.capability_score_total,
            pass_gate=result.pass_gate,
            tau=result.debug.tau_used,
            forge_score=result.forge_score,
        )


class ForgeEngine(_EngineBase):
    """Synchronous engine driven by the deterministic grader."""

    def __init__(
        self,
        config: ForgeConfig | None = None,
        grader: DeterministicGrader | None = None,
    ) -> None:
        """Initialize with configuration and a deterministic grader."""
        super().__init__(config)
        self.grader = grader or DeterministicGrader()

    def analyze(
        self,
        job: JobSpec,
        chunks: list[ArtifactChunk],
        context_weights: ContextWeights | None = None,
        pool_scores: Sequence[float] | None = None,
    ) -> ForgeResult:
        """Score one candidate's chunks against a job. Same input, same output."""
        start = time.monotonic()
        self._log_start(job, chunks)

        matrix: list[RequirementEvidence] = []
        for requirement in job.requirements:
            retrieved = self._retrieve(requirement, chunks)
            evidence = self.grader.grade(requirement, retrieved)
            matrix.append(self._refine(evidence, retrieved, chunks))

        result = self._assemble_result(job, chunks, matrix, context_weights, pool_scores)
        self._log_end(result, time.monotonic() - start)
        return result

    def score_pool(
        self,
        job: JobSpec,
        candidates: Mapping[str, list[ArtifactChunk]],
        context_weights: ContextWeights | None = None,
    ) -> dict[str, ForgeResult]:
        """Score every candidate, then gate each against the rest of the pool."""
        results: dict[str, ForgeResult] = {}
        for candidate_id, chunks in candidates.items():
            bind_scoring_context(candidate_id, job.title)
            try:
                results[candidate_id] = self.analyze(job, chunks, context_weights)
            finally:
                clear_scoring_context()
        return regate_pool(results, self.config)


class AsyncForgeEngine(_EngineBase):
    """Async engine for graders that call out to a model.

    Requirements are graded concurrently, bounded by one semaphore shared
    across every analysis this engine runs. A GradingError aborts the run.
    """

    def __init__(
        self,
        config: ForgeConfig | None = None,
        grader: EvidenceGrader | None = None,
        max_concurrency: int = 5,
    ) -> None:
        """Initialize with configuration, a grader, and a concurrency bound."""
        super().__init__(config)
        self.grader: EvidenceGrader = grader or DeterministicGrader()
        self._semaphore = asyncio.Semaphore(max_concurrency)

    async def analyze(
        self,
        job: JobSpec,
        chunks: list[ArtifactChunk],
        context_weights: ContextWeights | None = None,
        pool_scores: Sequence[float] | None = None,
    ) -> ForgeResult:
        """Score one candidate's chunks against a job."""
        start = time.monotonic()
        self._log_start(job, chunks)

        async def _grade(requirement: Requirement) -> RequirementEvidence:
            retrieved = self._retrieve(requirement, chunks)
            async with self._semaphore:
                evidence = await self.grader.grade_requirement(requirement, retrieved)
            return self._refine(evidence, retrieved, chunks)

        # Results keep input order, so the matrix follows requirement order
        matrix = await _gather_or_cancel(_grade(r) for r in job.requirements)

        result = self._assemble_result(job, chunks, matrix, context_weights, pool_scores)
        self._log_end(result, time.monotonic() - start)
        return result

    async def score_pool(
        self,
        job: JobSpec,
        candidates: Mapping[str, list[ArtifactChunk]],
        context_weights: ContextWeights | None = None,
    ) -> dict[str, ForgeResult]:
        """Score all candidates concurrently, then gate each against the others."""

        async def _score(candidate_id: str, chunks: list[ArtifactChunk]) -> ForgeResult:
            bind_scoring_context(candidate_id, job.title)
            try:
                return await self.analyze(job, chunks, context_weights)
            finally:
                clear_scoring_context()

        ids = list(candidates)
        scored = await _gather_or_cancel(_score(cid, candidates[cid]) for cid in ids)
        return regate_pool(dict(zip(ids, scored, strict=True)), self.config)
