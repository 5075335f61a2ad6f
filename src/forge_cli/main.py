"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog
import typer
from anthropic import APIError
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from forge_core.config.settings import Settings
from forge_core.exceptions import GradingError
from forge_core.models.artifact import ArtifactChunk, SourceType
from forge_core.models.job import JobSpec
from forge_core.models.run import ForgeResult
from forge_engine.chunking import chunk_text
from forge_engine.graders.deterministic import DeterministicGrader
from forge_engine.graders.llm import LLMEvidenceGrader
from forge_engine.ingest import ingest_portfolio, ingest_resume, ingest_writing
from forge_engine.observability import configure_logging
from forge_engine.orchestrator.engine import AsyncForgeEngine, ForgeEngine

app = typer.Typer(
    name="forge",
    help="Evidence-based capability scoring and gating",
)
console = Console()
logger = structlog.get_logger()

GRADING_FAILED_EXIT_CODE = 2


@app.command()
def score(
    job_spec: Path = typer.Argument(..., help="Path to job spec JSON", exists=True),
    resume: Path | None = typer.Option(None, "--resume", help="Resume text file", exists=True),
    code_host: Path | None = typer.Option(
        None, "--code-host", help="Exported code-host profile/repository text", exists=True
    ),
    portfolio: Path | None = typer.Option(
        None, "--portfolio", help="Portfolio text file", exists=True
    ),
    writing: Path | None = typer.Option(
        None, "--writing", help="Technical writing text file", exists=True
    ),
    pool_scores: str | None = typer.Option(
        None, "--pool-scores", help="Comma-separated verified scores of the candidate pool"
    ),
    threshold: float | None = typer.Option(
        None, "--threshold", help="Fixed gate threshold (0-100)"
    ),
    strict: bool = typer.Option(False, "--strict", help="Null out ungrounded snippets"),
    llm: bool = typer.Option(False, "--llm", help="Grade with the Anthropic model"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Score one candidate against a job spec."""
    settings = Settings()  # type: ignore[call-arg]
    if verbose:
        settings.log_level = "DEBUG"
    if threshold is not None:
        settings.capability_threshold = threshold
    if strict:
        settings.strict_evidence_mode = True
    configure_logging(settings)

    try:
        config = settings.to_forge_config()
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid options: {e.error_count()} validation error(s)")
        raise typer.Exit(code=1) from e

    try:
        job = JobSpec.model_validate_json(job_spec.read_text())
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid job spec: {e.error_count()} validation error(s)")
        raise typer.Exit(code=1) from e

    try:
        pool = _parse_pool_scores(pool_scores)
    except ValueError as e:
        console.print(f"[red]Error:[/red] Invalid --pool-scores: {pool_scores}")
        raise typer.Exit(code=1) from e

    chunks = _load_chunks(resume, code_host, portfolio, writing)
    if not chunks:
        console.print("[red]Error:[/red] No evidence supplied (all sources empty or too short)")
        raise typer.Exit(code=1)

    if llm and not settings.has_llm:
        console.print(
            "[yellow]FORGE_ANTHROPIC_API_KEY not set; using deterministic grader[/yellow]"
        )

    if llm and settings.has_llm:
        engine = AsyncForgeEngine(
            config,
            grader=LLMEvidenceGrader(settings),
            max_concurrency=settings.max_concurrent_gradings,
        )
        try:
            result = asyncio.run(engine.analyze(job, chunks, pool_scores=pool))
        except GradingError as e:
            console.print(
                f"[red]Grading failed:[/red] requirement '{e.requirement_id}' "
                f"after {e.attempts} attempts"
            )
            raise typer.Exit(code=GRADING_FAILED_EXIT_CODE) from e
        except APIError as e:
            console.print(f"[red]Grading failed:[/red] model API error: {e.message}")
            raise typer.Exit(code=GRADING_FAILED_EXIT_CODE) from e
    else:
        grader = DeterministicGrader(claim_fallback_strength=settings.claim_fallback_strength)
        result = ForgeEngine(config, grader=grader).analyze(job, chunks, pool_scores=pool)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        _print_summary(job, result)


@app.command()
def version() -> None:
    """Show version."""
    console.print("forge-scoring v0.1.0")


def _parse_pool_scores(raw: str | None) -> list[float] | None:
    """Parse '40,55,62' into floats; blank input means no pool."""
    if not raw or not raw.strip():
        return None
    return [float(part) for part in raw.split(",") if part.strip()]


def _load_chunks(
    resume: Path | None,
    code_host: Path | None,
    portfolio: Path | None,
    writing: Path | None,
) -> list[ArtifactChunk]:
    """Read and chunk every supplied source file, in a fixed order."""
    chunks: list[ArtifactChunk] = []
    if resume:
        chunks.extend(ingest_resume(resume.read_text()))
    if code_host:
        text = code_host.read_text()
        if text.strip():
            chunks.extend(chunk_text(text, SourceType.GITHUB))
    if portfolio:
        chunks.extend(ingest_portfolio(portfolio.read_text()))
    if writing:
        chunks.extend(ingest_writing(writing.read_text()))
    return chunks


def _print_summary(job: JobSpec, result: ForgeResult) -> None:
    """Render the headline scores and per-requirement best evidence."""
    gate = "[green]PASS[/green]" if result.pass_gate else "[red]FAIL[/red]"
    console.print(f"\n[bold]{job.title}[/bold]  gate: {gate}")
    console.print(
        f"  Verified: {result.capability_score_verified}  "
        f"Total: {result.capability_score_total}  "
        f"Forge: {result.forge_score}  "
        f"Confidence: {result.confidence:.2f}"
    )
    console.print(f"  Tau: {result.debug.tau_used:g} ({result.debug.tau_source})")
    if result.missing_must_haves:
        console.print(
            f"  [yellow]Missing must-haves:[/yellow] {', '.join(result.missing_must_haves)} "
            f"(-{result.must_have_penalty})"
        )

    labels = {r.id: r.label for r in job.requirements}
    table = Table(title="Evidence")
    table.add_column("Requirement")
    table.add_column("Best tier")
    table.add_column("Source")
    table.add_column("Snippet", overflow="fold")

    for evidence in result.evidence_matrix:
        best = max(evidence.items, key=lambda it: it.proof_tier.rank, default=None)
        if best is None:
            label = labels.get(evidence.requirement_id, evidence.requirement_id)
            table.add_row(label, "-", "-", "")
            continue
        table.add_row(
            labels.get(evidence.requirement_id, evidence.requirement_id),
            best.proof_tier.value,
            best.source.value,
            best.snippet[:120],
        )
    console.print(table)


if __name__ == "__main__":
    app()
