"""Score a small demo candidate pool end to end with the deterministic grader."""

from __future__ import annotations

import asyncio
import os
import sys
from datetime import UTC, datetime
from pathlib import Path

os.environ.setdefault("FORGE_LOG_LEVEL", "WARNING")
os.environ.setdefault("FORGE_LOG_FORMAT", "console")

project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))
os.chdir(project_root)

RESUME_JANE = """\
Jane Dev - Senior Frontend Engineer
5 years of React experience building analytics dashboards.
Led the migration from a legacy jQuery app to React and TypeScript.
Mentored two junior engineers and ran weekly code review sessions.
"""

RESUME_SAM = """\
Sam Smith - Full Stack Developer
Worked on internal tools with React and Node.js. Familiar with GraphQL.
Helped the team ship features and wrote documentation for the API.
"""

PORTFOLIO_SAM = """\
Case study: GraphQL gateway for a logistics startup, live at https://sam.dev/gateway.
Built schema stitching and caching; responsible for the production rollout.
"""


class DemoCodeHostClient:
    """Canned code-host data standing in for a live API client."""

    async def get_user(self, username: str) -> object:
        """Return a fixed profile."""
        from forge_core.models.code_host import CodeHostUser

        return CodeHostUser(
            login=username,
            name="Jane Dev",
            bio="Frontend engineer. Learning Rust on weekends.",
            public_repos=12,
            followers=40,
        )

    async def get_repos(self, username: str) -> list[object]:
        """Return a few owned repositories and a fork."""
        from forge_core.models.code_host import CodeHostRepo

        return [
            CodeHostRepo(
                name="react-dashboards",
                description="Analytics dashboards built with React over 5 years of experience",
                language="TypeScript",
                stargazers_count=85,
                updated_at=datetime(2025, 3, 1, tzinfo=UTC),
                topics=["react", "typescript", "dashboards"],
                html_url=f"https://github.com/{username}/react-dashboards",
            ),
            CodeHostRepo(
                name="rust-playground",
                description="Forked from a tutorial, then extended with added benchmarks",
                language="Rust",
                stargazers_count=3,
                html_url=f"https://github.com/{username}/rust-playground",
            ),
            CodeHostRepo(
                name="upstream-lib",
                description="Fork of a popular library",
                stargazers_count=900,
                html_url=f"https://github.com/{username}/upstream-lib",
                fork=True,
            ),
        ]


async def main() -> None:
    """Ingest two candidates and score them as a pool."""
    from forge_core.config.settings import Settings
    from forge_core.models.job import JobSpec, Requirement
    from forge_engine.ingest import CodeHostIngestor, ingest_all_sources
    from forge_engine.observability import configure_logging
    from forge_engine.orchestrator.engine import AsyncForgeEngine

    settings = Settings()  # type: ignore[call-arg]
    configure_logging(settings)

    job = JobSpec(
        title="Senior Frontend Engineer",
        seniority="senior",
        requirements=[
            Requirement(
                id="req-react",
                label="React",
                type="skill",
                importance="must",
                weight=0.5,
                synonyms=["ReactJS"],
            ),
            Requirement(
                id="req-ts",
                label="TypeScript",
                type="skill",
                importance="should",
                weight=0.3,
            ),
            Requirement(
                id="req-graphql",
                label="GraphQL",
                type="skill",
                importance="nice",
                weight=0.2,
            ),
        ],
    )

    ingestor = CodeHostIngestor(
        DemoCodeHostClient(),  # type: ignore[arg-type]
        ttl_seconds=settings.code_host_cache_ttl_seconds,
    )
    candidates = {
        "jane": await ingest_all_sources(
            resume_text=RESUME_JANE,
            code_host_username="https://github.com/janedev",
            code_host_ingestor=ingestor,
        ),
        "sam": await ingest_all_sources(
            resume_text=RESUME_SAM,
            portfolio_text=PORTFOLIO_SAM,
            portfolio_url="https://sam.dev",
        ),
    }

    engine = AsyncForgeEngine(settings.to_forge_config())
    results = await engine.score_pool(job, candidates)

    print(f"=== FORGE DEMO: {job.title} ===")
    for candidate_id, result in results.items():
        gate = "PASS" if result.pass_gate else "FAIL"
        print(
            f"{candidate_id:>6}  verified={result.capability_score_verified:>3}  "
            f"total={result.capability_score_total:>3}  forge={result.forge_score:>3}  "
            f"confidence={result.confidence:.2f}  tau={result.debug.tau_used:g}  {gate}"
        )
        if result.missing_must_haves:
            print(f"        missing: {', '.join(result.missing_must_haves)}")
        for evidence in result.evidence_matrix:
            tiers = ", ".join(item.proof_tier.value for item in evidence.items)
            print(f"        {evidence.requirement_id}: {tiers}")


if __name__ == "__main__":
    asyncio.run(main())
