"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import pytest

from forge_core.models.artifact import ArtifactChunk, SourceType
from forge_core.models.job import JobSpec
from tests.mocks.mock_factories import make_chunk, make_job_spec, make_requirement


@pytest.fixture
def react_job() -> JobSpec:
    """Return a job with a React must-have and a TypeScript nice-to-have."""
    return make_job_spec(
        requirements=[
            make_requirement(id="req-react", label="React", weight=0.7),
            make_requirement(
                id="req-ts",
                label="TypeScript",
                importance="nice",
                weight=0.3,
                synonyms=["TS"],
            ),
        ]
    )


@pytest.fixture
def resume_chunk() -> ArtifactChunk:
    """Return a resume chunk claiming React experience."""
    return make_chunk(
        id="resume-chunk-0",
        text="Frontend developer. 5 years of React experience building dashboards.",
    )


@pytest.fixture
def code_host_chunk() -> ArtifactChunk:
    """Return a code-host chunk that corroborates the React claim."""
    return make_chunk(
        id="github-repo-dashboard",
        source=SourceType.GITHUB,
        url="https://github.com/janedev/dashboard",
        text=(
            "Repository: dashboard\n"
            "Description: Analytics dashboards built with React over 5 years of experience\n"
            "Primary language: TypeScript\n"
            "URL: https://github.com/janedev/dashboard"
        ),
    )
