"""Turn raw candidate sources into tagged artifact chunks."""

from __future__ import annotations

import asyncio
import re
from typing import TYPE_CHECKING

import structlog

from forge_core.constants import (
    CODE_HOST_CACHE_TTL_SECONDS,
    CODE_HOST_MAX_REPOS,
    MIN_INGEST_CHARS,
)
from forge_core.models.artifact import ArtifactChunk, SourceType
from forge_engine.chunking import chunk_text
from forge_infra.cache.memory_cache import InMemoryArtifactCache

if TYPE_CHECKING:
    from forge_core.interfaces.cache import ArtifactCache
    from forge_core.interfaces.code_host import CodeHostClient
    from forge_core.models.code_host import CodeHostRepo, CodeHostUser

logger = structlog.get_logger()

CODE_HOST_BASE_URL = "https://github.com"

_URL_PREFIX_RE = re.compile(r"^(?:https?://)?(?:www\.)?github\.com/([^/\s]+)", re.IGNORECASE)
_INVALID_USERNAME_CHARS_RE = re.compile(r"[^A-Za-z0-9-]")


def _ingest_text(
    text: str | None,
    source: SourceType,
    url: str | None = None,
) -> list[ArtifactChunk]:
    if not text or len(text.strip()) < MIN_INGEST_CHARS:
        return []
    return chunk_text(text, source, url)


def ingest_resume(text: str | None) -> list[ArtifactChunk]:
    """Chunk resume text; too-short input yields no chunks."""
    return _ingest_text(text, SourceType.RESUME)


def ingest_portfolio(text: str | None, url: str | None = None) -> list[ArtifactChunk]:
    """Chunk portfolio text, tagging chunks with the portfolio URL."""
    return _ingest_text(text, SourceType.PORTFOLIO, url)


def ingest_writing(text: str | None, url: str | None = None) -> list[ArtifactChunk]:
    """Chunk technical writing, tagging chunks with its URL."""
    return _ingest_text(text, SourceType.WRITING, url)


def normalize_code_host_username(value: str) -> str:
    """Reduce '@user', 'github.com/user/repo', or a full profile URL to 'user'.

    Usernames are case-insensitive, so the result is lowercased.
    """
    cleaned = value.strip().removeprefix("@")
    match = _URL_PREFIX_RE.match(cleaned)
    if match:
        cleaned = match.group(1)
    cleaned = cleaned.split("/", 1)[0]
    return _INVALID_USERNAME_CHARS_RE.sub("", cleaned).strip("-").lower()


def _profile_chunk(user: CodeHostUser) -> ArtifactChunk:
    lines = [
        f"GitHub Profile: {user.login}",
        f"Name: {user.name}" if user.name else "",
        f"Bio: {user.bio}" if user.bio else "",
        f"Company: {user.company}" if user.company else "",
        f"Location: {user.location}" if user.location else "",
        f"Public repos: {user.public_repos}",
        f"Followers: {user.followers}",
        f"Following: {user.following}",
        f"Website: {user.blog}" if user.blog else "",
    ]
    return ArtifactChunk(
        id=f"github-profile-{user.login}",
        source=SourceType.GITHUB,
        url=f"{CODE_HOST_BASE_URL}/{user.login}",
        text="\n".join(line for line in lines if line),
    )


def _repo_chunk(repo: CodeHostRepo) -> ArtifactChunk:
    updated = repo.updated_at.isoformat() if repo.updated_at else "unknown"
    lines = [
        f"Repository: {repo.name}",
        f"Description: {repo.description}" if repo.description else "",
        f"Primary language: {repo.language}" if repo.language else "",
        f"Stars: {repo.stargazers_count}",
        f"Forks: {repo.forks_count}",
        f"Last updated: {updated}",
        f"Topics: {', '.join(repo.topics)}" if repo.topics else "",
        f"URL: {repo.html_url}",
    ]
    return ArtifactChunk(
        id=f"github-repo-{repo.name}",
        source=SourceType.GITHUB,
        url=repo.html_url,
        text="\n".join(line for line in lines if line),
    )


def _repo_sort_key(repo: CodeHostRepo) -> tuple[int, float]:
    updated = repo.updated_at.timestamp() if repo.updated_at else float("-inf")
    return (repo.stargazers_count, updated)


def build_code_host_chunks(
    user: CodeHostUser | None,
    repos: list[CodeHostRepo],
) -> list[ArtifactChunk]:
    """Build a profile chunk plus one chunk per top owned repository.

    Forks are skipped; repositories are ranked by stars, then most recent update.
    """
    chunks: list[ArtifactChunk] = []
    if user is not None:
        chunks.append(_profile_chunk(user))

    owned = sorted((r for r in repos if not r.fork), key=_repo_sort_key, reverse=True)
    chunks.extend(_repo_chunk(r) for r in owned[:CODE_HOST_MAX_REPOS])
    return chunks


class CodeHostIngestor:
    """Fetch and chunk a code-host account, caching results per username."""

    def __init__(
        self,
        client: CodeHostClient,
        cache: ArtifactCache | None = None,
        ttl_seconds: float = CODE_HOST_CACHE_TTL_SECONDS,
    ) -> None:
        """Initialize with a client and an optional shared cache."""
        self.client = client
        self.cache = cache if cache is not None else InMemoryArtifactCache(ttl_seconds)

    async def ingest(self, username_or_url: str) -> list[ArtifactChunk]:
        """Return chunks for an account; failures degrade to an empty list."""
        username = normalize_code_host_username(username_or_url)
        if not username:
            return []

        cache_key = f"code_host:{username}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("code_host_cache_hit", username=username, chunks=len(cached))
            return cached

        try:
            user, repos = await asyncio.gather(
                self.client.get_user(username),
                self.client.get_repos(username),
            )
        except Exception as e:
            logger.warning("code_host_ingest_failed", username=username, error=str(e))
            return []

        chunks = build_code_host_chunks(user, repos)
        self.cache.set(cache_key, chunks)
        logger.info("code_host_ingested", username=username, chunks=len(chunks))
        return chunks


async def ingest_all_sources(
    resume_text: str | None = None,
    code_host_username: str | None = None,
    code_host_ingestor: CodeHostIngestor | None = None,
    portfolio_text: str | None = None,
    portfolio_url: str | None = None,
    writing_text: str | None = None,
    writing_url: str | None = None,
) -> list[ArtifactChunk]:
    """Ingest every provided source: resume, code host, portfolio, writing."""
    chunks: list[ArtifactChunk] = []
    chunks.extend(ingest_resume(resume_text))
    if code_host_ingestor is not None and code_host_username:
        chunks.extend(await code_host_ingestor.ingest(code_host_username))
    chunks.extend(ingest_portfolio(portfolio_text, portfolio_url))
    chunks.extend(ingest_writing(writing_text, writing_url))
    return chunks
