"""Code-host profile shapes returned by a CodeHostClient implementation."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CodeHostUser(BaseModel):
    """Public profile of a code-hosting account."""

    login: str = Field(description="Account username")
    name: str | None = Field(default=None, description="Display name")
    bio: str | None = Field(default=None, description="Profile bio")
    company: str | None = Field(default=None, description="Listed company")
    location: str | None = Field(default=None, description="Listed location")
    public_repos: int = Field(default=0, ge=0, description="Number of public repositories")
    followers: int = Field(default=0, ge=0)
    following: int = Field(default=0, ge=0)
    blog: str | None = Field(default=None, description="Personal website")


class CodeHostRepo(BaseModel):
    """Summary of one public repository."""

    name: str = Field(description="Repository name")
    description: str | None = Field(default=None, description="Repository description")
    language: str | None = Field(default=None, description="Primary language")
    stargazers_count: int = Field(default=0, ge=0)
    forks_count: int = Field(default=0, ge=0)
    updated_at: datetime | None = Field(default=None, description="Last push or update")
    topics: list[str] = Field(default_factory=list)
    html_url: str = Field(description="Browser URL of the repository")
    fork: bool = Field(default=False, description="Whether the repository is a fork")
