"""Abstract code-host client interface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from forge_core.models.code_host import CodeHostRepo, CodeHostUser


@runtime_checkable
class CodeHostClient(Protocol):
    """Read-only access to a code-hosting account. Implementations may raise IngestionError."""

    async def get_user(self, username: str) -> CodeHostUser | None:
        """Fetch the public profile, or None if the account does not exist."""
        ...

    async def get_repos(self, username: str) -> list[CodeHostRepo]:
        """Fetch public repositories owned by the account."""
        ...
