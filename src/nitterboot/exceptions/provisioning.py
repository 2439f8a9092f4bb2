"""Exceptions for failed external operations.

Each error names the operation that failed. None of them is retried: the
workflow driver aborts on the first one it sees.
"""

from __future__ import annotations

from pathlib import Path

from nitterboot.exceptions.base import NitterbootError

__all__ = [
    "ArtifactFetchError",
    "ProvisioningError",
    "RepositoryCloneError",
    "ScraperSetupError",
    "SessionProvisionError",
]


class ProvisioningError(NitterbootError):
    """Base exception for side-effecting workflow operations."""


class ArtifactFetchError(ProvisioningError):
    """Downloading, transforming or writing an artifact failed.

    Attributes:
        artifact: Filename of the artifact being produced.
        url: Remote template URL.
    """

    def __init__(
        self,
        message: str,
        *,
        artifact: str,
        url: str | None = None,
    ) -> None:
        self.artifact = artifact
        self.url = url
        details = (f"URL: {url}",) if url else ()
        super().__init__(message, details)


class RepositoryCloneError(ProvisioningError):
    """The companion repository could not be materialized.

    Attributes:
        repo_dir: Target directory of the clone.
    """

    def __init__(self, message: str, *, repo_dir: Path | str | None = None) -> None:
        self.repo_dir = str(repo_dir) if repo_dir is not None else None
        super().__init__(message)


class SessionProvisionError(ProvisioningError):
    """Generating or collecting the session file failed.

    Attributes:
        operation: Sub-step that failed (``enter_tools``, ``install``,
            ``generate``, ``collect``).
    """

    def __init__(self, message: str, *, operation: str) -> None:
        self.operation = operation
        super().__init__(message, (f"Operation: {operation}",))


class ScraperSetupError(ProvisioningError):
    """Installing the scraper client or writing its starter script failed."""
