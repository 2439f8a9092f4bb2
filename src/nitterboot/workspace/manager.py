"""Repository materializer.

Ensures a working copy of the Nitter repository exists at a fixed path and
removes it again when the workflow ends.

State handling for the target path:

    ABSENT          -> git clone
    POPULATED       -> reuse untouched
    EMPTY           -> remove, then git clone
    NOT_A_DIRECTORY -> RepositoryCloneError
"""

from __future__ import annotations

import shutil
from pathlib import Path

from nitterboot.constants import NITTER_REPO_URL
from nitterboot.exceptions import RepositoryCloneError
from nitterboot.logging import get_logger
from nitterboot.runners.command import CommandRunner
from nitterboot.workspace.models import (
    DirectoryState,
    MaterializeResult,
    TeardownResult,
)

__all__ = ["DEFAULT_CLONE_TIMEOUT", "RepositoryMaterializer", "observe_state"]

logger = get_logger(__name__)

DEFAULT_CLONE_TIMEOUT: float = 600.0


def observe_state(path: Path) -> DirectoryState:
    """Classify what currently occupies ``path``."""
    if not path.exists() and not path.is_symlink():
        return DirectoryState.ABSENT
    if not path.is_dir():
        return DirectoryState.NOT_A_DIRECTORY
    if any(path.iterdir()):
        return DirectoryState.POPULATED
    return DirectoryState.EMPTY


class RepositoryMaterializer:
    """Idempotently materialize the companion repository.

    A populated target is assumed to be a valid checkout and is never
    modified, so repeated runs do not re-clone.

    Example:
        ```python
        materializer = RepositoryMaterializer(Path("nitter"))
        result = await materializer.materialize()
        try:
            ...
        finally:
            materializer.teardown()
        ```
    """

    def __init__(
        self,
        repo_dir: Path,
        repo_url: str = NITTER_REPO_URL,
        *,
        runner: CommandRunner | None = None,
        clone_timeout: float = DEFAULT_CLONE_TIMEOUT,
    ) -> None:
        self._repo_dir = repo_dir.resolve()
        self._repo_url = repo_url
        self._runner = runner or CommandRunner(timeout=clone_timeout)
        self._clone_timeout = clone_timeout

    @property
    def repo_dir(self) -> Path:
        """Absolute path of the repository directory."""
        return self._repo_dir

    @property
    def exists(self) -> bool:
        return self._repo_dir.is_dir()

    async def materialize(self) -> MaterializeResult:
        """Make sure a populated checkout exists at :attr:`repo_dir`.

        Returns:
            :class:`MaterializeResult` describing what was found and done.

        Raises:
            RepositoryCloneError: If the path is not a directory, the empty
                directory cannot be removed, or ``git clone`` fails.
        """
        state = observe_state(self._repo_dir)

        if state is DirectoryState.POPULATED:
            logger.info(
                "repository_clone_skipped",
                repo_dir=str(self._repo_dir),
                reason="directory exists and is not empty",
            )
            return MaterializeResult(self._repo_dir, state, cloned=False)

        if state is DirectoryState.NOT_A_DIRECTORY:
            raise RepositoryCloneError(
                f"Cannot clone into {self._repo_dir}: path exists and is not a directory",
                repo_dir=self._repo_dir,
            )

        if state is DirectoryState.EMPTY:
            logger.info("repository_dir_empty", repo_dir=str(self._repo_dir))
            try:
                self._repo_dir.rmdir()
            except OSError as e:
                raise RepositoryCloneError(
                    f"Failed to remove empty directory {self._repo_dir}: {e}",
                    repo_dir=self._repo_dir,
                ) from e

        await self._clone()
        return MaterializeResult(self._repo_dir, state, cloned=True)

    async def _clone(self) -> None:
        logger.info(
            "repository_clone_started",
            repo_url=self._repo_url,
            repo_dir=str(self._repo_dir),
        )
        result = await self._runner.run(
            ["git", "clone", self._repo_url, str(self._repo_dir)],
            cwd=self._repo_dir.parent,
            timeout=self._clone_timeout,
        )
        if not result.success:
            raise RepositoryCloneError(
                f"Failed to clone {self._repo_url}: {result.failure_summary()}",
                repo_dir=self._repo_dir,
            )
        logger.info(
            "repository_cloned",
            repo_dir=str(self._repo_dir),
            duration_ms=result.duration_ms,
        )

    def teardown(self) -> TeardownResult:
        """Remove the repository directory if it exists.

        Never raises: a removal failure is logged and reported in the result
        so that cleanup cannot mask the error that triggered it.
        """
        if not self._repo_dir.exists():
            logger.debug("repository_teardown_noop", reason="does not exist")
            return TeardownResult(removed=False)
        if not self._repo_dir.is_dir() or self._repo_dir.is_symlink():
            logger.debug("repository_teardown_noop", reason="not a directory")
            return TeardownResult(removed=False)

        try:
            shutil.rmtree(self._repo_dir)
        except OSError as e:
            logger.warning(
                "repository_teardown_failed",
                repo_dir=str(self._repo_dir),
                error=str(e),
            )
            return TeardownResult(removed=False, error=str(e))

        logger.info("repository_removed", repo_dir=str(self._repo_dir))
        return TeardownResult(removed=True)
