"""Scoped working directory handle.

Commands that must run "inside" a directory get it as their ``cwd`` through
this handle; the process-wide current directory is never changed, so it is
the same before, during and after the scope on every exit path.
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING

from nitterboot.exceptions import WorkingDirectoryError
from nitterboot.logging import get_logger
from nitterboot.runners.command import CommandRunner

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nitterboot.runners.models import CommandResult

__all__ = ["ScopedDirectory"]

logger = get_logger(__name__)


class ScopedDirectory:
    """Context manager yielding a command handle bound to ``path``.

    Example:
        ```python
        with ScopedDirectory(repo_dir / "tools") as tools:
            await tools.run(["pip", "install", "pyotp"])
            output = tools.path / "../sessions.jsonl"
        ```
    """

    def __init__(self, path: Path, runner: CommandRunner | None = None) -> None:
        self._path = path.resolve()
        self._runner = runner or CommandRunner()
        self._active = False

    @property
    def path(self) -> Path:
        """Absolute directory path of this scope."""
        return self._path

    @property
    def active(self) -> bool:
        return self._active

    def __enter__(self) -> ScopedDirectory:
        if not self._path.is_dir():
            raise WorkingDirectoryError(
                f"Directory does not exist: {self._path}",
                path=self._path,
            )
        self._active = True
        logger.debug("scope_entered", path=str(self._path))
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._active = False
        logger.debug("scope_exited", path=str(self._path), failed=exc is not None)

    def resolve(self, relative: str | Path) -> Path:
        """Resolve ``relative`` against the scope directory."""
        return (self._path / relative).resolve()

    async def run(
        self,
        command: Sequence[str],
        *,
        timeout: float | None = None,
        redact_values: Sequence[str] = (),
    ) -> CommandResult:
        """Run ``command`` with this scope's directory as its cwd.

        Raises:
            WorkingDirectoryError: If called outside the ``with`` block or the
                directory has disappeared.
        """
        if not self._active:
            raise WorkingDirectoryError(
                f"Scope for {self._path} is not active",
                path=self._path,
            )
        return await self._runner.run(
            command,
            cwd=self._path,
            timeout=timeout,
            redact_values=redact_values,
        )
