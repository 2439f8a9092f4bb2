from __future__ import annotations

from pathlib import Path

from nitterboot.exceptions.base import NitterbootError


class RunnerError(NitterbootError):
    """Base exception for subprocess runner failures."""


class WorkingDirectoryError(RunnerError):
    """Working directory does not exist or is not a directory.

    Attributes:
        path: The directory that could not be used.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = path
        super().__init__(message)
