"""Typed models for the materialized repository directory."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DirectoryState(str, Enum):
    """Observed state of the repository target path.

    Attributes:
        ABSENT: Nothing exists at the path.
        POPULATED: A directory with at least one entry.
        EMPTY: A directory with no entries.
        NOT_A_DIRECTORY: Something other than a directory occupies the path.
    """

    ABSENT = "absent"
    POPULATED = "populated"
    EMPTY = "empty"
    NOT_A_DIRECTORY = "not_a_directory"


@dataclass(frozen=True, slots=True)
class MaterializeResult:
    """Outcome of :meth:`RepositoryMaterializer.materialize`.

    Attributes:
        path: Absolute repository path.
        observed: State found before acting.
        cloned: True if a clone was performed.
    """

    path: Path
    observed: DirectoryState
    cloned: bool


@dataclass(frozen=True, slots=True)
class TeardownResult:
    """Outcome of removing the repository directory.

    Attributes:
        removed: True if a directory was deleted.
        error: Why removal failed, if it did.
    """

    removed: bool
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None
