"""Transient working copy of the Nitter repository."""

from __future__ import annotations

from nitterboot.workspace.manager import RepositoryMaterializer, observe_state
from nitterboot.workspace.models import (
    DirectoryState,
    MaterializeResult,
    TeardownResult,
)

__all__ = [
    "DirectoryState",
    "MaterializeResult",
    "RepositoryMaterializer",
    "TeardownResult",
    "observe_state",
]
