"""Data models for preflight checks."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["DependencyStatus"]


@dataclass(frozen=True, slots=True)
class DependencyStatus:
    """Whether one required executable is on PATH.

    Attributes:
        name: Executable name (e.g., "git", "docker").
        available: True if ``shutil.which`` resolved it.
        path: Resolved executable path, if found.
        install_url: Where to get the tool, if known.
    """

    name: str
    available: bool
    path: str | None = None
    install_url: str | None = None
