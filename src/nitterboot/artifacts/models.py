"""Data models for fetched artifacts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

__all__ = ["ArtifactSpec", "TextTransform"]

#: Deterministic text-to-text substitution applied before writing.
TextTransform = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class ArtifactSpec:
    """A local file produced from a remote template.

    Attributes:
        filename: Name of the local file inside the output directory.
        url: Remote template location.
        transform: Substitution applied to the downloaded text.
    """

    filename: str
    url: str
    transform: TextTransform
