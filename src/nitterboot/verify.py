"""Post-run check that every required artifact exists."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from nitterboot.constants import REQUIRED_ARTIFACTS
from nitterboot.exceptions import MissingArtifactsError
from nitterboot.logging import get_logger

__all__ = ["VerificationResult", "find_missing_artifacts", "verify_setup"]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """Files confirmed present in the output directory.

    Attributes:
        output_dir: Directory that was checked.
        present: Filenames found, in required order.
    """

    output_dir: Path
    present: tuple[str, ...]


def find_missing_artifacts(
    output_dir: Path,
    filenames: Sequence[str] = REQUIRED_ARTIFACTS,
) -> list[str]:
    """Return the filenames not present as regular files in ``output_dir``."""
    return [name for name in filenames if not (output_dir / name).is_file()]


def verify_setup(
    output_dir: Path,
    filenames: Sequence[str] = REQUIRED_ARTIFACTS,
) -> VerificationResult:
    """Confirm all required artifacts exist.

    Raises:
        MissingArtifactsError: Naming every missing file.
    """
    missing = find_missing_artifacts(output_dir, filenames)
    if missing:
        logger.error("setup_verification_failed", missing=missing)
        raise MissingArtifactsError(missing)
    logger.info("setup_verified", files=list(filenames))
    return VerificationResult(output_dir=output_dir, present=tuple(filenames))
