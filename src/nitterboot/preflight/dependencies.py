"""Probe PATH for the executables the workflow shells out to.

The lookup is read-only: nothing is executed, so a missing tool is detected
before any side effect.
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence

from nitterboot.constants import REQUIRED_TOOLS, TOOL_INSTALL_HINTS
from nitterboot.exceptions import MissingDependenciesError
from nitterboot.logging import get_logger
from nitterboot.preflight.models import DependencyStatus

__all__ = [
    "check_dependencies",
    "ensure_dependencies",
    "find_missing_dependencies",
]

logger = get_logger(__name__)


def check_dependencies(
    required: Sequence[str] = REQUIRED_TOOLS,
) -> list[DependencyStatus]:
    """Return one DependencyStatus per required tool, in input order.

    Example:
        >>> [s.name for s in check_dependencies(["git", "nope"]) if not s.available]
        ['nope']
    """
    statuses: list[DependencyStatus] = []
    for tool_name in required:
        tool_path = shutil.which(tool_name)
        statuses.append(
            DependencyStatus(
                name=tool_name,
                available=tool_path is not None,
                path=tool_path,
                install_url=TOOL_INSTALL_HINTS.get(tool_name),
            )
        )
    return statuses


def find_missing_dependencies(
    required: Sequence[str] = REQUIRED_TOOLS,
) -> list[str]:
    """Names of the required tools that are not on PATH."""
    return [s.name for s in check_dependencies(required) if not s.available]


def ensure_dependencies(
    required: Sequence[str] = REQUIRED_TOOLS,
) -> list[DependencyStatus]:
    """Fail unless every required tool is available.

    Every tool is checked before failing, so the error lists the whole
    missing set rather than the first gap.

    Args:
        required: Executable names to look up.

    Returns:
        The statuses of all (available) tools.

    Raises:
        MissingDependenciesError: If one or more tools are missing.
    """
    statuses = check_dependencies(required)
    missing = [s for s in statuses if not s.available]
    if missing:
        logger.warning(
            "dependencies_missing", missing=[s.name for s in missing]
        )
        raise MissingDependenciesError(
            [s.name for s in missing],
            hints={s.name: s.install_url for s in missing if s.install_url},
        )
    logger.debug("dependencies_ok", tools=[s.name for s in statuses])
    return statuses
