"""Checks that run before the workflow touches anything.

- :mod:`.dependencies` looks up required executables on PATH.
- :mod:`.environment` validates the account credential variables.
"""

from __future__ import annotations

from nitterboot.preflight.dependencies import (
    check_dependencies,
    ensure_dependencies,
    find_missing_dependencies,
)
from nitterboot.preflight.environment import (
    Credentials,
    find_missing_variables,
    load_credentials,
)
from nitterboot.preflight.models import DependencyStatus

__all__ = [
    "Credentials",
    "DependencyStatus",
    "check_dependencies",
    "ensure_dependencies",
    "find_missing_dependencies",
    "find_missing_variables",
    "load_credentials",
]
