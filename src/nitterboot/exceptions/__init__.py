"""nitterboot exception hierarchy.

All exceptions can be imported from this package:
    from nitterboot.exceptions import NitterbootError, MissingEnvironmentError
"""

from __future__ import annotations

from nitterboot.exceptions.base import NitterbootError
from nitterboot.exceptions.config import ConfigError
from nitterboot.exceptions.preflight import (
    MissingDependenciesError,
    MissingEnvironmentError,
    PreflightError,
)
from nitterboot.exceptions.provisioning import (
    ArtifactFetchError,
    ProvisioningError,
    RepositoryCloneError,
    ScraperSetupError,
    SessionProvisionError,
)
from nitterboot.exceptions.runner import RunnerError, WorkingDirectoryError
from nitterboot.exceptions.verify import MissingArtifactsError

__all__ = [
    # Base
    "NitterbootError",
    # Config
    "ConfigError",
    # Preflight
    "MissingDependenciesError",
    "MissingEnvironmentError",
    "PreflightError",
    # Provisioning
    "ArtifactFetchError",
    "ProvisioningError",
    "RepositoryCloneError",
    "ScraperSetupError",
    "SessionProvisionError",
    # Runner
    "RunnerError",
    "WorkingDirectoryError",
    # Verification
    "MissingArtifactsError",
]
