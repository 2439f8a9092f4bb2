"""Exceptions for missing local capabilities.

Both errors are raised only after every requirement has been checked, so the
diagnostic always lists the complete set of missing items.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from nitterboot.exceptions.base import NitterbootError

__all__ = ["MissingDependenciesError", "MissingEnvironmentError", "PreflightError"]


class PreflightError(NitterbootError):
    """Base exception for checks that run before any side effect."""


class MissingDependenciesError(PreflightError):
    """One or more required executables are not on PATH.

    Attributes:
        missing: Names of the missing executables, in lookup order.
        hints: Installation hint per missing executable, where known.
    """

    def __init__(
        self,
        missing: Sequence[str],
        hints: Mapping[str, str] | None = None,
    ) -> None:
        self.missing = tuple(missing)
        self.hints = dict(hints or {})
        details = tuple(
            f"{name}: install from {self.hints[name]}" if name in self.hints else name
            for name in self.missing
        )
        super().__init__(
            f"Missing required dependencies: {' '.join(self.missing)}",
            details,
        )


class MissingEnvironmentError(PreflightError):
    """One or more required environment variables are unset or empty.

    Attributes:
        missing: Names of the missing variables, in declaration order.
    """

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = tuple(missing)
        super().__init__(
            f"Missing required environment variables: {' '.join(self.missing)}",
            self.remediation_commands,
        )

    @property
    def remediation_commands(self) -> tuple[str, ...]:
        """One ready-to-use ``export`` line per missing variable."""
        return tuple(f"export {name}='your_value'" for name in self.missing)
