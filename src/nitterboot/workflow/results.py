"""Result dataclasses for the bootstrap workflow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from nitterboot.verify import VerificationResult

__all__ = ["StepResult", "WorkflowResult"]


@dataclass(frozen=True, slots=True)
class StepResult:
    """Outcome of a single step.

    Attributes:
        name: Step name.
        success: True if the step succeeded or was skipped.
        duration_ms: Execution time in milliseconds.
        skipped: True if the skip precondition held.
        output: Value returned by the step action.
        error: Diagnostic message on failure.
        details: Extra diagnostic lines (missing items, remediation).
    """

    name: str
    success: bool
    duration_ms: int
    skipped: bool = False
    output: Any = None
    error: str | None = None
    details: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.duration_ms < 0:
            raise ValueError("duration_ms must be non-negative")
        if not self.success and self.error is None:
            raise ValueError("Failed steps must have an error message")
        if self.skipped and not self.success:
            raise ValueError("Skipped steps cannot be failures")

    @classmethod
    def create_success(cls, name: str, output: Any, duration_ms: int) -> StepResult:
        return cls(name=name, success=True, duration_ms=duration_ms, output=output)

    @classmethod
    def create_skipped(cls, name: str, reason: str) -> StepResult:
        return cls(name=name, success=True, duration_ms=0, skipped=True, output=reason)

    @classmethod
    def create_failure(
        cls,
        name: str,
        error: str,
        duration_ms: int,
        details: tuple[str, ...] = (),
    ) -> StepResult:
        """Create a failed StepResult carrying its diagnostic."""
        return cls(
            name=name,
            success=False,
            duration_ms=duration_ms,
            error=error,
            details=details,
        )


@dataclass(frozen=True, slots=True)
class WorkflowResult:
    """Outcome of a full bootstrap run.

    Attributes:
        steps: Step results in execution order, ending at the first failure.
        verification: Present only if every step and the verifier passed.
        repo_removed: True if cleanup deleted the repository directory.
        cleanup_error: Why cleanup failed, if it did.
        duration_ms: Wall time of the run.
    """

    steps: tuple[StepResult, ...]
    verification: VerificationResult | None
    repo_removed: bool
    duration_ms: int
    cleanup_error: str | None = None

    @property
    def success(self) -> bool:
        """True if every step and the verifier passed and cleanup succeeded."""
        return (
            self.failed_step is None
            and self.verification is not None
            and self.cleanup_error is None
        )

    @property
    def failed_step(self) -> StepResult | None:
        """The step that aborted the run, if any."""
        for result in self.steps:
            if not result.success:
                return result
        return None
