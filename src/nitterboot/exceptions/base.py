from __future__ import annotations


class NitterbootError(Exception):
    """Base exception for all nitterboot errors.

    Every failure the bootstrap workflow can diagnose is raised as a subclass,
    so the workflow driver catches one type and turns it into a failed step
    result. Unexpected exceptions propagate unchanged.

    Attributes:
        message: Human-readable error message.
        details: Additional diagnostic lines (missing items, remediation).

    Example:
        ```python
        try:
            await step.action()
        except NitterbootError as e:
            return StepResult.create_failure(step.name, e.message, e.details)
        ```
    """

    def __init__(self, message: str, details: tuple[str, ...] = ()) -> None:
        """Initialize the NitterbootError.

        Args:
            message: Human-readable error message.
            details: Extra diagnostic lines shown under the message.
        """
        self.message = message
        self.details = tuple(details)
        super().__init__(message)
