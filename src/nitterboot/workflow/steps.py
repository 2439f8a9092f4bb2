"""Step definitions for the bootstrap workflow."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

__all__ = ["SkipPredicate", "Step", "StepAction"]

#: Coroutine function performing the step. Raises NitterbootError on failure.
StepAction = Callable[[], Awaitable[Any]]

#: Returns True when the step's goal is already satisfied.
SkipPredicate = Callable[[], bool]


@dataclass(frozen=True, slots=True)
class Step:
    """A named unit of work run in declaration order.

    Attributes:
        name: Stable snake_case identifier (used in logs and results).
        description: Short human-readable label for progress output.
        action: Coroutine function doing the work.
        skip_when: Optional precondition; when it returns True the action is
            not called and the step is reported as skipped.
        skip_reason: Reason recorded for a skipped step.
    """

    name: str
    description: str
    action: StepAction
    skip_when: SkipPredicate | None = None
    skip_reason: str = "already satisfied"

    def should_skip(self) -> bool:
        return self.skip_when is not None and self.skip_when()
