"""Bootstrap workflow: step definitions, results and the driver."""

from __future__ import annotations

from nitterboot.workflow.driver import VERIFY_STEP_NAME, BootstrapWorkflow
from nitterboot.workflow.results import StepResult, WorkflowResult
from nitterboot.workflow.steps import Step

__all__ = [
    "VERIFY_STEP_NAME",
    "BootstrapWorkflow",
    "Step",
    "StepResult",
    "WorkflowResult",
]
