"""Labeled, colored status lines for the CLI.

Every line starts with a level label: ``[INFO]`` (green) on stdout,
``[WARN]`` (yellow) and ``[ERROR]`` (red) on stderr.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.text import Text

from nitterboot.cli.console import console, err_console
from nitterboot.constants import SCRAPER_SCRIPT_FILE
from nitterboot.workflow.results import StepResult, WorkflowResult
from nitterboot.workflow.steps import Step

__all__ = [
    "ProgressReporter",
    "format_labeled",
    "print_error",
    "print_info",
    "print_warning",
]

_LEVEL_STYLES = {
    "INFO": "green",
    "WARN": "yellow",
    "ERROR": "red",
}


def format_labeled(level: str, message: str) -> Text:
    """Build ``[LEVEL] message`` with the label colored by level."""
    return Text.assemble((f"[{level}]", _LEVEL_STYLES[level]), " ", message)


def print_info(message: str) -> None:
    console.print(format_labeled("INFO", message), soft_wrap=True)


def print_warning(message: str) -> None:
    err_console.print(format_labeled("WARN", message), soft_wrap=True)


def print_error(message: str, details: Iterable[str] = ()) -> None:
    """Print an error and each detail line, indented, to stderr."""
    err_console.print(format_labeled("ERROR", message), soft_wrap=True)
    for detail in details:
        err_console.print(Text(f"  {detail}"), soft_wrap=True)


class ProgressReporter:
    """Render workflow progress as labeled lines.

    With ``quiet`` set, only failures are printed.
    """

    def __init__(self, *, quiet: bool = False) -> None:
        self.quiet = quiet

    def step_started(self, step: Step) -> None:
        if not self.quiet:
            print_info(f"{step.description}...")

    def step_finished(self, result: StepResult) -> None:
        if not result.success:
            print_error(result.error or "Step failed", result.details)
        elif result.skipped and not self.quiet:
            print_info(f"Skipped {result.name}: {result.output}")

    def summary(self, result: WorkflowResult) -> None:
        """Print the closing lines for a finished run."""
        if result.cleanup_error:
            print_warning(f"Failed to remove repository directory: {result.cleanup_error}")

        if not result.success:
            failed = result.failed_step
            if failed is not None:
                print_error(f"Bootstrap failed at step: {failed.name}")
            elif result.cleanup_error:
                print_error("Bootstrap failed at step: cleanup")
            else:
                print_error("Bootstrap failed at step: unknown")
            return

        if self.quiet:
            return
        if any(s.name == "scaffold_scraper" and not s.skipped for s in result.steps):
            print_info(f"To use the scraper, run python {SCRAPER_SCRIPT_FILE}")
        print_info("Bootstrap completed successfully!")
        print_info("To start Nitter, run: docker compose up -d")
