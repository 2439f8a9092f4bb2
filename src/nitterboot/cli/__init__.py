"""Command-line helpers for nitterboot."""

from __future__ import annotations

from nitterboot.cli.common import cli_error_handler
from nitterboot.cli.context import ExitCode, async_command
from nitterboot.cli.output import ProgressReporter

__all__ = ["ExitCode", "ProgressReporter", "async_command", "cli_error_handler"]
