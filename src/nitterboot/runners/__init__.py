"""Subprocess execution for external tools (git, pip, python3)."""

from __future__ import annotations

from nitterboot.runners.command import CommandRunner, redact
from nitterboot.runners.models import CommandResult

__all__ = ["CommandResult", "CommandRunner", "redact"]
