"""Data models for subprocess execution."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["CommandResult"]


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of executing a single command.

    Attributes:
        returncode: Exit code from the command (0 = success, 127 = not found,
            126 = permission denied, -1 = timed out).
        stdout: Standard output captured from the command.
        stderr: Standard error captured from the command.
        duration_ms: Execution time in milliseconds.
        timed_out: True if the command exceeded its timeout.
    """

    returncode: int
    stdout: str
    stderr: str
    duration_ms: int
    timed_out: bool = False

    @property
    def success(self) -> bool:
        """True if the command exited 0 without timing out."""
        return self.returncode == 0 and not self.timed_out

    @property
    def output(self) -> str:
        """Combined stdout and stderr."""
        if self.stderr:
            return f"{self.stdout}\n{self.stderr}" if self.stdout else self.stderr
        return self.stdout

    def failure_summary(self, limit: int = 500) -> str:
        """Short description of why the command failed.

        Args:
            limit: Maximum number of characters of stderr to keep (tail).

        Returns:
            ``"timed out"``, the stderr tail, or the exit code.
        """
        if self.timed_out:
            return "timed out"
        text = self.stderr.strip() or self.stdout.strip()
        if text:
            return text[-limit:]
        return f"exit code {self.returncode}"
