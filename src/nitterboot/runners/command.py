"""Command runner for async subprocess execution.

Commands are always awaited to completion before the caller continues; the
runner never executes two commands at once.
"""

from __future__ import annotations

import asyncio
import os
import time
from pathlib import Path
from typing import TYPE_CHECKING

from nitterboot.exceptions import WorkingDirectoryError
from nitterboot.logging import get_logger
from nitterboot.runners.models import CommandResult

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["CommandRunner", "redact"]

logger = get_logger(__name__)

#: Seconds between SIGTERM and SIGKILL for a timed-out process.
TERMINATION_GRACE_PERIOD: float = 2.0
PIPE_DRAIN_TIMEOUT: float = 0.1

REDACTION_PLACEHOLDER = "***"


def redact(text: str, secrets: Sequence[str]) -> str:
    """Replace every occurrence of each secret value in ``text``.

    Args:
        text: Text that may contain secret values.
        secrets: Literal values to mask. Empty strings are ignored.

    Returns:
        Text with each secret replaced by ``***``.
    """
    result = text
    for secret in secrets:
        if secret:
            result = result.replace(secret, REDACTION_PLACEHOLDER)
    return result


class CommandRunner:
    """Execute external commands with timeout and environment control.

    Attributes:
        cwd: Default working directory for commands.
        timeout: Default timeout in seconds (None for no timeout).

    Example:
        ```python
        runner = CommandRunner(cwd=Path("nitter/tools"), timeout=300.0)
        result = await runner.run(["pip", "install", "pyotp"])
        if not result.success:
            print(result.failure_summary())
        ```
    """

    def __init__(
        self,
        cwd: Path | None = None,
        timeout: float | None = 120.0,
        env: dict[str, str] | None = None,
    ) -> None:
        """Initialize the CommandRunner.

        Args:
            cwd: Working directory for commands. None means the process cwd.
            timeout: Default timeout in seconds. None disables it.
            env: Extra environment variables merged over ``os.environ``.
        """
        self._cwd = cwd
        self._timeout = timeout
        self._extra_env = env or {}

    @property
    def cwd(self) -> Path | None:
        """Default working directory."""
        return self._cwd

    @property
    def timeout(self) -> float | None:
        """Default timeout in seconds."""
        return self._timeout

    def _validate_cwd(self, cwd: Path | None) -> None:
        if cwd is not None and not cwd.is_dir():
            raise WorkingDirectoryError(
                f"Working directory does not exist: {cwd}",
                path=cwd,
            )

    def _build_env(self, extra_env: dict[str, str] | None = None) -> dict[str, str]:
        env = os.environ.copy()
        env.update(self._extra_env)
        if extra_env:
            env.update(extra_env)
        return env

    async def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
        redact_values: Sequence[str] = (),
    ) -> CommandResult:
        """Execute a command and return its result.

        A non-zero exit is reported in the result, not raised.

        Args:
            command: Command and arguments (no shell expansion).
            cwd: Override working directory for this command.
            timeout: Override timeout. 0 or negative disables it.
            env: Extra environment variables for this command.
            redact_values: Literal values masked in captured output.

        Returns:
            CommandResult with returncode, output, duration and timeout flag.

        Raises:
            WorkingDirectoryError: If the working directory does not exist.
        """
        effective_cwd = cwd if cwd is not None else self._cwd
        self._validate_cwd(effective_cwd)

        effective_timeout = timeout if timeout is not None else self._timeout
        if effective_timeout is not None and effective_timeout <= 0:
            effective_timeout = None

        result = await self._execute_once(
            command, effective_cwd, effective_timeout, self._build_env(env)
        )

        if redact_values:
            result = CommandResult(
                returncode=result.returncode,
                stdout=redact(result.stdout, redact_values),
                stderr=redact(result.stderr, redact_values),
                duration_ms=result.duration_ms,
                timed_out=result.timed_out,
            )

        logger.debug(
            "command_finished",
            executable=command[0],
            returncode=result.returncode,
            duration_ms=result.duration_ms,
            timed_out=result.timed_out,
        )
        return result

    async def _execute_once(
        self,
        command: Sequence[str],
        cwd: Path | None,
        timeout: float | None,
        env: dict[str, str],
    ) -> CommandResult:
        start_time = time.monotonic()
        timed_out = False
        returncode = 0
        stdout_str = ""
        stderr_str = ""

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                env=env,
            )

            try:
                stdout_bytes, stderr_bytes = await asyncio.wait_for(
                    process.communicate(),
                    timeout=timeout,
                )
                returncode = process.returncode or 0
                stdout_str = stdout_bytes.decode("utf-8", errors="replace")
                stderr_str = stderr_bytes.decode("utf-8", errors="replace")

            except TimeoutError:
                timed_out = True
                returncode = -1
                await self._terminate(process)
                stderr_str = f"Command timed out after {timeout}s"

            except asyncio.CancelledError:
                # Do not leave the child running when the workflow is interrupted.
                await self._terminate(process)
                raise

        except FileNotFoundError:
            returncode = 127
            stderr_str = f"Command not found: {command[0]}"
        except PermissionError:
            returncode = 126
            stderr_str = f"Permission denied: {command[0]}"

        duration_ms = int((time.monotonic() - start_time) * 1000)

        return CommandResult(
            returncode=returncode,
            stdout=stdout_str,
            stderr=stderr_str,
            duration_ms=duration_ms,
            timed_out=timed_out,
        )

    async def _terminate(self, process: asyncio.subprocess.Process) -> None:
        """SIGTERM, wait a grace period, then SIGKILL. Pipes are drained last."""
        if process.returncode is None:
            try:
                process.terminate()
            except ProcessLookupError:
                pass
            else:
                try:
                    await asyncio.wait_for(
                        process.wait(), timeout=TERMINATION_GRACE_PERIOD
                    )
                except TimeoutError:
                    process.kill()
                    await process.wait()
        await self._drain(process)

    async def _drain(self, process: asyncio.subprocess.Process) -> None:
        """Read leftover output so the pipe transports close with the loop open."""
        for stream in (process.stdout, process.stderr):
            if stream is None:
                continue
            try:
                await asyncio.wait_for(stream.read(), timeout=PIPE_DRAIN_TIMEOUT)
            except TimeoutError:
                logger.debug("pipe_drain_timed_out", pid=process.pid)
