"""Session provisioning via the repository's own session tool.

The repository ships ``tools/get_session.py``, which logs in with the
account credentials and appends a session line to a JSONL file. This module
installs its dependencies, runs it, and copies the resulting
``sessions.jsonl`` into the output directory.
"""

from __future__ import annotations

from pathlib import Path

from nitterboot.constants import (
    SESSION_SCRIPT,
    SESSION_TOOL_PACKAGES,
    SESSION_TOOLS_SUBDIR,
    SESSIONS_FILE,
)
from nitterboot.exceptions import SessionProvisionError, WorkingDirectoryError
from nitterboot.logging import get_logger
from nitterboot.preflight.environment import Credentials
from nitterboot.runners.command import CommandRunner
from nitterboot.session.scope import ScopedDirectory
from nitterboot.utils.atomic import atomic_write_text

__all__ = ["SessionProvisioner"]

logger = get_logger(__name__)

DEFAULT_INSTALL_TIMEOUT: float = 600.0
DEFAULT_SESSION_TIMEOUT: float = 300.0

# Output path handed to the session script, relative to tools/.
SESSION_OUTPUT_ARG = f"../{SESSIONS_FILE}"


class SessionProvisioner:
    """Generate ``sessions.jsonl`` and place it in the output directory.

    Args:
        output_dir: Directory receiving the copied session file.
        runner: Command runner (injectable for tests).
        install_timeout: Seconds allowed for ``pip install``.
        session_timeout: Seconds allowed for the session script.
        python: Interpreter used to run the session script.
        pip: Installer used for the script's dependencies.
    """

    def __init__(
        self,
        output_dir: Path,
        *,
        runner: CommandRunner | None = None,
        install_timeout: float = DEFAULT_INSTALL_TIMEOUT,
        session_timeout: float = DEFAULT_SESSION_TIMEOUT,
        python: str = "python3",
        pip: str = "pip",
    ) -> None:
        self._output_dir = output_dir
        self._runner = runner or CommandRunner()
        self._install_timeout = install_timeout
        self._session_timeout = session_timeout
        self._python = python
        self._pip = pip

    async def provision(self, repo_dir: Path, credentials: Credentials) -> Path:
        """Run the session tool and collect its output.

        Args:
            repo_dir: Materialized repository directory.
            credentials: Validated account credentials.

        Returns:
            Path of ``sessions.jsonl`` in the output directory.

        Raises:
            SessionProvisionError: Naming the failed sub-step
                (``enter_tools``, ``install``, ``generate`` or ``collect``).
        """
        tools_dir = repo_dir / SESSION_TOOLS_SUBDIR
        try:
            with ScopedDirectory(tools_dir, self._runner) as tools:
                await self._install(tools)
                await self._generate(tools, credentials)
                generated = tools.resolve(SESSION_OUTPUT_ARG)
        except WorkingDirectoryError as e:
            raise SessionProvisionError(
                f"Cannot enter session tools directory: {e.message}",
                operation="enter_tools",
            ) from e

        return self._collect(generated)

    async def _install(self, tools: ScopedDirectory) -> None:
        logger.info("session_tool_install_started", packages=list(SESSION_TOOL_PACKAGES))
        result = await tools.run(
            [self._pip, "install", *SESSION_TOOL_PACKAGES],
            timeout=self._install_timeout,
        )
        if not result.success:
            raise SessionProvisionError(
                f"Failed to install session tool dependencies: {result.failure_summary()}",
                operation="install",
            )

    async def _generate(self, tools: ScopedDirectory, credentials: Credentials) -> None:
        command = [
            self._python,
            SESSION_SCRIPT,
            credentials.account_name.get_secret_value(),
            credentials.account_password.get_secret_value(),
            credentials.auth_base64.get_secret_value(),
            SESSION_OUTPUT_ARG,
        ]
        logger.info("session_generation_started", script=SESSION_SCRIPT)
        result = await tools.run(
            command,
            timeout=self._session_timeout,
            redact_values=credentials.secret_values(),
        )
        if not result.success:
            raise SessionProvisionError(
                f"Session generation failed: {result.failure_summary()}",
                operation="generate",
            )
        logger.info("session_generated", duration_ms=result.duration_ms)

    def _collect(self, generated: Path) -> Path:
        destination = self._output_dir / SESSIONS_FILE
        if not generated.is_file():
            raise SessionProvisionError(
                f"{SESSIONS_FILE} not found at {generated}",
                operation="collect",
            )
        try:
            atomic_write_text(destination, generated.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise SessionProvisionError(
                f"Failed to copy {SESSIONS_FILE}: {e}",
                operation="collect",
            ) from e
        logger.info("artifact_written", artifact=SESSIONS_FILE, path=str(destination))
        return destination
