"""Bootstrap workflow driver.

Runs the provisioning steps strictly in order and stops at the first failure.
The transient repository directory is removed before the output directory
is verified.

Step order:

    check_dependencies -> validate_environment -> fetch_compose ->
    fetch_config -> materialize_repository -> provision_session ->
    scaffold_scraper -> (cleanup) -> verify_setup
"""

from __future__ import annotations

import asyncio
import signal
import time
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from nitterboot.artifacts.fetcher import ArtifactFetcher
from nitterboot.artifacts.models import ArtifactSpec
from nitterboot.artifacts.transforms import (
    compose_transform,
    rewrite_redis_host,
    select_image,
)
from nitterboot.config import BootstrapConfig
from nitterboot.constants import (
    COMPOSE_FILE,
    CONFIG_FILE,
    REQUIRED_ARTIFACTS,
    REQUIRED_ENV_VARS,
)
from nitterboot.exceptions import NitterbootError
from nitterboot.logging import bind_context, get_logger
from nitterboot.preflight.dependencies import ensure_dependencies
from nitterboot.preflight.environment import Credentials, load_credentials
from nitterboot.runners.command import CommandRunner
from nitterboot.scraper import ScraperScaffolder
from nitterboot.session.provisioner import SessionProvisioner
from nitterboot.verify import VerificationResult, verify_setup
from nitterboot.workflow.results import StepResult, WorkflowResult
from nitterboot.workflow.steps import Step
from nitterboot.workspace.manager import RepositoryMaterializer, observe_state
from nitterboot.workspace.models import DirectoryState

__all__ = ["VERIFY_STEP_NAME", "BootstrapWorkflow"]

logger = get_logger(__name__)

VERIFY_STEP_NAME = "verify_setup"

# SIGINT is already turned into cancellation by asyncio.run().
_CANCEL_SIGNALS: tuple[signal.Signals, ...] = tuple(
    sig
    for sig in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None))
    if sig is not None
)


def _elapsed_ms(start_time: float) -> int:
    return int((time.monotonic() - start_time) * 1000)


class BootstrapWorkflow:
    """Provision a self-hosted Nitter instance into the output directory.

    Args:
        config: Loaded configuration.
        environ: Mapping holding the credential variables (default
            ``os.environ``).
        machine: CPU architecture override for image selection.
        runner: Command runner shared by every subprocess step.
        fetcher: Artifact fetcher (default built from ``config.timeouts``).
        on_step_start: Called before each step runs or is skipped.
        on_step_end: Called with each step's result.

    Example:
        ```python
        workflow = BootstrapWorkflow(load_config())
        result = await workflow.run()
        sys.exit(0 if result.success else 1)
        ```
    """

    def __init__(
        self,
        config: BootstrapConfig,
        *,
        environ: Mapping[str, str] | None = None,
        machine: str | None = None,
        runner: CommandRunner | None = None,
        fetcher: ArtifactFetcher | None = None,
        on_step_start: Callable[[Step], None] | None = None,
        on_step_end: Callable[[StepResult], None] | None = None,
    ) -> None:
        self._config = config
        self._environ = environ
        self._machine = machine
        self._output_dir = config.paths.output_dir.resolve()
        self._runner = runner or CommandRunner()
        self._fetcher = fetcher or ArtifactFetcher(timeout=config.timeouts.http_seconds)
        self._materializer = RepositoryMaterializer(
            config.paths.repo_dir,
            config.sources.repo_url,
            runner=self._runner,
            clone_timeout=config.timeouts.clone_seconds,
        )
        self._provisioner = SessionProvisioner(
            self._output_dir,
            runner=self._runner,
            install_timeout=config.timeouts.install_seconds,
            session_timeout=config.timeouts.session_seconds,
        )
        self._scaffolder = ScraperScaffolder(
            config.scraper.instance_url,
            runner=self._runner,
            install_timeout=config.timeouts.install_seconds,
        )
        self._on_step_start = on_step_start
        self._on_step_end = on_step_end
        self._credentials: Credentials | None = None

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    @property
    def repo_dir(self) -> Path:
        return self._materializer.repo_dir

    @property
    def steps(self) -> tuple[Step, ...]:
        """Steps in execution order (verification excluded)."""
        return (
            Step(
                "check_dependencies",
                "Checking dependencies",
                self._check_dependencies,
            ),
            Step(
                "validate_environment",
                "Validating environment variables",
                self._validate_environment,
            ),
            Step("fetch_compose", f"Downloading {COMPOSE_FILE}", self._fetch_compose),
            Step("fetch_config", f"Downloading {CONFIG_FILE}", self._fetch_config),
            Step(
                "materialize_repository",
                "Cloning Nitter repository",
                self._materialize_repository,
                skip_when=lambda: observe_state(self.repo_dir) is DirectoryState.POPULATED,
                skip_reason="repository directory exists and is not empty",
            ),
            Step(
                "provision_session",
                "Generating session credentials",
                self._provision_session,
            ),
            Step(
                "scaffold_scraper",
                "Setting up ntscraper",
                self._scaffold_scraper,
                skip_when=lambda: not self._config.scraper.enabled,
                skip_reason="scraper disabled in configuration",
            ),
        )

    async def run(self) -> WorkflowResult:
        """Run every step, clean up, then verify.

        Cleanup runs whether the steps succeed, fail or are cancelled
        (including SIGTERM/SIGHUP routed to this task). Cancellation is
        re-raised after cleanup.

        Returns:
            The WorkflowResult. Failures are reported here, not raised.
        """
        start_time = time.monotonic()
        bind_context(workflow="bootstrap")
        logger.info(
            "workflow_started",
            output_dir=str(self._output_dir),
            repo_dir=str(self.repo_dir),
        )

        results: list[StepResult] = []
        try:
            with self._signal_guard():
                for step in self.steps:
                    result = await self._run_step(step)
                    results.append(result)
                    if not result.success:
                        break
        finally:
            teardown = self._materializer.teardown()

        verification: VerificationResult | None = None
        if all(r.success for r in results):
            verify_result, verification = self._verify()
            results.append(verify_result)

        workflow_result = WorkflowResult(
            steps=tuple(results),
            verification=verification,
            repo_removed=teardown.removed,
            cleanup_error=teardown.error,
            duration_ms=_elapsed_ms(start_time),
        )
        failed = workflow_result.failed_step
        if workflow_result.success:
            logger.info("workflow_completed", duration_ms=workflow_result.duration_ms)
        elif failed is not None:
            logger.error(
                "workflow_failed",
                step=failed.name,
                error=failed.error,
                duration_ms=workflow_result.duration_ms,
            )
        else:
            logger.error(
                "workflow_failed",
                step="cleanup",
                error=teardown.error,
                duration_ms=workflow_result.duration_ms,
            )
        return workflow_result

    async def _run_step(self, step: Step) -> StepResult:
        if self._on_step_start is not None:
            self._on_step_start(step)

        if step.should_skip():
            logger.info("step_skipped", step=step.name, reason=step.skip_reason)
            result = StepResult.create_skipped(step.name, step.skip_reason)
        else:
            logger.info("step_started", step=step.name)
            start_time = time.monotonic()
            try:
                output = await step.action()
            except NitterbootError as e:
                logger.error("step_failed", step=step.name, error=e.message)
                result = StepResult.create_failure(
                    step.name, e.message, _elapsed_ms(start_time), e.details
                )
            else:
                result = StepResult.create_success(
                    step.name, output, _elapsed_ms(start_time)
                )
                logger.info(
                    "step_completed", step=step.name, duration_ms=result.duration_ms
                )

        if self._on_step_end is not None:
            self._on_step_end(result)
        return result

    def _verify(self) -> tuple[StepResult, VerificationResult | None]:
        start_time = time.monotonic()
        try:
            verification = verify_setup(self._output_dir, REQUIRED_ARTIFACTS)
        except NitterbootError as e:
            result = StepResult.create_failure(
                VERIFY_STEP_NAME, e.message, _elapsed_ms(start_time), e.details
            )
            verification = None
        else:
            result = StepResult.create_success(
                VERIFY_STEP_NAME, verification, _elapsed_ms(start_time)
            )
        if self._on_step_end is not None:
            self._on_step_end(result)
        return result, verification

    @contextmanager
    def _signal_guard(self) -> Iterator[None]:
        """Route SIGTERM/SIGHUP to cancellation of the running task."""
        loop = asyncio.get_running_loop()
        task = asyncio.current_task()
        installed: list[signal.Signals] = []
        if task is not None:
            for sig in _CANCEL_SIGNALS:
                try:
                    loop.add_signal_handler(sig, self._on_signal, sig, task)
                except (NotImplementedError, RuntimeError, ValueError):
                    # Unsupported platform or not the main thread.
                    logger.debug("signal_handler_unavailable", signal=sig.name)
                    continue
                installed.append(sig)
        try:
            yield
        finally:
            for sig in installed:
                loop.remove_signal_handler(sig)

    @staticmethod
    def _on_signal(sig: signal.Signals, task: asyncio.Task[Any]) -> None:
        logger.warning("signal_received", signal=sig.name)
        task.cancel()

    # =====================================================================
    # Step actions
    # =====================================================================

    async def _check_dependencies(self) -> list[str]:
        statuses = ensure_dependencies(self._config.preflight.required_tools)
        return [s.name for s in statuses]

    async def _validate_environment(self) -> list[str]:
        self._credentials = load_credentials(self._environ)
        return list(REQUIRED_ENV_VARS)

    async def _fetch_compose(self) -> dict[str, str]:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        image = select_image(self._machine)
        artifact = ArtifactSpec(
            COMPOSE_FILE, self._config.sources.compose_url, compose_transform(image)
        )
        path = await self._fetcher.fetch_spec(artifact, self._output_dir)
        return {"path": str(path), "image": image}

    async def _fetch_config(self) -> dict[str, str]:
        artifact = ArtifactSpec(
            CONFIG_FILE, self._config.sources.config_url, rewrite_redis_host
        )
        path = await self._fetcher.fetch_spec(artifact, self._output_dir)
        return {"path": str(path)}

    async def _materialize_repository(self) -> str:
        result = await self._materializer.materialize()
        return result.observed.value

    async def _provision_session(self) -> str:
        if self._credentials is None:
            raise NitterbootError("Credentials were not validated before provisioning")
        path = await self._provisioner.provision(self.repo_dir, self._credentials)
        return str(path)

    async def _scaffold_scraper(self) -> str:
        path = await self._scaffolder.scaffold(self._output_dir)
        return str(path)
