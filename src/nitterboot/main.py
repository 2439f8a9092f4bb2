"""CLI entry point for nitterboot.

Running ``nitterboot`` with no arguments bootstraps Nitter into the current
directory (or ``paths.output_dir``).
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from nitterboot import __version__
from nitterboot.cli.common import cli_error_handler
from nitterboot.cli.context import ExitCode, async_command
from nitterboot.cli.output import ProgressReporter
from nitterboot.config import BootstrapConfig, load_config
from nitterboot.logging import configure_logging
from nitterboot.workflow.driver import BootstrapWorkflow
from nitterboot.workflow.results import WorkflowResult

__all__ = ["cli", "resolve_log_level"]

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def resolve_log_level(configured: str, verbose: int, quiet: bool) -> int:
    """Pick the log level. Priority: quiet > verbose > config."""
    if quiet:
        return logging.ERROR
    if verbose > 0:
        return logging.INFO if verbose == 1 else logging.DEBUG
    return _VERBOSITY_LEVELS.get(configured, logging.WARNING)


@async_command
async def _bootstrap(config: BootstrapConfig, reporter: ProgressReporter) -> WorkflowResult:
    workflow = BootstrapWorkflow(
        config,
        on_step_start=reporter.step_started,
        on_step_end=reporter.step_finished,
    )
    return await workflow.run()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="nitterboot")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help="Path to config file (overrides ./nitterboot.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase log verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Only print errors.",
)
def cli(config_file: Path | None, verbose: int, quiet: bool) -> None:
    """Bootstrap a self-hosted Nitter instance.

    Downloads docker-compose.yml and nitter.conf, clones the Nitter
    repository, generates sessions.jsonl from the TWITTER_ACCOUNT_NAME,
    TWITTER_ACCOUNT_PASSWORD and TWITTER_AUTH_BASE64 environment variables,
    then removes the clone and checks the output files.
    """
    # A .env in the invocation directory fills in unset variables only.
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    reporter = ProgressReporter(quiet=quiet)
    with cli_error_handler():
        config = load_config(config_file)
        configure_logging(level=resolve_log_level(config.verbosity, verbose, quiet))
        result = _bootstrap(config, reporter)

    reporter.summary(result)
    if not result.success:
        raise SystemExit(ExitCode.FAILURE)


if __name__ == "__main__":
    cli()
