from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from click.testing import CliRunner
from pydantic import SecretStr

from nitterboot.logging import clear_context, configure_logging
from nitterboot.preflight.environment import Credentials
from nitterboot.runners.models import CommandResult

# Register fixture plugins from tests/fixtures/
pytest_plugins = [
    "tests.fixtures.bootstrap",
]

TEST_CREDENTIALS = {
    "TWITTER_ACCOUNT_NAME": "nitter_bot",
    "TWITTER_ACCOUNT_PASSWORD": "hunter2-pw",
    "TWITTER_AUTH_BASE64": "SEVMTE8tVE9UUA==",
}


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Log to stderr at WARNING so test output stays readable."""
    configure_logging(level=logging.WARNING)
    yield
    clear_context()


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Temporary directory, resolved so symlinked tmp roots compare equal."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove NITTERBOOT_* and TWITTER_* variables for the test's duration."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith(("NITTERBOOT_", "TWITTER_")):
            del os.environ[key]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def credentials_env() -> dict[str, str]:
    """Environment mapping holding all three credential variables."""
    return dict(TEST_CREDENTIALS)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        account_name=SecretStr(TEST_CREDENTIALS["TWITTER_ACCOUNT_NAME"]),
        account_password=SecretStr(TEST_CREDENTIALS["TWITTER_ACCOUNT_PASSWORD"]),
        auth_base64=SecretStr(TEST_CREDENTIALS["TWITTER_AUTH_BASE64"]),
    )


def make_result(
    returncode: int = 0,
    stdout: str = "",
    stderr: str = "",
    timed_out: bool = False,
) -> CommandResult:
    """Build a CommandResult for stubbed runners."""
    return CommandResult(
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
        duration_ms=5,
        timed_out=timed_out,
    )


@pytest.fixture
def mock_runner() -> MagicMock:
    """CommandRunner stand-in whose ``run`` succeeds by default.

    Configure per test through ``mock_runner.run.side_effect``.
    """
    runner = MagicMock()
    runner.run = AsyncMock(return_value=make_result())
    return runner


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def result_factory():
    """Factory fixture for CommandResult values."""
    return make_result
