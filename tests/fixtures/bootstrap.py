"""Fakes for the external collaborators of the bootstrap workflow.

Provides:
- fake_toolchain: stands in for ``git``, ``pip`` and ``get_session.py``
- fake_fetcher: writes canned templates instead of downloading them
- present_tools: makes every required executable resolvable on PATH
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from unittest.mock import patch

import pytest

from nitterboot.artifacts.models import ArtifactSpec
from nitterboot.runners.models import CommandResult

COMPOSE_TEMPLATE = """\
services:
  nitter:
    image: zedeus/nitter:latest
    ports:
      - "127.0.0.1:8080:8080"
  nitter-redis:
    image: redis:6-alpine
"""

CONFIG_TEMPLATE = """\
[Server]
port = 8080

[Cache]
redisHost = "localhost"
redisPort = 6379
"""

SESSION_LINE = '{"oauth_token": "token", "oauth_token_secret": "secret"}\n'


def _ok() -> CommandResult:
    return CommandResult(returncode=0, stdout="", stderr="", duration_ms=1)


class FakeToolchain:
    """Duck-typed CommandRunner emulating the workflow's subprocesses.

    Each command is classified as ``clone``, ``install_session_tools``,
    ``generate_session`` or ``install_scraper``. Register a failing result
    for a class with :meth:`fail`.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str], Path | None]] = []
        self._failures: dict[str, CommandResult] = {}

    def fail(self, kind: str, stderr: str = "boom", returncode: int = 1) -> None:
        self._failures[kind] = CommandResult(
            returncode=returncode, stdout="", stderr=stderr, duration_ms=1
        )

    @property
    def kinds(self) -> list[str]:
        return [kind for kind, _, _ in self.calls]

    @staticmethod
    def classify(command: Sequence[str]) -> str:
        if command[0] == "git":
            return "clone"
        if command[0] == "pip":
            return "install_scraper" if "ntscraper" in command else "install_session_tools"
        if len(command) > 1 and command[1] == "get_session.py":
            return "generate_session"
        raise AssertionError(f"unexpected command: {command}")

    async def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
        redact_values: Sequence[str] = (),
    ) -> CommandResult:
        kind = self.classify(command)
        self.calls.append((kind, list(command), cwd))
        if kind in self._failures:
            return self._failures[kind]

        if kind == "clone":
            target = Path(command[-1])
            (target / "tools").mkdir(parents=True)
            (target / "tools" / "get_session.py").write_text("# session tool\n")
        elif kind == "generate_session":
            assert cwd is not None
            (cwd / command[-1]).resolve().write_text(SESSION_LINE)
        return _ok()


class FakeFetcher:
    """Duck-typed ArtifactFetcher serving canned templates by URL suffix."""

    def __init__(self) -> None:
        self.fetched: list[str] = []

    async def fetch_spec(self, spec: ArtifactSpec, output_dir: Path) -> Path:
        self.fetched.append(spec.url)
        template = COMPOSE_TEMPLATE if spec.url.endswith(".yml") else CONFIG_TEMPLATE
        local_path = output_dir / spec.filename
        local_path.write_text(spec.transform(template))
        return local_path


@pytest.fixture
def fake_toolchain() -> FakeToolchain:
    return FakeToolchain()


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def present_tools() -> Iterator[None]:
    """Resolve every executable name to a fake path."""
    with patch(
        "nitterboot.preflight.dependencies.shutil.which",
        side_effect=lambda name: f"/usr/bin/{name}",
    ):
        yield
