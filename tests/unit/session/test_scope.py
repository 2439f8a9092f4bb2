from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from nitterboot.exceptions import WorkingDirectoryError
from nitterboot.session.scope import ScopedDirectory


class TestScopedDirectory:
    def test_missing_directory_raises_on_enter(
        self, temp_dir: Path, mock_runner: MagicMock
    ) -> None:
        with pytest.raises(WorkingDirectoryError) as exc_info:
            with ScopedDirectory(temp_dir / "tools", mock_runner):
                pass

        assert exc_info.value.path == temp_dir / "tools"

    async def test_run_uses_scope_as_cwd(
        self, temp_dir: Path, mock_runner: MagicMock
    ) -> None:
        with ScopedDirectory(temp_dir, mock_runner) as scope:
            await scope.run(["pip", "install", "pyotp"], timeout=9.0)

        kwargs = mock_runner.run.call_args.kwargs
        assert kwargs["cwd"] == temp_dir
        assert kwargs["timeout"] == 9.0

    async def test_process_cwd_never_changes(
        self, temp_dir: Path, mock_runner: MagicMock
    ) -> None:
        original = os.getcwd()

        with pytest.raises(RuntimeError):
            with ScopedDirectory(temp_dir, mock_runner) as scope:
                await scope.run(["true"])
                assert os.getcwd() == original
                raise RuntimeError("boom")

        assert os.getcwd() == original

    async def test_run_outside_block_is_rejected(
        self, temp_dir: Path, mock_runner: MagicMock
    ) -> None:
        scope = ScopedDirectory(temp_dir, mock_runner)
        with scope:
            assert scope.active is True
        assert scope.active is False

        with pytest.raises(WorkingDirectoryError):
            await scope.run(["true"])
        mock_runner.run.assert_not_awaited()

    def test_resolve_relative_path(self, temp_dir: Path, mock_runner: MagicMock) -> None:
        tools = temp_dir / "tools"
        tools.mkdir()

        with ScopedDirectory(tools, mock_runner) as scope:
            assert scope.resolve("../sessions.jsonl") == temp_dir / "sessions.jsonl"
