from __future__ import annotations

from pathlib import Path

import pytest

from nitterboot.exceptions import MissingArtifactsError
from nitterboot.verify import find_missing_artifacts, verify_setup

REQUIRED = ("docker-compose.yml", "nitter.conf", "sessions.jsonl")


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_text("x")


class TestFindMissingArtifacts:
    def test_all_present(self, temp_dir: Path) -> None:
        _touch(temp_dir, *REQUIRED)
        assert find_missing_artifacts(temp_dir) == []

    def test_reports_missing_in_required_order(self, temp_dir: Path) -> None:
        _touch(temp_dir, "nitter.conf")
        assert find_missing_artifacts(temp_dir) == [
            "docker-compose.yml",
            "sessions.jsonl",
        ]

    def test_directory_with_artifact_name_does_not_count(self, temp_dir: Path) -> None:
        _touch(temp_dir, "docker-compose.yml", "nitter.conf")
        (temp_dir / "sessions.jsonl").mkdir()
        assert find_missing_artifacts(temp_dir) == ["sessions.jsonl"]


class TestVerifySetup:
    def test_success(self, temp_dir: Path) -> None:
        _touch(temp_dir, *REQUIRED)

        result = verify_setup(temp_dir)

        assert result.output_dir == temp_dir
        assert result.present == REQUIRED

    def test_names_every_missing_file(self, temp_dir: Path) -> None:
        _touch(temp_dir, "docker-compose.yml")

        with pytest.raises(MissingArtifactsError) as exc_info:
            verify_setup(temp_dir)

        assert exc_info.value.missing == ("nitter.conf", "sessions.jsonl")
        assert exc_info.value.message == (
            "Missing required files: nitter.conf sessions.jsonl"
        )
