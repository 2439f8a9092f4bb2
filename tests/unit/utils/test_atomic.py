"""Tests for atomic text writes."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from nitterboot.utils.atomic import atomic_write_text


class TestAtomicWriteText:
    def test_creates_file(self, temp_dir: Path) -> None:
        target = temp_dir / "nitter.conf"

        assert atomic_write_text(target, "redisPort = 6379\n") == target
        assert target.read_text() == "redisPort = 6379\n"

    def test_overwrites_existing(self, temp_dir: Path) -> None:
        target = temp_dir / "nitter.conf"
        target.write_text("old")

        atomic_write_text(str(target), "new")

        assert target.read_text() == "new"

    def test_missing_parent_raises(self, temp_dir: Path) -> None:
        with pytest.raises(OSError):
            atomic_write_text(temp_dir / "absent" / "file.txt", "x")

    def test_interrupted_write_keeps_original(self, temp_dir: Path) -> None:
        target = temp_dir / "nitter.conf"
        target.write_text("original")

        with (
            patch(
                "atomicwrites.AtomicWriter.commit",
                side_effect=OSError("rename failed"),
            ),
            pytest.raises(OSError),
        ):
            atomic_write_text(target, "replacement")

        assert target.read_text() == "original"
        assert [p.name for p in temp_dir.iterdir()] == ["nitter.conf"]
