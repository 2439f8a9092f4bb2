from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from nitterboot.exceptions import ScraperSetupError
from nitterboot.scraper import ScraperScaffolder, render_scraper_script


class TestRenderScraperScript:
    def test_default_instance(self) -> None:
        script = render_scraper_script()

        assert script.startswith("from ntscraper import Nitter\n")
        assert 'instances="http://0.0.0.0:8080/"' in script
        assert 'get_tweet_by_id("x", "1935807158379073823")' in script

    def test_custom_instance(self) -> None:
        assert 'instances="http://nitter.local/"' in render_scraper_script(
            "http://nitter.local/"
        )

    def test_is_valid_python(self) -> None:
        compile(render_scraper_script(), "scrape.py", "exec")


class TestScraperScaffolder:
    async def test_installs_and_writes_script(
        self, temp_dir: Path, mock_runner: MagicMock
    ) -> None:
        scaffolder = ScraperScaffolder(runner=mock_runner, install_timeout=5.0)

        path = await scaffolder.scaffold(temp_dir)

        assert path == temp_dir / "scrape.py"
        assert path.read_text() == render_scraper_script()
        assert mock_runner.run.call_args.args[0] == ["pip", "install", "ntscraper"]
        assert mock_runner.run.call_args.kwargs["timeout"] == 5.0

    async def test_install_failure(
        self, temp_dir: Path, mock_runner: MagicMock, result_factory
    ) -> None:
        mock_runner.run.return_value = result_factory(returncode=1, stderr="offline")

        with pytest.raises(ScraperSetupError, match="offline"):
            await ScraperScaffolder(runner=mock_runner).scaffold(temp_dir)

        assert not (temp_dir / "scrape.py").exists()

    async def test_write_failure(self, temp_dir: Path, mock_runner: MagicMock) -> None:
        with (
            patch(
                "nitterboot.scraper.atomic_write_text",
                side_effect=OSError("no space"),
            ),
            pytest.raises(ScraperSetupError, match="no space"),
        ):
            await ScraperScaffolder(runner=mock_runner).scaffold(temp_dir)
