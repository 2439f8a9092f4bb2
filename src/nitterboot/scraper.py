"""Scaffold a starter ntscraper script pointed at the local instance."""

from __future__ import annotations

from pathlib import Path

from nitterboot.constants import (
    DEFAULT_INSTANCE_URL,
    SCRAPER_PACKAGE,
    SCRAPER_SCRIPT_FILE,
)
from nitterboot.exceptions import ScraperSetupError
from nitterboot.logging import get_logger
from nitterboot.runners.command import CommandRunner
from nitterboot.utils.atomic import atomic_write_text

__all__ = ["ScraperScaffolder", "render_scraper_script"]

logger = get_logger(__name__)

DEFAULT_INSTALL_TIMEOUT: float = 600.0

_SCRIPT_TEMPLATE = """\
from ntscraper import Nitter

scraper = Nitter(log_level=1, skip_instance_check=False, instances="{instance_url}")

# Example usage
tweet = scraper.get_tweet_by_id("x", "1935807158379073823")
print(tweet)
"""


def render_scraper_script(instance_url: str = DEFAULT_INSTANCE_URL) -> str:
    """Return the starter script source for ``instance_url``."""
    return _SCRIPT_TEMPLATE.format(instance_url=instance_url)


class ScraperScaffolder:
    """Install ntscraper and write ``scrape.py``."""

    def __init__(
        self,
        instance_url: str = DEFAULT_INSTANCE_URL,
        *,
        runner: CommandRunner | None = None,
        install_timeout: float = DEFAULT_INSTALL_TIMEOUT,
        pip: str = "pip",
    ) -> None:
        self._instance_url = instance_url
        self._runner = runner or CommandRunner()
        self._install_timeout = install_timeout
        self._pip = pip

    async def scaffold(self, output_dir: Path) -> Path:
        """Install the client library and write the starter script.

        Raises:
            ScraperSetupError: If the install fails or the script cannot be
                written.
        """
        logger.info("scraper_install_started", package=SCRAPER_PACKAGE)
        result = await self._runner.run(
            [self._pip, "install", SCRAPER_PACKAGE],
            cwd=output_dir,
            timeout=self._install_timeout,
        )
        if not result.success:
            raise ScraperSetupError(
                f"Failed to install {SCRAPER_PACKAGE}: {result.failure_summary()}"
            )

        script_path = output_dir / SCRAPER_SCRIPT_FILE
        try:
            atomic_write_text(script_path, render_scraper_script(self._instance_url))
        except OSError as e:
            raise ScraperSetupError(f"Failed to write {SCRAPER_SCRIPT_FILE}: {e}") from e

        logger.info("artifact_written", artifact=SCRAPER_SCRIPT_FILE, path=str(script_path))
        return script_path
