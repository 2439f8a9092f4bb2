"""Download a remote template, transform it and write it atomically."""

from __future__ import annotations

import asyncio
import time
from pathlib import Path

import aiohttp

from nitterboot.artifacts.models import ArtifactSpec, TextTransform
from nitterboot.exceptions import ArtifactFetchError
from nitterboot.logging import get_logger
from nitterboot.utils.atomic import atomic_write_text

__all__ = ["DEFAULT_HTTP_TIMEOUT", "ArtifactFetcher"]

logger = get_logger(__name__)

DEFAULT_HTTP_TIMEOUT: float = 30.0


class ArtifactFetcher:
    """Fetch text artifacts over HTTP.

    One request per call, no retries. Any failure raises
    :class:`ArtifactFetchError` and leaves the destination as it was.

    Attributes:
        timeout: Total seconds allowed per request.

    Example:
        ```python
        fetcher = ArtifactFetcher(timeout=15.0)
        await fetcher.fetch(url, rewrite_redis_host, Path("nitter.conf"))
        ```
    """

    def __init__(self, timeout: float = DEFAULT_HTTP_TIMEOUT) -> None:
        self.timeout = timeout

    async def fetch(
        self,
        url: str,
        transform: TextTransform,
        local_path: Path,
    ) -> Path:
        """Download ``url``, apply ``transform`` and write ``local_path``.

        Args:
            url: Remote template location.
            transform: Deterministic substitution applied to the body.
            local_path: Destination file. Its parent must exist.

        Returns:
            The written path.

        Raises:
            ArtifactFetchError: On non-2xx status, network error, timeout,
                undecodable body or write failure.
        """
        artifact = local_path.name
        start_time = time.monotonic()
        body = await self._download(url, artifact)
        content = transform(body)

        try:
            atomic_write_text(local_path, content)
        except OSError as e:
            raise ArtifactFetchError(
                f"Failed to write {artifact}: {e}",
                artifact=artifact,
                url=url,
            ) from e

        logger.info(
            "artifact_written",
            artifact=artifact,
            path=str(local_path),
            bytes=len(content.encode("utf-8")),
            duration_ms=int((time.monotonic() - start_time) * 1000),
        )
        return local_path

    async def fetch_spec(self, spec: ArtifactSpec, output_dir: Path) -> Path:
        """Fetch an :class:`ArtifactSpec` into ``output_dir``."""
        return await self.fetch(spec.url, spec.transform, output_dir / spec.filename)

    async def _download(self, url: str, artifact: str) -> str:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        logger.debug("artifact_download_started", artifact=artifact, url=url)
        try:
            async with (
                aiohttp.ClientSession(timeout=timeout) as session,
                session.get(url) as response,
            ):
                if response.status >= 300:
                    raise ArtifactFetchError(
                        f"Failed to download {artifact}: HTTP {response.status}",
                        artifact=artifact,
                        url=url,
                    )
                return await response.text(encoding="utf-8")
        except asyncio.TimeoutError as e:
            raise ArtifactFetchError(
                f"Timed out downloading {artifact} after {self.timeout}s",
                artifact=artifact,
                url=url,
            ) from e
        except aiohttp.ClientError as e:
            raise ArtifactFetchError(
                f"Failed to download {artifact}: {e}",
                artifact=artifact,
                url=url,
            ) from e
        except UnicodeDecodeError as e:
            raise ArtifactFetchError(
                f"Downloaded {artifact} is not valid UTF-8",
                artifact=artifact,
                url=url,
            ) from e
