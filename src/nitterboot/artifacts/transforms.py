"""Text transforms applied to the downloaded templates."""

from __future__ import annotations

import platform
import re
from functools import partial

from nitterboot.artifacts.models import TextTransform
from nitterboot.constants import (
    ARM64_IMAGE,
    ARM64_MACHINES,
    COMPOSED_REDIS_HOST_LINE,
    DEFAULT_IMAGE,
    LOCAL_REDIS_HOST_LINE,
    X86_64_MACHINES,
)
from nitterboot.logging import get_logger

__all__ = [
    "compose_transform",
    "rewrite_image",
    "rewrite_redis_host",
    "select_image",
]

logger = get_logger(__name__)

# Matches the default image reference but not a longer tag built on it
# (``zedeus/nitter:latest-arm64`` stays intact).
_DEFAULT_IMAGE_PATTERN = re.compile(re.escape(DEFAULT_IMAGE) + r"(?![\w.-])")


def select_image(machine: str | None = None) -> str:
    """Map a CPU architecture name to the container image reference.

    Args:
        machine: Architecture as reported by ``platform.machine()``.
            Defaults to the host's.

    Returns:
        ``zedeus/nitter:latest-arm64`` for arm64/aarch64, otherwise the
        default ``zedeus/nitter:latest``. Unknown architectures log a
        warning and fall back to the default.
    """
    if machine is None:
        machine = platform.machine()
    if machine in ARM64_MACHINES:
        image = ARM64_IMAGE
    elif machine in X86_64_MACHINES:
        image = DEFAULT_IMAGE
    else:
        logger.warning(
            "unknown_architecture",
            machine=machine,
            fallback=DEFAULT_IMAGE,
        )
        image = DEFAULT_IMAGE
    logger.debug("image_selected", machine=machine, image=image)
    return image


def rewrite_image(text: str, image: str) -> str:
    """Replace every reference to the default image with ``image``."""
    if image == DEFAULT_IMAGE:
        return text
    return _DEFAULT_IMAGE_PATTERN.sub(image, text)


def compose_transform(image: str) -> TextTransform:
    """Transform for the compose descriptor bound to ``image``."""
    return partial(rewrite_image, image=image)


def rewrite_redis_host(text: str) -> str:
    """Point the cache host at the compose service instead of localhost.

    Only the exact ``redisHost = "localhost"`` assignment changes; the rest
    of the file is returned byte-for-byte.
    """
    return text.replace(LOCAL_REDIS_HOST_LINE, COMPOSED_REDIS_HOST_LINE)
