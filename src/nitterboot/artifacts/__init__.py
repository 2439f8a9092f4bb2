"""Remote template artifacts: the compose descriptor and the service config."""

from __future__ import annotations

from nitterboot.artifacts.fetcher import ArtifactFetcher
from nitterboot.artifacts.models import ArtifactSpec, TextTransform
from nitterboot.artifacts.transforms import (
    compose_transform,
    rewrite_image,
    rewrite_redis_host,
    select_image,
)

__all__ = [
    "ArtifactFetcher",
    "ArtifactSpec",
    "TextTransform",
    "compose_transform",
    "rewrite_image",
    "rewrite_redis_host",
    "select_image",
]
