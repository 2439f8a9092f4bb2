"""Exit codes and the sync-to-async bridge for click commands."""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from enum import IntEnum
from typing import Any, TypeVar

__all__ = ["ExitCode", "async_command"]


class ExitCode(IntEnum):
    """Process exit codes.

    - 0 for a fully successful bootstrap
    - 1 for any aborted step or failed verification
    - 130 for interruption (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


F = TypeVar("F", bound=Callable[..., Any])


def async_command(f: F) -> F:
    """Run an async click command body with ``asyncio.run()``."""

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))

    return wrapper  # type: ignore[return-value]
