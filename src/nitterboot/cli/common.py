from __future__ import annotations

import asyncio
from collections.abc import Generator
from contextlib import contextmanager

from nitterboot.cli.context import ExitCode
from nitterboot.cli.output import print_error
from nitterboot.exceptions import NitterbootError
from nitterboot.logging import get_logger

__all__ = ["cli_error_handler"]


@contextmanager
def cli_error_handler() -> Generator[None, None, None]:
    """Map exceptions escaping a command to a diagnostic and an exit code.

    - KeyboardInterrupt or a termination signal: exit 130
    - NitterbootError: message plus detail lines, exit 1
    - Anything else: logged with traceback, exit 1

    Example:
        >>> with cli_error_handler():
        >>>     asyncio.run(workflow.run())
    """
    logger = get_logger(__name__)

    try:
        yield
    except KeyboardInterrupt:
        print_error("Interrupted by user.")
        raise SystemExit(ExitCode.INTERRUPTED) from None
    except asyncio.CancelledError:
        # SIGTERM/SIGHUP arrive as cancellation of the workflow task.
        print_error("Interrupted by termination signal.")
        raise SystemExit(ExitCode.INTERRUPTED) from None
    except NitterbootError as e:
        print_error(e.message, e.details)
        raise SystemExit(ExitCode.FAILURE) from e
    except Exception as e:
        logger.exception("unexpected_error")
        print_error(f"Unexpected error: {e!s}")
        raise SystemExit(ExitCode.FAILURE) from e
