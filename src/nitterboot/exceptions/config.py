from __future__ import annotations

from typing import Any

from nitterboot.exceptions.base import NitterbootError


class ConfigError(NitterbootError):
    """Configuration could not be loaded, parsed, or validated.

    Attributes:
        message: Human-readable error message.
        field: Dotted name of the offending field, if known.
        value: The rejected value, if known.

    Examples:
        ```python
        raise ConfigError(
            "Invalid configuration: Input should be greater than 0",
            field="timeouts.http_seconds",
            value=-1,
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        self.field = field
        self.value = value
        details: list[str] = []
        if field:
            details.append(f"Field: {field}")
        if value is not None:
            details.append(f"Value: {value}")
        super().__init__(message, tuple(details))
