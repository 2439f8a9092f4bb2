"""Validate the account credentials the session tool needs.

Values are wrapped in :class:`pydantic.SecretStr` as soon as they are read,
so they never show up in ``repr`` output, log events or diagnostics.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence

from pydantic import BaseModel, ConfigDict, SecretStr

from nitterboot.constants import (
    ACCOUNT_NAME_VAR,
    ACCOUNT_PASSWORD_VAR,
    AUTH_BASE64_VAR,
    REQUIRED_ENV_VARS,
)
from nitterboot.exceptions import MissingEnvironmentError
from nitterboot.logging import get_logger

__all__ = ["Credentials", "find_missing_variables", "load_credentials"]

logger = get_logger(__name__)


class Credentials(BaseModel):
    """Immutable binding of the required account variables.

    Attributes:
        account_name: Value of ``TWITTER_ACCOUNT_NAME``.
        account_password: Value of ``TWITTER_ACCOUNT_PASSWORD``.
        auth_base64: Value of ``TWITTER_AUTH_BASE64``.
    """

    model_config = ConfigDict(frozen=True)

    account_name: SecretStr
    account_password: SecretStr
    auth_base64: SecretStr

    def secret_values(self) -> tuple[str, ...]:
        """Plain values, for masking captured subprocess output."""
        return (
            self.account_name.get_secret_value(),
            self.account_password.get_secret_value(),
            self.auth_base64.get_secret_value(),
        )


def find_missing_variables(
    names: Sequence[str] = REQUIRED_ENV_VARS,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """Return the names that are unset or empty, in input order."""
    env = os.environ if environ is None else environ
    return [name for name in names if not env.get(name)]


def load_credentials(environ: Mapping[str, str] | None = None) -> Credentials:
    """Read and validate the credential variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        The validated Credentials.

    Raises:
        MissingEnvironmentError: Listing every missing variable, with one
            ``export`` remediation line each.
    """
    env = os.environ if environ is None else environ
    missing = find_missing_variables(REQUIRED_ENV_VARS, env)
    if missing:
        logger.warning("environment_variables_missing", missing=missing)
        raise MissingEnvironmentError(missing)

    logger.debug("environment_ok", variables=list(REQUIRED_ENV_VARS))
    return Credentials(
        account_name=SecretStr(env[ACCOUNT_NAME_VAR]),
        account_password=SecretStr(env[ACCOUNT_PASSWORD_VAR]),
        auth_base64=SecretStr(env[AUTH_BASE64_VAR]),
    )
