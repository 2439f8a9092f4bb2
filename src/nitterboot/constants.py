"""Fixed constants for the Nitter bootstrap workflow.

Remote locations and filenames here are defaults; every remote URL and the
repository directory name can be overridden through :mod:`nitterboot.config`.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Remote sources
# =============================================================================

NITTER_REPO_URL: Final[str] = "https://github.com/zedeus/nitter"

COMPOSE_TEMPLATE_URL: Final[str] = (
    "https://raw.githubusercontent.com/zedeus/nitter/refs/heads/master/"
    "docker-compose.yml"
)

CONFIG_TEMPLATE_URL: Final[str] = (
    "https://raw.githubusercontent.com/zedeus/nitter/refs/heads/master/"
    "nitter.example.conf"
)

# =============================================================================
# Local layout
# =============================================================================

#: Name of the transient repository directory inside the output directory.
REPO_DIR_NAME: Final[str] = "nitter"

#: Subdirectory of the repository holding the session tooling.
SESSION_TOOLS_SUBDIR: Final[str] = "tools"

#: Session acquisition script inside :data:`SESSION_TOOLS_SUBDIR`.
SESSION_SCRIPT: Final[str] = "get_session.py"

COMPOSE_FILE: Final[str] = "docker-compose.yml"
CONFIG_FILE: Final[str] = "nitter.conf"
SESSIONS_FILE: Final[str] = "sessions.jsonl"
SCRAPER_SCRIPT_FILE: Final[str] = "scrape.py"

#: Artifacts the setup verifier requires after the workflow completes.
REQUIRED_ARTIFACTS: Final[tuple[str, ...]] = (
    COMPOSE_FILE,
    CONFIG_FILE,
    SESSIONS_FILE,
)

# =============================================================================
# Container images
# =============================================================================

DEFAULT_IMAGE: Final[str] = "zedeus/nitter:latest"
ARM64_IMAGE: Final[str] = "zedeus/nitter:latest-arm64"

X86_64_MACHINES: Final[frozenset[str]] = frozenset({"x86_64"})
ARM64_MACHINES: Final[frozenset[str]] = frozenset({"arm64", "aarch64"})

# =============================================================================
# Service config rewrite
# =============================================================================

LOCAL_REDIS_HOST_LINE: Final[str] = 'redisHost = "localhost"'
COMPOSED_REDIS_HOST_LINE: Final[str] = 'redisHost = "nitter-redis"'

# =============================================================================
# Preflight
# =============================================================================

REQUIRED_TOOLS: Final[tuple[str, ...]] = ("git", "docker", "python3", "pip")

TOOL_INSTALL_HINTS: Final[dict[str, str]] = {
    "git": "https://git-scm.com/downloads",
    "docker": "https://docs.docker.com/get-docker/",
    "python3": "https://www.python.org/downloads/",
    "pip": "https://pip.pypa.io/en/stable/installation/",
}

ACCOUNT_NAME_VAR: Final[str] = "TWITTER_ACCOUNT_NAME"
ACCOUNT_PASSWORD_VAR: Final[str] = "TWITTER_ACCOUNT_PASSWORD"
AUTH_BASE64_VAR: Final[str] = "TWITTER_AUTH_BASE64"

REQUIRED_ENV_VARS: Final[tuple[str, ...]] = (
    ACCOUNT_NAME_VAR,
    ACCOUNT_PASSWORD_VAR,
    AUTH_BASE64_VAR,
)

# =============================================================================
# Session tooling and scraper
# =============================================================================

SESSION_TOOL_PACKAGES: Final[tuple[str, ...]] = ("pyotp", "requests")

SCRAPER_PACKAGE: Final[str] = "ntscraper"

DEFAULT_INSTANCE_URL: Final[str] = "http://0.0.0.0:8080/"
