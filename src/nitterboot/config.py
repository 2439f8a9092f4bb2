from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from nitterboot.constants import (
    COMPOSE_TEMPLATE_URL,
    CONFIG_TEMPLATE_URL,
    DEFAULT_INSTANCE_URL,
    NITTER_REPO_URL,
    REPO_DIR_NAME,
    REQUIRED_TOOLS,
)
from nitterboot.exceptions import ConfigError
from nitterboot.logging import get_logger

__all__ = [
    "BootstrapConfig",
    "PathsConfig",
    "PreflightConfig",
    "ScraperConfig",
    "SourcesConfig",
    "TimeoutsConfig",
    "get_user_config_path",
    "load_config",
]

logger = get_logger(__name__)

#: Project config file looked up in the current directory.
PROJECT_CONFIG_FILE = "nitterboot.yaml"

# Explicit --config path for the duration of one load_config() call.
_project_config_override: Path | None = None


class SourcesConfig(BaseModel):
    """Remote locations for the repository and the two templates."""

    repo_url: str = NITTER_REPO_URL
    compose_url: str = COMPOSE_TEMPLATE_URL
    config_url: str = CONFIG_TEMPLATE_URL


class PathsConfig(BaseModel):
    """Local layout.

    Attributes:
        output_dir: Directory receiving the artifacts (default: cwd at load).
        repo_dir_name: Name of the transient repository directory created
            inside ``output_dir``.
    """

    output_dir: Path = Field(default_factory=Path.cwd)
    repo_dir_name: str = REPO_DIR_NAME

    @field_validator("repo_dir_name")
    @classmethod
    def check_plain_name(cls, v: str) -> str:
        """The repository directory is removed on exit, so it must stay a
        direct child of ``output_dir``."""
        if not v or v in {".", ".."} or "/" in v or "\\" in v:
            raise ValueError("repo_dir_name must be a plain directory name")
        return v

    @property
    def repo_dir(self) -> Path:
        """Absolute path of the transient repository directory."""
        return self.output_dir.resolve() / self.repo_dir_name


class PreflightConfig(BaseModel):
    """Executables that must be on PATH before anything runs."""

    required_tools: list[str] = Field(default_factory=lambda: list(REQUIRED_TOOLS))


class TimeoutsConfig(BaseModel):
    """Upper bounds for each external call, in seconds."""

    http_seconds: float = Field(default=30.0, gt=0.0, le=600.0)
    clone_seconds: float = Field(default=600.0, gt=0.0, le=3600.0)
    install_seconds: float = Field(default=600.0, gt=0.0, le=3600.0)
    session_seconds: float = Field(default=300.0, gt=0.0, le=3600.0)


class ScraperConfig(BaseModel):
    """Settings for the optional ntscraper starter script."""

    enabled: bool = True
    instance_url: str = DEFAULT_INSTANCE_URL


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source reading one YAML file (missing file = no values)."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {yaml_file}: {e}") from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    f"Config file {yaml_file} must contain a mapping",
                    value=type(loaded).__name__,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config_data


class BootstrapConfig(BaseSettings):
    """Root configuration for a bootstrap run."""

    model_config = SettingsConfigDict(
        env_prefix="NITTERBOOT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    preflight: PreflightConfig = Field(default_factory=PreflightConfig)
    timeouts: TimeoutsConfig = Field(default_factory=TimeoutsConfig)
    scraper: ScraperConfig = Field(default_factory=ScraperConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Order sources from highest to lowest priority.

        1. Explicit init kwargs
        2. Environment variables (NITTERBOOT_*)
        3. Project YAML (./nitterboot.yaml or --config)
        4. User YAML (~/.config/nitterboot/config.yaml)
        """
        project_config_path = _project_config_override or (
            Path.cwd() / PROJECT_CONFIG_FILE
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Return ``~/.config/nitterboot/config.yaml``."""
    return Path.home() / ".config" / "nitterboot" / "config.yaml"


def load_config(
    config_path: Path | None = None,
    **overrides: Any,
) -> BootstrapConfig:
    """Load configuration: defaults -> user -> project -> env -> overrides.

    Args:
        config_path: Project config file. Defaults to ./nitterboot.yaml.
        **overrides: Section values taking precedence over every source
            (used by tests and embedding callers).

    Returns:
        The merged BootstrapConfig.

    Raises:
        ConfigError: If a file is unreadable or a value is invalid.
    """
    if config_path is not None and not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    if config_path is None and not (Path.cwd() / PROJECT_CONFIG_FILE).exists():
        logger.debug("project_config_not_found", using="defaults")

    global _project_config_override
    _project_config_override = config_path
    try:
        return BootstrapConfig(**overrides)
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_override = None
