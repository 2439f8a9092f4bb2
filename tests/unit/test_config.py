"""Tests for configuration loading and precedence."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from nitterboot.config import load_config
from nitterboot.exceptions import ConfigError


@pytest.fixture
def isolated_config(temp_dir: Path, clean_env, monkeypatch) -> Path:
    """Run from an empty directory with no user config file."""
    monkeypatch.chdir(temp_dir)
    user_config = temp_dir / "home" / "config.yaml"
    with patch("nitterboot.config.get_user_config_path", return_value=user_config):
        yield temp_dir


class TestDefaults:
    def test_defaults(self, isolated_config: Path) -> None:
        config = load_config()

        assert config.sources.repo_url == "https://github.com/zedeus/nitter"
        assert config.sources.compose_url.endswith("/docker-compose.yml")
        assert config.sources.config_url.endswith("/nitter.example.conf")
        assert config.paths.output_dir == isolated_config
        assert config.paths.repo_dir == isolated_config / "nitter"
        assert config.preflight.required_tools == ["git", "docker", "python3", "pip"]
        assert config.timeouts.http_seconds == 30.0
        assert config.scraper.enabled is True
        assert config.scraper.instance_url == "http://0.0.0.0:8080/"
        assert config.verbosity == "warning"


class TestSources:
    def test_project_yaml(self, isolated_config: Path) -> None:
        (isolated_config / "nitterboot.yaml").write_text(
            "scraper:\n  enabled: false\ntimeouts:\n  http_seconds: 5\n"
        )

        config = load_config()

        assert config.scraper.enabled is False
        assert config.timeouts.http_seconds == 5.0

    def test_explicit_config_path(self, isolated_config: Path) -> None:
        custom = isolated_config / "custom.yaml"
        custom.write_text("paths:\n  repo_dir_name: nitter-src\n")

        config = load_config(custom)

        assert config.paths.repo_dir_name == "nitter-src"

    def test_explicit_path_is_not_sticky(self, isolated_config: Path) -> None:
        custom = isolated_config / "custom.yaml"
        custom.write_text("verbosity: debug\n")
        load_config(custom)

        assert load_config().verbosity == "warning"

    def test_user_yaml_is_lowest_priority(self, temp_dir: Path, clean_env, monkeypatch) -> None:
        monkeypatch.chdir(temp_dir)
        user_config = temp_dir / "user.yaml"
        user_config.write_text("verbosity: debug\nscraper:\n  enabled: false\n")
        (temp_dir / "nitterboot.yaml").write_text("verbosity: info\n")

        with patch("nitterboot.config.get_user_config_path", return_value=user_config):
            config = load_config()

        assert config.verbosity == "info"
        assert config.scraper.enabled is False

    def test_environment_overrides_yaml(
        self, isolated_config: Path, monkeypatch
    ) -> None:
        (isolated_config / "nitterboot.yaml").write_text("verbosity: info\n")
        monkeypatch.setenv("NITTERBOOT_VERBOSITY", "error")
        monkeypatch.setenv("NITTERBOOT_TIMEOUTS__CLONE_SECONDS", "90")

        config = load_config()

        assert config.verbosity == "error"
        assert config.timeouts.clone_seconds == 90.0

    def test_overrides_take_precedence(self, isolated_config: Path) -> None:
        config = load_config(verbosity="debug")
        assert config.verbosity == "debug"


class TestErrors:
    def test_missing_explicit_file(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(isolated_config / "absent.yaml")

    def test_invalid_yaml(self, isolated_config: Path) -> None:
        (isolated_config / "nitterboot.yaml").write_text("scraper: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config()

    def test_non_mapping_yaml(self, isolated_config: Path) -> None:
        (isolated_config / "nitterboot.yaml").write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_config()

    def test_invalid_value_names_field(self, isolated_config: Path) -> None:
        (isolated_config / "nitterboot.yaml").write_text(
            "timeouts:\n  http_seconds: 0\n"
        )

        with pytest.raises(ConfigError) as exc_info:
            load_config()

        assert exc_info.value.field == "timeouts.http_seconds"
        assert exc_info.value.value == 0

    @pytest.mark.parametrize("name", ["", "..", "a/b"])
    def test_repo_dir_name_must_be_plain(self, isolated_config: Path, name: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(paths={"repo_dir_name": name})

        assert exc_info.value.field == "paths.repo_dir_name"

    def test_bad_verbosity(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(verbosity="loud")
