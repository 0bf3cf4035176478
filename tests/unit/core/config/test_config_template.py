"""Unit tests for config_template module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.bookstore.runtime.config.config_template import (
    apply_environment_overrides,
    load_templated_yaml,
    substitute_env_vars,
)


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "8080"}):
            text = "Server running at http://${HOST}:${PORT}/api"
            assert substitute_env_vars(text) == "Server running at http://localhost:8080/api"

    def test_substitute_env_var_with_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-default_value}") == "default_value"

    def test_substitute_env_var_with_default_when_set(self):
        with patch.dict(os.environ, {"PRESENT_VAR": "actual_value"}):
            assert substitute_env_vars("${PRESENT_VAR:-default_value}") == "actual_value"

    def test_substitute_required_env_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_substitute_required_env_var_custom_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="DB_URL: set the database"):
                substitute_env_vars("${DB_URL:?set the database}")

    def test_text_without_placeholders_is_unchanged(self):
        assert substitute_env_vars("plain: value") == "plain: value"

    def test_comment_lines_are_not_substituted(self):
        text = (
            "# Values support ${VAR} and ${VAR:?message}\n"
            "  port: ${CFG_PORT:-3000}\n"
        )
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars(text) == (
                "# Values support ${VAR} and ${VAR:?message}\n"
                "  port: 3000\n"
            )

    def test_indented_comment_lines_are_not_substituted(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("    # see ${DB_URL}") == "    # see ${DB_URL}"


class TestEnvironmentOverrides:
    def test_prefixed_variables_are_promoted(self):
        with patch.dict(os.environ, {"PRODUCTION_DATABASE_URL": "postgresql://db/x"}, clear=True):
            promoted = apply_environment_overrides("production")

            assert promoted == ["DATABASE_URL"]
            assert os.environ["DATABASE_URL"] == "postgresql://db/x"

    def test_other_environments_are_ignored(self):
        with patch.dict(os.environ, {"PRODUCTION_DATABASE_URL": "postgresql://db/x"}, clear=True):
            assert apply_environment_overrides("development") == []
            assert "DATABASE_URL" not in os.environ


class TestLoadTemplatedYaml:
    def _write(self, tmp_path: Path, content: str) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(content)
        return path

    def test_load_with_substitution(self, tmp_path: Path):
        path = self._write(
            tmp_path,
            """
config:
  app:
    port: ${CFG_APP_PORT:-3000}
  database:
    url: ${CFG_DB_URL:-sqlite:///./x.db}
    pool_size: 7
""",
        )
        with patch.dict(os.environ, {"CFG_DB_URL": "sqlite:///./other.db"}):
            config = load_templated_yaml(path, env_mode="test")

        assert config.app.port == 3000
        assert config.database.url == "sqlite:///./other.db"
        assert config.database.pool_size == 7

    def test_database_mode_follows_app_environment(self, tmp_path: Path):
        path = self._write(tmp_path, "config:\n  app:\n    environment: test\n")
        config = load_templated_yaml(path, env_mode="test")

        assert config.database.environment_mode == "test"

    def test_empty_file_is_rejected(self, tmp_path: Path):
        path = self._write(tmp_path, "")
        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(path, env_mode="test")

    def test_invalid_yaml_is_rejected(self, tmp_path: Path):
        path = self._write(tmp_path, "config: [unclosed")
        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_templated_yaml(path, env_mode="test")

    def test_invalid_values_are_rejected(self, tmp_path: Path):
        path = self._write(tmp_path, "config:\n  app:\n    port: not-a-port\n")
        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path, env_mode="test")

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "absent.yaml", env_mode="test")

    def test_repository_config_file_loads(self):
        config = load_templated_yaml(
            Path(__file__).parents[4] / "config.yaml", env_mode="test"
        )
        assert config.app.port > 0
        assert config.database.pool_recycle == 180
