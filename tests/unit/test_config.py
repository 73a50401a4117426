"""Test cases for configuration system."""

import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from versionname.config import (
    DEFAULT_MANIFEST_ATTRIBUTE,
    DEFAULT_MANIFEST_PATH,
    DEFAULT_PROPERTIES_FILE_PATH,
    DEFAULT_PROPERTY,
    ResolverConfig,
    _load_from_env,
    _load_from_pyproject_toml,
    load_config,
    load_config_or_defaults,
)


class TestResolverConfig:
    """Test cases for ResolverConfig Pydantic model."""

    def test_default_values(self) -> None:
        """Test that ResolverConfig defaults to the documented constants."""
        config = ResolverConfig()
        assert config.properties_path == DEFAULT_PROPERTIES_FILE_PATH
        assert config.property_key == DEFAULT_PROPERTY
        assert config.manifest_path == DEFAULT_MANIFEST_PATH
        assert config.manifest_attribute == DEFAULT_MANIFEST_ATTRIBUTE
        assert config.search_paths is None
        assert config.verbose is False

    def test_verbose_description_matches_log_level(self) -> None:
        """Test that the verbose field documents the level lookups log at."""
        description = ResolverConfig.model_fields["verbose"].description
        assert description is not None
        assert "INFO" in description

    def test_extra_fields_forbidden(self) -> None:
        """Test that extra fields are forbidden."""
        with pytest.raises(ValidationError) as exc_info:
            ResolverConfig(sentinel="x")  # type: ignore[call-arg]

        errors = exc_info.value.errors()
        assert any("extra" in str(error).lower() for error in errors)


class TestLoadFromEnv:
    """Test cases for _load_from_env function."""

    def test_load_all_env_variables(self) -> None:
        """Test loading all environment variables."""
        env_vars = {
            "VERSIONNAME_PROPERTIES_PATH": "build.properties",
            "VERSIONNAME_PROPERTY_KEY": "build.version",
            "VERSIONNAME_MANIFEST_PATH": "MANIFEST.MF",
            "VERSIONNAME_MANIFEST_ATTRIBUTE": "Implementation-Version",
            "VERSIONNAME_SEARCH_PATHS": os.pathsep.join(["/a", "", "/b"]),
            "VERSIONNAME_VERBOSE": "yes",
        }
        with patch.dict(os.environ, env_vars, clear=True):
            config = _load_from_env()

        assert config == {
            "properties_path": "build.properties",
            "property_key": "build.version",
            "manifest_path": "MANIFEST.MF",
            "manifest_attribute": "Implementation-Version",
            "search_paths": ["/a", "/b"],
            "verbose": True,
        }

    @pytest.mark.parametrize("value", ["false", "0", "no", "off", "anything"])
    def test_verbose_false_values(self, value: str) -> None:
        with patch.dict(os.environ, {"VERSIONNAME_VERBOSE": value}, clear=True):
            assert _load_from_env() == {"verbose": False}

    def test_empty_environment(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert _load_from_env() == {}


class TestLoadFromPyprojectToml:
    """Test cases for _load_from_pyproject_toml function."""

    def test_section_found_in_parent(self, tmp_path: Path) -> None:
        """Test that the nearest pyproject.toml up the tree is used."""
        (tmp_path / "pyproject.toml").write_text(
            '[tool.versionname]\nproperty_key = "build.version"\n'
        )
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert _load_from_pyproject_toml(nested) == {"property_key": "build.version"}

    def test_no_section(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        assert _load_from_pyproject_toml(tmp_path) == {}

    def test_invalid_toml_skipped(self, tmp_path: Path) -> None:
        """Test that an unreadable file is skipped."""
        (tmp_path / "pyproject.toml").write_text("not = [valid")
        assert _load_from_pyproject_toml(tmp_path) == {}


class TestLoadConfig:
    """Test cases for load_config priority order."""

    def test_priority_order(self) -> None:
        """Test runtime > env > pyproject > defaults."""
        file_config: dict[str, Any] = {
            "property_key": "from-file",
            "manifest_path": "from-file.MF",
            "manifest_attribute": "From-File",
        }
        env_config: dict[str, Any] = {
            "property_key": "from-env",
            "manifest_path": "from-env.MF",
        }
        with patch(
            "versionname.config._load_from_pyproject_toml", return_value=file_config
        ), patch("versionname.config._load_from_env", return_value=env_config):
            config = load_config(property_key="from-runtime")

        assert config.property_key == "from-runtime"
        assert config.manifest_path == "from-env.MF"
        assert config.manifest_attribute == "From-File"
        assert config.properties_path == DEFAULT_PROPERTIES_FILE_PATH

    def test_unknown_file_key_rejected(self) -> None:
        """Test that unknown keys in the project config are rejected."""
        with patch(
            "versionname.config._load_from_pyproject_toml",
            return_value={"unknown": 1},
        ), patch("versionname.config._load_from_env", return_value={}):
            with pytest.raises(ValidationError):
                load_config()

    def test_none_runtime_values_ignored(self) -> None:
        with patch(
            "versionname.config._load_from_pyproject_toml", return_value={}
        ), patch("versionname.config._load_from_env", return_value={}):
            assert load_config(verbose=None) == ResolverConfig()


class TestLoadConfigOrDefaults:
    """Test cases for load_config_or_defaults."""

    def test_returns_merged_config(self) -> None:
        with patch(
            "versionname.config._load_from_pyproject_toml",
            return_value={"property_key": "build"},
        ), patch("versionname.config._load_from_env", return_value={}):
            assert load_config_or_defaults().property_key == "build"

    def test_invalid_source_falls_back(self) -> None:
        """Test that an invalid source yields defaults and one error log."""
        with patch(
            "versionname.config._load_from_pyproject_toml",
            return_value={"verbose": "not-a-bool"},
        ), patch("versionname.config._load_from_env", return_value={}), patch(
            "versionname.config.logger"
        ) as mock_logger:
            config = load_config_or_defaults()

        assert config == ResolverConfig()
        mock_logger.error.assert_called_once()
