"""Configuration for version name resolution.

Settings are merged with the following priority (highest to lowest):
1. Runtime Parameters (passed directly to load_config)
2. Environment Variables (prefixed with VERSIONNAME_)
3. Project Config ([tool.versionname] in pyproject.toml)
4. Defaults (the documented default resource paths and keys)
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from versionname.utils.logging import configure_module_logger

logger = configure_module_logger(__name__, level=logging.INFO)

DEFAULT_PROPERTIES_FILE_PATH = "app.properties"
DEFAULT_PROPERTY = "versionName"
DEFAULT_MANIFEST_PATH = "META-INF/MANIFEST.MF"
DEFAULT_MANIFEST_ATTRIBUTE = "versionName"


class ResolverConfig(BaseModel):
    """Defaults used by the zero-argument lookups."""

    properties_path: str = Field(
        default=DEFAULT_PROPERTIES_FILE_PATH,
        description="Resource path of the properties file",
    )

    property_key: str = Field(
        default=DEFAULT_PROPERTY,
        description="Property holding the version name",
    )

    manifest_path: str = Field(
        default=DEFAULT_MANIFEST_PATH,
        description="Resource path of the manifest",
    )

    manifest_attribute: str = Field(
        default=DEFAULT_MANIFEST_ATTRIBUTE,
        description="Main manifest attribute holding the version name",
    )

    search_paths: Optional[list[str]] = Field(
        default=None,
        description="Directories searched for resources (default: sys.path)",
    )

    verbose: bool = Field(
        default=False,
        description="Log successful lookups at INFO level",
    )

    model_config = {
        "extra": "forbid",
    }


def _load_from_pyproject_toml(start: Optional[Path] = None) -> dict[str, Any]:
    """Load the [tool.versionname] section of the nearest pyproject.toml.

    Returns:
        Dictionary with config values, or empty dict if not found.
    """
    current_dir = start or Path.cwd()
    for path in [current_dir] + list(current_dir.parents):
        pyproject_path = path / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError):
                continue
            section = data.get("tool", {}).get("versionname")
            if section is not None:
                result: dict[str, Any] = dict(section)
                return result

    return {}


def _load_from_env() -> dict[str, Any]:
    """Load configuration from environment variables (prefixed with VERSIONNAME_).

    Returns:
        Dictionary with config values from environment.
    """
    config: dict[str, Any] = {}

    env_mapping = {
        "VERSIONNAME_PROPERTIES_PATH": "properties_path",
        "VERSIONNAME_PROPERTY_KEY": "property_key",
        "VERSIONNAME_MANIFEST_PATH": "manifest_path",
        "VERSIONNAME_MANIFEST_ATTRIBUTE": "manifest_attribute",
        "VERSIONNAME_SEARCH_PATHS": "search_paths",
        "VERSIONNAME_VERBOSE": "verbose",
    }

    for env_var, config_key in env_mapping.items():
        value = os.getenv(env_var)
        if value is None:
            continue
        if config_key == "verbose":
            config[config_key] = value.lower() in ("true", "1", "yes", "on")
        elif config_key == "search_paths":
            config[config_key] = [p for p in value.split(os.pathsep) if p]
        else:
            config[config_key] = value

    return config


def load_config(
    properties_path: Optional[str] = None,
    property_key: Optional[str] = None,
    manifest_path: Optional[str] = None,
    manifest_attribute: Optional[str] = None,
    search_paths: Optional[list[str]] = None,
    verbose: Optional[bool] = None,
) -> ResolverConfig:
    """Load configuration with hierarchical priority.

    Args:
        properties_path: Resource path of the properties file.
        property_key: Property holding the version name.
        manifest_path: Resource path of the manifest.
        manifest_attribute: Manifest attribute holding the version name.
        search_paths: Directories searched for resources.
        verbose: Log successful lookups.

    Returns:
        ResolverConfig instance with merged configuration.

    Raises:
        pydantic.ValidationError: If a source holds an unknown or invalid key.
    """
    runtime_config = {
        key: value
        for key, value in {
            "properties_path": properties_path,
            "property_key": property_key,
            "manifest_path": manifest_path,
            "manifest_attribute": manifest_attribute,
            "search_paths": search_paths,
            "verbose": verbose,
        }.items()
        if value is not None
    }

    merged_config = ResolverConfig().model_dump()
    merged_config.update(_load_from_pyproject_toml())
    merged_config.update(_load_from_env())
    merged_config.update(runtime_config)

    return ResolverConfig(**merged_config)


def load_config_or_defaults() -> ResolverConfig:
    """Load configuration, falling back to defaults if a source is invalid.

    Used where a lookup must not raise; the validation error is logged.

    Returns:
        Merged ResolverConfig, or ``ResolverConfig()`` on invalid settings.
    """
    try:
        return load_config()
    except ValidationError as exc:
        logger.error("Invalid versionname configuration, using defaults: %s", exc)
        return ResolverConfig()
