"""
Configuration loader — reads cloudtools.yml into typed config.

This is the primary entry point for loading the install manifest.
It reads YAML, validates against Pydantic schemas, and returns
typed objects.

Example ``cloudtools.yml``::

    install_dir: /usr/local/bin
    skip_if_detected: true
    plugin_home: /opt/ibmcloud
    iam_endpoint: https://iam.cloud.ibm.com
    tools:
      - jq
      - name: kubectl
        version: v1.34.2
    plugins:
      - cloud-object-storage
      - name: container-registry
        version: 1.3.10
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from cloudtools.core.errors import EXIT_USAGE, CloudToolsError
from cloudtools.core.models.install import LATEST
from cloudtools.core.services.tool_install.domain.validation import parse_boolean

logger = logging.getLogger(__name__)

CONFIG_FILE = "cloudtools.yml"
DEFAULT_INSTALL_DIR = "/usr/local/bin"


class ConfigError(CloudToolsError):
    """Raised when the configuration file is invalid or missing."""

    exit_code = EXIT_USAGE


class ToolEntry(BaseModel):
    """A binary artifact listed under ``tools:``."""

    name: str
    version: str = LATEST
    location: str | None = None
    url: str | None = None


class PluginEntry(BaseModel):
    """An IBM Cloud CLI plugin listed under ``plugins:``."""

    name: str
    version: str = LATEST


def _expand_names(value: object) -> object:
    """Allow bare strings in tool / plugin lists."""
    if isinstance(value, list):
        return [{"name": v} if isinstance(v, str) else v for v in value]
    return value


class CloudToolsConfig(BaseModel):
    """Validated contents of cloudtools.yml."""

    install_dir: str = DEFAULT_INSTALL_DIR
    skip_if_detected: bool = True
    plugin_home: str | None = None
    iam_endpoint: str | None = None
    tools: list[ToolEntry] = Field(default_factory=list)
    plugins: list[PluginEntry] = Field(default_factory=list)

    @field_validator("skip_if_detected", mode="before")
    @classmethod
    def _boolean_token(cls, value: object) -> bool:
        return parse_boolean(value, name="skip_if_detected")

    @field_validator("tools", "plugins", mode="before")
    @classmethod
    def _bare_names(cls, value: object) -> object:
        return _expand_names(value)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for cloudtools.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to cloudtools.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | None = None, *, required: bool = False) -> CloudToolsConfig:
    """Load and validate cloudtools.yml.

    Args:
        path: Explicit path. If None, searches upward from the cwd.
        required: Raise when no file can be found instead of
            returning the defaults.

    Raises:
        ConfigError: If the file is missing (when required) or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        if required:
            raise ConfigError(f"No {CONFIG_FILE} found. Specify one with --config.")
        return CloudToolsConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = CloudToolsConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info(
        "Loaded %s with %d tool(s) and %d plugin(s)",
        path, len(config.tools), len(config.plugins),
    )
    return config
