"""
L3 Detection — Is an artifact already installed?

One canonical detection method per artifact type:
    binary  →  resolvable on the search path
    plugin  →  listed by ``ibmcloud plugin list`` for the given plugin home
"""

from __future__ import annotations

import logging
import re
import shutil

from cloudtools.core.services.tool_install.data.artifacts import PLUGIN_HOST
from cloudtools.core.services.tool_install.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)


def is_installed(name: str) -> bool:
    """Whether ``name`` resolves to an executable on the search path."""
    return shutil.which(name) is not None


def plugin_env(plugin_home: str | None) -> dict[str, str] | None:
    """Child-process env overrides that point the IBM Cloud CLI at ``plugin_home``."""
    return {"IBMCLOUD_HOME": plugin_home} if plugin_home else None


def installed_plugins(plugin_home: str | None = None) -> str:
    """Raw ``ibmcloud plugin list`` output ("" if the listing fails)."""
    result = run_command(
        [PLUGIN_HOST, "plugin", "list"],
        env_overrides=plugin_env(plugin_home),
        timeout=60,
    )
    if not result.ok:
        logger.debug("plugin list failed: %s", result.error)
        return ""
    return result.stdout


def is_plugin_installed(name: str, plugin_home: str | None = None) -> bool:
    """Whether ``name`` appears as a whole word in the plugin listing."""
    pattern = re.compile(rf"(?<![\w-]){re.escape(name)}(?![\w-])")
    return any(pattern.search(line) for line in installed_plugins(plugin_home).splitlines())
