"""
L4 Execution — IBM Cloud CLI plugin installer.

Plugins are installed by the CLI itself
(``ibmcloud plugin install <name> -f [-v <version>]``).

The plugin home is an explicit parameter: it reaches the CLI through
the child process environment only, so the caller's ``IBMCLOUD_HOME``
is never touched.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from cloudtools.core.errors import InvalidArgument, PlacementFailed
from cloudtools.core.models.install import LATEST, InstallOutcome, InstallRequest
from cloudtools.core.services.tool_install.data.artifacts import PLUGIN_HOST
from cloudtools.core.services.tool_install.detection.binaries import (
    is_plugin_installed,
    plugin_env,
)
from cloudtools.core.services.tool_install.domain.validation import ensure_binaries
from cloudtools.core.services.tool_install.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)

_INSTALL_TIMEOUT = 600


def plugin_install_command(name: str, version: str = LATEST) -> list[str]:
    cmd = [PLUGIN_HOST, "plugin", "install", name, "-f"]
    if version != LATEST:
        cmd += ["-v", version]
    return cmd


def install_plugin(request: InstallRequest) -> InstallOutcome:
    """Install one IBM Cloud CLI plugin.

    Raises:
        InvalidArgument: Empty plugin name.
        MissingDependency: The ``ibmcloud`` CLI is not installed.
    """
    name = request.artifact.strip()
    if not name:
        raise InvalidArgument("Plugin name is required")
    ensure_binaries(PLUGIN_HOST)

    home = str(Path(request.plugin_home).expanduser()) if request.plugin_home else None
    if home:
        try:
            Path(home).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PlacementFailed(f"Cannot create plugin home {home}: {exc}") from exc
        logger.info("Using custom IBM Cloud home directory: %s", home)

    if request.skip_if_detected and is_plugin_installed(name, home):
        logger.info("Plugin '%s' already installed. Skipping.", name)
        return InstallOutcome.skipped(name, path=home)

    cmd = plugin_install_command(name, request.version)
    logger.info("Running: %s", " ".join(cmd))

    start = time.monotonic()
    result = run_command(cmd, env_overrides=plugin_env(home), timeout=_INSTALL_TIMEOUT)
    elapsed_ms = int((time.monotonic() - start) * 1000)
    version = None if request.version == LATEST else request.version

    if not result.ok:
        logger.debug("plugin install output:\n%s%s", result.stdout, result.stderr)
        return InstallOutcome.failed(
            name,
            f"Failed to install plugin '{name}': {result.describe()}",
            version=version,
            duration_ms=elapsed_ms,
        )

    logger.info("Successfully installed plugin: %s", name)
    return InstallOutcome.installed(name, path=home, version=version, duration_ms=elapsed_ms)
