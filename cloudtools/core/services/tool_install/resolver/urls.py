"""
L2 Resolver — Download URL construction.

Fills an artifact's naming template for a version and platform.
Some publishers break their own pattern for a single OS/arch pair
(``url_overrides``); those entries encode an external naming
convention and are applied verbatim.
"""

from __future__ import annotations

from cloudtools.core.errors import InvalidArgument
from cloudtools.core.models.install import LATEST, Platform
from cloudtools.core.services.tool_install.data.artifacts import ARTIFACTS


def get_artifact(name: str) -> dict:
    """Look up an artifact spec, raising ``InvalidArgument`` if unknown."""
    spec = ARTIFACTS.get(name)
    if spec is None:
        known = ", ".join(sorted(ARTIFACTS))
        raise InvalidArgument(f"Unknown artifact '{name}'. Known artifacts: {known}")
    return spec


def build_url(
    artifact: str,
    version: str,
    platform: Platform,
    overrides: dict[str, str] | None = None,
) -> str:
    """Build the download URL for ``artifact``.

    Args:
        artifact: Artifact ID from ``ARTIFACTS``.
        version: Concrete version, or ``latest`` for artifacts that
            publish a ``latest_template``.
        platform: Target platform.
        overrides: ``{"url": ...}`` returns that URL untouched.
    """
    if overrides and overrides.get("url"):
        return overrides["url"]

    spec = get_artifact(artifact)
    os_name = spec.get("os_map", {}).get(platform.os, platform.os)

    if version == LATEST:
        template = spec.get("latest_template")
        if not template:
            raise InvalidArgument(
                f"'{artifact}' needs a concrete version; resolve 'latest' first"
            )
    else:
        template = spec.get("url_overrides", {}).get(
            (platform.os, platform.arch), spec["url_template"],
        )

    return template.format(version=version, os=os_name, arch=platform.arch)
