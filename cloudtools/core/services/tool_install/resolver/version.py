"""
L2 Resolver — Version resolution.

Turns a requested version (``latest`` or explicit) into a concrete
version string.  Only ``latest`` touches the network.
"""

from __future__ import annotations

import logging

from cloudtools.core.errors import CloudToolsError, VersionResolutionFailed
from cloudtools.core.models.install import LATEST
from cloudtools.core.services import transport

logger = logging.getLogger(__name__)

_GITHUB_HEADERS = {"Accept": "application/vnd.github+json"}


def normalize_version(version: str) -> str:
    """Strip one optional leading ``v`` (``v1.8.1`` → ``1.8.1``)."""
    version = version.strip()
    return version[1:] if version.startswith("v") else version


def _fetch_tag(index: dict) -> str:
    url = index["url"]
    kind = index.get("kind", "github")

    try:
        resp = transport.get(url, headers=_GITHUB_HEADERS if kind == "github" else None)
    except CloudToolsError as exc:
        raise VersionResolutionFailed(f"Failed to query {url}: {exc}") from exc

    if not resp.ok:
        raise VersionResolutionFailed(f"Failed to query {url}: HTTP {resp.status}")

    if kind == "pointer":
        return resp.body.strip()

    try:
        tag = resp.json().get("tag_name")
    except (ValueError, AttributeError) as exc:
        raise VersionResolutionFailed(f"Unexpected response from {url}") from exc
    return str(tag).strip() if tag is not None else ""


def resolve_version(requested: str, release_index: dict | None = None) -> str:
    """Resolve ``requested`` to a concrete version.

    Args:
        requested: ``latest`` or an explicit version (``v`` prefix optional).
        release_index: ``{"url", "kind", "tag_prefix"}`` consulted for
            ``latest``; see ``data.artifacts``.

    Raises:
        VersionResolutionFailed: If ``latest`` cannot be resolved (query
            error, empty answer, literal ``null``, or no index at all).
    """
    if requested != LATEST:
        return normalize_version(requested)

    if not release_index:
        raise VersionResolutionFailed(
            "No release index to resolve 'latest'; specify an explicit version."
        )

    tag = _fetch_tag(release_index)
    prefix = release_index.get("tag_prefix", "")
    if prefix and tag.startswith(prefix):
        tag = tag[len(prefix):]

    if not tag or tag == "null":
        raise VersionResolutionFailed(
            f"Failed to fetch latest version from {release_index['url']}. "
            "Try again later, or specify an explicit version instead of 'latest'."
        )

    version = normalize_version(tag)
    logger.info("Latest version determined: %s", version)
    return version
