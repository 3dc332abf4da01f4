"""
L4 Execution — Binary artifact installer.

detect → skip decision → version + URL → fetch into a temp dir →
extract → chmod → move into place.

The temporary directory is removed on every exit path, and the
destination only ever receives a complete artifact.
"""

from __future__ import annotations

import logging
import shutil
import tarfile
import tempfile
import time
from pathlib import Path

from cloudtools.core.errors import PlacementFailed, TransferFailed
from cloudtools.core.models.install import LATEST, InstallOutcome, InstallRequest, Platform
from cloudtools.core.services import transport
from cloudtools.core.services.tool_install.detection.binaries import is_installed
from cloudtools.core.services.tool_install.detection.platform import detect_platform
from cloudtools.core.services.tool_install.domain.validation import (
    ensure_binaries,
    ensure_download_url,
)
from cloudtools.core.services.tool_install.execution.file_ops import (
    FileOps,
    make_executable,
    needs_escalation,
)
from cloudtools.core.services.tool_install.resolver.urls import build_url, get_artifact
from cloudtools.core.services.tool_install.resolver.version import (
    normalize_version,
    resolve_version,
)

logger = logging.getLogger(__name__)


def _extract_member(archive: Path, member: str, target: Path) -> Path:
    """Copy one file out of a .tgz archive into ``target``."""
    try:
        with tarfile.open(archive, "r:gz") as tf:
            info = next(
                (m for m in tf.getmembers()
                 if m.isfile() and m.name.removeprefix("./") == member),
                None,
            )
            if info is None:
                raise TransferFailed(f"'{member}' not found in downloaded archive")
            src = tf.extractfile(info)
            if src is None:
                raise TransferFailed(f"Cannot read '{member}' from downloaded archive")
            with src, open(target, "wb") as out:
                shutil.copyfileobj(src, out)
    except (tarfile.TarError, OSError, EOFError) as exc:
        raise TransferFailed(f"Failed to extract {archive.name}: {exc}") from exc
    return target


def fetch_artifact(url: str, spec: dict, workdir: Path) -> Path:
    """Download (and unpack, for archives) into ``workdir``.

    Returns:
        Path of the ready-to-place binary inside ``workdir``.

    Raises:
        TransferFailed: On download or extraction failure.
    """
    binary = spec["binary"]
    member = spec.get("archive_member")
    if not member:
        return transport.download(url, workdir / binary)

    archive = transport.download(url, workdir / f"{binary}.tgz")
    staged = workdir / "staged"
    staged.mkdir()
    return _extract_member(archive, member, staged / binary)


def _resolve_source(request: InstallRequest, spec: dict,
                    platform: Platform | None) -> tuple[str, str | None]:
    """Return ``(url, version)`` for a request."""
    if request.url:
        version = None if request.version == LATEST else normalize_version(request.version)
        return request.url, version

    if request.version == LATEST and spec.get("latest_template"):
        version = LATEST
    else:
        version = resolve_version(request.version, spec.get("release_index"))

    url = build_url(request.artifact, version, platform or detect_platform())
    return url, version


def install_binary(
    request: InstallRequest,
    *,
    escalate: bool | None = None,
    platform: Platform | None = None,
) -> InstallOutcome:
    """Install one binary artifact.

    Args:
        request: What to install and where.
        escalate: Force (True) or forbid (False) ``sudo`` for the
            filesystem steps.  ``None`` decides from write access to
            ``request.location``.
        platform: Target platform (default: the host).

    Returns:
        Installed, Skipped, or Failed (transfer / extraction / placement).

    Raises:
        InvalidArgument: Unknown artifact or malformed ``request.url``.
        MissingDependency: ``sudo`` needed but not installed.
        VersionResolutionFailed: ``latest`` could not be resolved.
        UnsupportedPlatform: No artifact naming for this host.
    """
    spec = get_artifact(request.artifact)
    binary = spec["binary"]

    if request.skip_if_detected and is_installed(binary):
        logger.info("Found %s already installed. Taking no action.", binary)
        return InstallOutcome.skipped(request.artifact, path=shutil.which(binary))

    if request.url:
        ensure_download_url(request.url)

    start = time.monotonic()
    location = Path(request.location).expanduser()
    if escalate is None:
        escalate = needs_escalation(location)
    if escalate:
        ensure_binaries("sudo")
        logger.warning("No write permission to %s. Using sudo...", location)

    url, version = _resolve_source(request, spec, platform)
    logger.info("Using download link: %s", url)

    dest = location / binary
    ops = FileOps(escalate=escalate)

    try:
        ops.ensure_dir(location)
        ops.remove(dest)
        with tempfile.TemporaryDirectory(prefix=f"cloudtools-{binary}-") as tmp:
            staged = fetch_artifact(url, spec, Path(tmp))
            make_executable(staged)
            ops.move(staged, dest)
    except (TransferFailed, PlacementFailed) as exc:
        logger.info("Failed to install %s: %s", request.artifact, exc)
        return InstallOutcome.failed(
            request.artifact, str(exc), url=url, version=version,
            duration_ms=int((time.monotonic() - start) * 1000),
        )

    logger.info("Successfully completed installation to %s", dest)
    return InstallOutcome.installed(
        request.artifact,
        path=str(dest),
        url=url,
        version=version,
        duration_ms=int((time.monotonic() - start) * 1000),
    )
