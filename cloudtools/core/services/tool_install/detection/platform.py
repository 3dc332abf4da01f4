"""
L3 Detection — Host platform detection.

Read-only: works out the OS family and CPU architecture that the
artifact URLs are keyed on.  The descriptor is computed once per
process; call ``detect_platform.cache_clear()`` to detect again.
"""

from __future__ import annotations

import functools
import logging
import platform as _platform
import subprocess
import sys

from cloudtools.core.errors import EXIT_USAGE, UnsupportedPlatform
from cloudtools.core.models.install import Platform

logger = logging.getLogger(__name__)

_ARCH_MAP: dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


def detect_os() -> str:
    """Return ``linux`` or ``macos``."""
    if sys.platform == "darwin":
        return "macos"
    if sys.platform.startswith("linux"):
        return "linux"
    raise UnsupportedPlatform(f"Unsupported OS: {sys.platform}")


def detect_mac_architecture() -> str:
    """Tell Intel Macs from Apple Silicon via the CPU brand string.

    Returns:
        ``amd64`` when the brand string starts with ``Intel``,
        ``arm64`` otherwise.

    Raises:
        UnsupportedPlatform: When called on anything but macOS
            (exit code 2, a usage error).
    """
    if sys.platform != "darwin":
        raise UnsupportedPlatform(f"Unsupported OS: {sys.platform}", exit_code=EXIT_USAGE)

    try:
        result = subprocess.run(
            ["sysctl", "-n", "machdep.cpu.brand_string"],
            capture_output=True, text=True, timeout=5,
        )
        brand = result.stdout.strip()
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.debug("sysctl failed (%s); assuming Apple Silicon", exc)
        brand = ""

    return "amd64" if brand.startswith("Intel") else "arm64"


def detect_linux_architecture() -> str:
    machine = _platform.machine().lower()
    arch = _ARCH_MAP.get(machine)
    if arch is None:
        raise UnsupportedPlatform(f"Unsupported CPU architecture: {machine or 'unknown'}")
    return arch


@functools.lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the host ``Platform`` (memoised for the process)."""
    os_name = detect_os()
    arch = detect_mac_architecture() if os_name == "macos" else detect_linux_architecture()
    detected = Platform(os=os_name, arch=arch)
    logger.debug("Detected platform %s", detected)
    return detected
