"""
L4 Execution — Filesystem placement with optional privilege escalation.

Only the operations that touch the install location (mkdir, remove,
move) are escalated; download, extraction and chmod always run
unprivileged inside a temporary directory.  ``escalate`` is decided
once per install so tests can force it either way and observe the
``sudo`` commands without real privilege.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from cloudtools.core.errors import PlacementFailed
from cloudtools.core.services.tool_install.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


def needs_escalation(location: Path) -> bool:
    """Whether writing into ``location`` needs elevated privilege."""
    target = location
    while not target.exists() and target != target.parent:
        target = target.parent
    return not os.access(target, os.W_OK)


@dataclass
class FileOps:
    """mkdir / remove / move, either directly or through ``sudo``."""

    escalate: bool = False

    def _sudo(self, cmd: list[str]) -> None:
        result = run_command(cmd, needs_sudo=True, timeout=30)
        if not result.ok:
            raise PlacementFailed(result.describe())

    def ensure_dir(self, path: Path) -> None:
        if path.is_dir():
            return
        if self.escalate:
            self._sudo(["mkdir", "-p", str(path)])
            return
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PlacementFailed(f"Cannot create {path}: {exc}") from exc

    def remove(self, path: Path) -> None:
        """Delete ``path`` if present (``rm -f`` semantics)."""
        if self.escalate:
            self._sudo(["rm", "-f", str(path)])
            return
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise PlacementFailed(f"Cannot remove {path}: {exc}") from exc

    def move(self, src: Path, dest: Path) -> None:
        if self.escalate:
            self._sudo(["mv", str(src), str(dest)])
            return
        try:
            shutil.move(str(src), str(dest))
        except OSError as exc:
            raise PlacementFailed(f"Cannot move {src} to {dest}: {exc}") from exc


def make_executable(path: Path) -> None:
    """chmod 755 a staged file before it is moved into place.

    Staged files live in the caller's own temp directory, so this never
    needs ``sudo``; ``mv`` carries the mode over to the destination.
    """
    try:
        os.chmod(path, EXECUTABLE_MODE)
    except OSError as exc:
        raise PlacementFailed(f"Cannot chmod {path}: {exc}") from exc
