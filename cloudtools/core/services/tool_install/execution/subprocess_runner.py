"""
L4 Execution — Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for install
operations.  Commands never raise for a non-zero exit; callers get a
``CommandResult`` and decide what a failure means.

Privilege escalation is a plain ``sudo`` prefix (non-interactive
callers are expected to have cached credentials or NOPASSWD).  When
already running as root the prefix is dropped.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_OUTPUT_TAIL = 2000


@dataclass
class CommandResult:
    """Outcome of one child process."""

    cmd: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    elapsed_ms: int = 0
    error: str = field(default="")

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def describe(self) -> str:
        """One-line failure description for error messages."""
        if self.ok:
            return ""
        base = f"{' '.join(self.cmd)} exited {self.returncode}"
        detail = self.error or self.stderr.strip() or self.stdout.strip()
        return f"{base}: {detail}" if detail else base


def _needs_prefix() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return geteuid is None or geteuid() != 0


def run_command(
    cmd: list[str],
    *,
    needs_sudo: bool = False,
    timeout: int = 120,
    env_overrides: dict[str, str] | None = None,
    cwd: str | None = None,
) -> CommandResult:
    """Run ``cmd`` and capture its output.

    Args:
        cmd: Command list for ``subprocess.run()``.
        needs_sudo: Prefix the command with ``sudo``.
        timeout: Seconds before the child is killed.
        env_overrides: Extra env vars for the child only.  The parent's
            ``os.environ`` is never modified.
        cwd: Working directory for the command.

    Returns:
        A ``CommandResult``.  Timeouts and a missing executable are
        reported with returncode ``-1`` / ``127`` rather than raised.
    """
    if needs_sudo and _needs_prefix():
        cmd = ["sudo"] + cmd

    env = None
    if env_overrides:
        env = os.environ.copy()
        env.update(env_overrides)

    logger.debug("Running: %s", " ".join(cmd))
    start = time.monotonic()
    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=env,
            cwd=cwd,
        )
    except subprocess.TimeoutExpired:
        return CommandResult(cmd=cmd, returncode=-1, error=f"timed out ({timeout}s)")
    except FileNotFoundError:
        return CommandResult(cmd=cmd, returncode=127, error=f"{cmd[0]}: command not found")

    elapsed_ms = int((time.monotonic() - start) * 1000)
    result = CommandResult(
        cmd=cmd,
        returncode=proc.returncode,
        stdout=(proc.stdout or "")[-_OUTPUT_TAIL:],
        stderr=(proc.stderr or "")[-_OUTPUT_TAIL:],
        elapsed_ms=elapsed_ms,
    )
    if not result.ok:
        logger.debug("Command failed: %s", result.describe())
    return result
