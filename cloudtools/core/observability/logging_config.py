"""
Logging configuration — one call from the CLI entrypoint.

Every module logs through ``logging.getLogger(__name__)`` and inherits
what ``setup_logging`` installs on the root logger.

Console level, highest precedence first:
    --debug  >  --verbose / VERBOSE=true  >  --quiet  >  CLOUDTOOLS_LOG_LEVEL  >  WARNING

CLOUDTOOLS_LOG_FILE adds a file handler (level CLOUDTOOLS_LOG_FILE_LEVEL,
else the console level).

The console handler writes to stderr: stdout carries only command
payloads such as the IAM token.
"""

from __future__ import annotations

import logging
import sys

# level ceiling → (format, datefmt); first match wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console level name from CLI flags and the env fallback."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def level_number(name: str | None) -> int:
    """``"info"`` → ``logging.INFO``; unknown or empty names mean WARNING."""
    value = getattr(logging, (name or "").upper(), None)
    return value if isinstance(value, int) else logging.WARNING


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = next(
        (f, d) for ceiling, f, d in _CONSOLE_FORMATS if level <= ceiling
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console (and optional file) handler on the root logger.

    Replaces any handlers already there, so calling it twice is safe.

    Args:
        level: Console level name.
        log_file: Also log to this file.
        log_file_level: File level name (default: ``level``).
    """
    console_level = level_number(level)
    handlers = [_console_handler(console_level)]

    if log_file:
        file_level = level_number(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))

    # A closed stderr (pipes, test runners) must not crash a log call.
    logging.raiseExceptions = False
