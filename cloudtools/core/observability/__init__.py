"""Observability — logging setup."""

from cloudtools.core.observability.logging_config import resolve_level, setup_logging  # noqa: F401
