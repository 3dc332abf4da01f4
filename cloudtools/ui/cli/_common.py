"""
Shared CLI plumbing — boolean flag type, error reporting, lazy settings.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn

import click

from cloudtools.core.config.loader import CloudToolsConfig, load_config
from cloudtools.core.config.settings import Settings, resolve_settings
from cloudtools.core.errors import CloudToolsError, InvalidArgument
from cloudtools.core.services.tool_install.domain.validation import parse_boolean


class BooleanToken(click.ParamType):
    """``true`` / ``True`` / ``false`` / ``False`` and nothing else."""

    name = "true|false"

    def convert(self, value, param, ctx):
        if isinstance(value, bool):
            return value
        try:
            return parse_boolean(value, name=param.name if param else "value")
        except InvalidArgument as e:
            self.fail(str(e), param, ctx)


BOOL_TOKEN = BooleanToken()


def fail(exc: CloudToolsError) -> NoReturn:
    """Report ``exc`` on stderr and exit with its code."""
    click.secho(f"❌ {exc}", fg="red", err=True)
    sys.exit(exc.exit_code)


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn any ``CloudToolsError`` raised in the block into an exit."""
    try:
        yield
    except CloudToolsError as exc:
        fail(exc)


def load_settings(ctx: click.Context) -> tuple[CloudToolsConfig, Settings]:
    """Load cloudtools.yml and resolve settings once per invocation.

    Loading is deferred to the commands that need it so ``--help`` and
    the ``check`` commands work even with a broken config file.
    """
    obj = ctx.ensure_object(dict)
    if "settings" not in obj:
        config = load_config(obj.get("config_path"))
        obj["config"] = config
        obj["settings"] = resolve_settings(config)
    return obj["config"], obj["settings"]
