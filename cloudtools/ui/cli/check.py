"""
CLI commands for preflight checks — env vars, binaries, boolean tokens,
platform.
"""

from __future__ import annotations

import sys

import click

from cloudtools.core.errors import EXIT_ERROR
from cloudtools.core.services.tool_install.domain.validation import (
    is_boolean,
    require_binaries,
    require_env,
)
from cloudtools.ui.cli._common import cli_errors


@click.group()
def check() -> None:
    """Check — preflight validation of the environment."""


def _report_missing(missing: list[str], what: str) -> None:
    if not missing:
        click.secho(f"✅ All {what} present", fg="green", err=True)
        return
    click.secho(f"❌ Missing {what}:", fg="red", bold=True, err=True)
    for name in missing:
        click.echo(f"   • {name}", err=True)
    sys.exit(EXIT_ERROR)


@check.command("env")
@click.argument("names", nargs=-1, required=True)
def env(names: tuple[str, ...]) -> None:
    """Verify environment variables are set (empty counts as set)."""
    with cli_errors():
        missing = require_env(*names)
    _report_missing(missing, "environment variables")


@check.command("bins")
@click.argument("names", nargs=-1, required=True)
def bins(names: tuple[str, ...]) -> None:
    """Verify binaries are on PATH."""
    with cli_errors():
        missing = require_binaries(*names)
    _report_missing(missing, "binaries")


@check.command("bool")
@click.argument("token")
def boolean(token: str) -> None:
    """Verify TOKEN is one of true, True, false, False."""
    if is_boolean(token):
        click.secho(f"✅ '{token}' is a valid boolean", fg="green", err=True)
        return
    click.secho(
        f"❌ Unsupported value. Only 'true' or 'false' is supported. Found: {token}.",
        fg="red", err=True,
    )
    sys.exit(EXIT_ERROR)


@check.command("platform")
def platform() -> None:
    """Print the detected platform as os/arch."""
    from cloudtools.core.services.tool_install.detection.platform import detect_platform

    with cli_errors():
        value = detect_platform()
    click.echo(str(value))
