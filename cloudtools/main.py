"""
cloudtools — CLI entrypoint.

Usage:
    python -m cloudtools.main --help
    cloudtools install kubectl --version v1.34.2
    cloudtools install plugins cloud-object-storage container-registry
    export TOKEN=$(cloudtools iam token)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click

from cloudtools import __version__
from cloudtools.core.config.settings import ENV_VERBOSE, verbose_from_env
from cloudtools.core.observability.logging_config import resolve_level, setup_logging
from cloudtools.ui.cli.check import check
from cloudtools.ui.cli.iam import iam
from cloudtools.ui.cli.install import install

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="cloudtools")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to cloudtools.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """cloudtools — install IBM Cloud tooling and request IAM tokens."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    env_verbose = verbose_from_env()
    verbose = verbose or bool(env_verbose)

    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("CLOUDTOOLS_LOG_LEVEL"),
        ),
        log_file=os.environ.get("CLOUDTOOLS_LOG_FILE"),
        log_file_level=os.environ.get("CLOUDTOOLS_LOG_FILE_LEVEL"),
    )

    if env_verbose is None:
        logger.warning(
            "Ignoring %s=%r: only 'true' or 'false' is supported.",
            ENV_VERBOSE, os.environ.get(ENV_VERBOSE),
        )


cli.add_command(install)
cli.add_command(iam)
cli.add_command(check)


if __name__ == "__main__":
    cli()
