"""
CLI commands for artifact installation.

Thin wrappers over ``cloudtools.core.services.tool_install``.
"""

from __future__ import annotations

import sys

import click

from cloudtools.core.errors import EXIT_ERROR, InvalidArgument
from cloudtools.core.models.install import (
    LATEST,
    BatchResult,
    InstallOptions,
    InstallOutcome,
    InstallRequest,
)
from cloudtools.core.services.tool_install.data.artifacts import ARTIFACTS
from cloudtools.ui.cli._common import BOOL_TOKEN, cli_errors, load_settings


@click.group()
def install() -> None:
    """Install — jq, kubectl, the IBM Cloud CLI and its plugins."""


# ── Output ──────────────────────────────────────────────────────


def _report(outcome: InstallOutcome) -> None:
    """One status line on stderr; exit 1 on failure."""
    if outcome.status == "skipped":
        where = f" at {outcome.path}" if outcome.path else ""
        click.secho(f"⊘ {outcome.artifact} already installed{where}", fg="yellow", err=True)
    elif outcome.status == "installed":
        timing = f" ({outcome.duration_ms}ms)" if outcome.duration_ms else ""
        target = outcome.path or outcome.artifact
        click.secho(f"✅ Installed {outcome.artifact} → {target}{timing}", fg="green", err=True)
    else:
        click.secho(f"❌ {outcome.error}", fg="red", err=True)
        sys.exit(EXIT_ERROR)


def _report_batch(result: BatchResult) -> None:
    """Per-item lines, then a summary; exit 1 if anything failed."""
    for outcome in result.outcomes:
        if outcome.status == "installed":
            click.secho(f"   ✓ {outcome.artifact}", fg="green", err=True)
        elif outcome.status == "skipped":
            click.secho(f"   ⊘ {outcome.artifact} (already installed)", fg="yellow", err=True)
        else:
            click.secho(f"   ✗ {outcome.artifact}", fg="red", err=True)
            if outcome.error:
                for line in outcome.error.split("\n")[:5]:
                    click.echo(f"     │ {line}", err=True)

    counts = result.summary()
    click.echo(err=True)
    click.secho(
        f"   Installed: {counts['installed']}  "
        f"Skipped: {counts['skipped']}  Failed: {counts['failed']}",
        fg="green" if result.ok else "red",
        bold=True,
        err=True,
    )
    if not result.ok:
        sys.exit(EXIT_ERROR)


# ── Binaries ────────────────────────────────────────────────────


def _binary_command(artifact: str) -> click.Command:
    @install.command(artifact, help=f"Install the {artifact} binary.")
    @click.option("--version", "version", default=LATEST, show_default=True,
                  help="Version to install (with or without a leading 'v').")
    @click.option("--location", default=None,
                  help="Install directory (default: install_dir from config).")
    @click.option("--skip-if-detected", type=BOOL_TOKEN, default=None,
                  help="Do nothing when the binary is already on PATH.")
    @click.option("--url", default=None, help="Download from this URL instead.")
    @click.option("--sudo", "escalate", type=BOOL_TOKEN, default=None,
                  help="Force or forbid sudo (default: decide from write access).")
    @click.pass_context
    def command(
        ctx: click.Context,
        version: str,
        location: str | None,
        skip_if_detected: bool | None,
        url: str | None,
        escalate: bool | None,
    ) -> None:
        from cloudtools.core.services.tool_install.execution.installer import install_binary

        with cli_errors():
            _, settings = load_settings(ctx)
            request = InstallRequest(
                artifact=artifact,
                version=version,
                location=location or settings.install_dir,
                skip_if_detected=(
                    settings.skip_if_detected if skip_if_detected is None else skip_if_detected
                ),
                url=url,
            )
            outcome = install_binary(request, escalate=escalate)
        _report(outcome)

    return command


for _name in ARTIFACTS:
    _binary_command(_name)


# ── Plugins ─────────────────────────────────────────────────────


@install.command("plugin")
@click.argument("name")
@click.option("--version", "version", default=LATEST, show_default=True,
              help="Plugin version.")
@click.option("--plugin-home", default=None,
              help="IBMCLOUD_HOME for the install (default: env or config).")
@click.option("--skip-if-detected", type=BOOL_TOKEN, default=None,
              help="Do nothing when the plugin is already listed.")
@click.pass_context
def plugin(
    ctx: click.Context,
    name: str,
    version: str,
    plugin_home: str | None,
    skip_if_detected: bool | None,
) -> None:
    """Install one IBM Cloud CLI plugin."""
    from cloudtools.core.services.tool_install.execution.plugins import install_plugin

    with cli_errors():
        _, settings = load_settings(ctx)
        request = InstallRequest(
            artifact=name,
            version=version,
            kind="plugin",
            plugin_home=plugin_home or settings.plugin_home,
            skip_if_detected=(
                settings.skip_if_detected if skip_if_detected is None else skip_if_detected
            ),
        )
        outcome = install_plugin(request)
    _report(outcome)


@install.command("plugins")
@click.argument("names", nargs=-1, required=True)
@click.option("--version", "version", default=LATEST, show_default=True,
              help="Version applied to every plugin.")
@click.option("--plugin-home", default=None,
              help="IBMCLOUD_HOME for the install (default: env or config).")
@click.option("--skip-if-detected", type=BOOL_TOKEN, default=None,
              help="Skip plugins that are already listed.")
@click.pass_context
def plugins(
    ctx: click.Context,
    names: tuple[str, ...],
    version: str,
    plugin_home: str | None,
    skip_if_detected: bool | None,
) -> None:
    """Install several IBM Cloud CLI plugins, continuing past failures.

    Examples:

        cloudtools install plugins cloud-object-storage container-registry
    """
    from cloudtools.core.services.tool_install.orchestration.orchestrator import install_many

    with cli_errors():
        _, settings = load_settings(ctx)
        options = InstallOptions(
            version=version,
            kind="plugin",
            plugin_home=plugin_home or settings.plugin_home,
            skip_if_detected=(
                settings.skip_if_detected if skip_if_detected is None else skip_if_detected
            ),
        )
        result = install_many(names, options)
    _report_batch(result)


# ── Manifest ────────────────────────────────────────────────────


@install.command("all")
@click.option("--skip-if-detected", type=BOOL_TOKEN, default=None,
              help="Override skip_if_detected from the config file.")
@click.option("--sudo", "escalate", type=BOOL_TOKEN, default=None,
              help="Force or forbid sudo for binary installs.")
@click.pass_context
def install_all(ctx: click.Context, skip_if_detected: bool | None,
                escalate: bool | None) -> None:
    """Install every tool and plugin listed in cloudtools.yml."""
    from cloudtools.core.services.tool_install.orchestration.orchestrator import (
        install_requests,
    )

    with cli_errors():
        config, settings = load_settings(ctx)
        skip = settings.skip_if_detected if skip_if_detected is None else skip_if_detected

        requests = [
            InstallRequest(
                artifact=tool.name,
                version=tool.version,
                location=tool.location or settings.install_dir,
                url=tool.url,
                skip_if_detected=skip,
            )
            for tool in config.tools
        ]
        requests += [
            InstallRequest(
                artifact=p.name,
                version=p.version,
                kind="plugin",
                plugin_home=settings.plugin_home,
                skip_if_detected=skip,
            )
            for p in config.plugins
        ]
        if not requests:
            raise InvalidArgument("No tools or plugins listed in cloudtools.yml")

        result = install_requests(requests, escalate=escalate)
    _report_batch(result)
