"""
CLI commands for IBM Cloud IAM.

``iam token`` prints the bearer token, and nothing else, on stdout so
it can be captured with ``$(cloudtools iam token)``.
"""

from __future__ import annotations

import sys

import click

from cloudtools.core.config.settings import ENV_API_KEY, ENV_IAM_ENDPOINT
from cloudtools.core.errors import HttpError, MissingEnvironment
from cloudtools.ui.cli._common import cli_errors, load_settings


@click.group()
def iam() -> None:
    """IAM — IBM Cloud bearer tokens."""


@iam.command("token")
@click.option("--api-key", envvar=ENV_API_KEY, default=None, show_envvar=True,
              help="IBM Cloud API key.")
@click.option("--endpoint", envvar=ENV_IAM_ENDPOINT, default=None, show_envvar=True,
              help="IAM endpoint (default: https://iam.cloud.ibm.com).")
@click.pass_context
def token(ctx: click.Context, api_key: str | None, endpoint: str | None) -> None:
    """Exchange an API key for an IAM bearer token."""
    from cloudtools.core.services.iam import request_bearer_token

    with cli_errors():
        if not api_key:
            raise MissingEnvironment(
                [ENV_API_KEY], f"No API key: pass --api-key or set {ENV_API_KEY}",
            )
        if endpoint is None:
            _, settings = load_settings(ctx)
            endpoint = settings.iam_endpoint

        try:
            value = request_bearer_token(api_key, endpoint)
        except HttpError as e:
            click.secho(f"❌ {e}", fg="red", err=True)
            if e.body:
                click.echo(e.body, err=True)
            sys.exit(e.exit_code)

    click.echo(value)
