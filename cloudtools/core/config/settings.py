"""
Runtime settings — environment variables layered over the config file.

Precedence for every value:
    CLI option  >  environment variable  >  cloudtools.yml  >  default

CLI options are applied by the commands themselves (click passes
``None`` when an option is absent), so this module only merges the
last three layers.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel

from cloudtools.core.config.loader import CloudToolsConfig
from cloudtools.core.services.tool_install.domain.validation import is_boolean

logger = logging.getLogger(__name__)

DEFAULT_IAM_ENDPOINT = "https://iam.cloud.ibm.com"

ENV_API_KEY = "IBMCLOUD_API_KEY"
ENV_IAM_ENDPOINT = "IBMCLOUD_IAM_API_ENDPOINT"
ENV_PLUGIN_HOME = "IBMCLOUD_HOME"
ENV_VERBOSE = "VERBOSE"


class Settings(BaseModel):
    """Effective runtime settings."""

    install_dir: str
    skip_if_detected: bool
    plugin_home: str | None = None
    iam_endpoint: str = DEFAULT_IAM_ENDPOINT
    verbose: bool = False


def resolve_settings(
    config: CloudToolsConfig | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Merge env vars over ``config`` over the built-in defaults."""
    config = config or CloudToolsConfig()
    env = os.environ if environ is None else environ

    verbose = verbose_from_env(env)
    if verbose is None:
        logger.debug("Ignoring %s=%r", ENV_VERBOSE, env.get(ENV_VERBOSE))

    return Settings(
        install_dir=config.install_dir,
        skip_if_detected=config.skip_if_detected,
        plugin_home=env.get(ENV_PLUGIN_HOME) or config.plugin_home,
        iam_endpoint=env.get(ENV_IAM_ENDPOINT) or config.iam_endpoint or DEFAULT_IAM_ENDPOINT,
        verbose=bool(verbose),
    )


def verbose_from_env(environ: Mapping[str, str] | None = None) -> bool | None:
    """Read ``VERBOSE``: a bool for a boolean token, False when unset.

    Returns ``None`` for any other value (``1``, ``yes``, ...), which
    callers treat as not verbose.
    """
    env = os.environ if environ is None else environ
    raw = env.get(ENV_VERBOSE)
    if not raw:
        return False
    if not is_boolean(raw):
        return None
    return raw.lower() == "true"
