"""
L1 Domain — Boolean and argument validation.

Boolean tokens are validated only at the external-input boundary
(CLI flags, config files, env vars); past that point everything is a
native ``bool``.  The env / binary checks report what is missing
rather than failing on the first gap.
"""

from __future__ import annotations

import os
import re
import shutil
import urllib.parse
from collections.abc import Mapping

from cloudtools.core.errors import InvalidArgument, MissingDependency, MissingEnvironment

_BOOLEAN_TOKEN = re.compile(r"^([Tt]rue|[Ff]alse)$")


def is_boolean(token: object) -> bool:
    """Whether ``token`` is a recognised boolean token."""
    if isinstance(token, bool):
        return True
    return isinstance(token, str) and bool(_BOOLEAN_TOKEN.fullmatch(token))


def parse_boolean(token: object, *, name: str = "value") -> bool:
    """Parse ``true`` / ``True`` / ``false`` / ``False`` into a bool.

    Native bools pass through unchanged.

    Raises:
        InvalidArgument: For any other token (``yes``, ``1``, ``TRUE``, ...).
    """
    if isinstance(token, bool):
        return token
    if not is_boolean(token):
        raise InvalidArgument(
            f"Unsupported value for {name}. Only 'true' or 'false' is supported. "
            f"Found: {token}."
        )
    return str(token).lower() == "true"


def require_env(*names: str, environ: Mapping[str, str] | None = None) -> list[str]:
    """Return the environment variables in ``names`` that are not set.

    A variable set to the empty string counts as set.  An empty return
    value means every variable is present.
    """
    if not names:
        raise InvalidArgument("require_env needs at least one variable name")
    env = os.environ if environ is None else environ
    return [name for name in names if name not in env]


def require_binaries(*names: str) -> list[str]:
    """Return the binaries in ``names`` that are not on the search path."""
    if not names:
        raise InvalidArgument("require_binaries needs at least one binary name")
    return [name for name in names if shutil.which(name) is None]


def ensure_env(*names: str, environ: Mapping[str, str] | None = None) -> None:
    """Raise ``MissingEnvironment`` unless every variable is set."""
    missing = require_env(*names, environ=environ)
    if missing:
        raise MissingEnvironment(missing)


def ensure_binaries(*names: str) -> None:
    """Raise ``MissingDependency`` unless every binary is installed."""
    missing = require_binaries(*names)
    if missing:
        raise MissingDependency(missing)


def ensure_download_url(url: str) -> None:
    """Raise ``InvalidArgument`` unless ``url`` is an absolute http(s) or file URL."""
    parts = urllib.parse.urlsplit(url)
    if parts.scheme == "file" and parts.path:
        return
    if parts.scheme in ("http", "https") and parts.netloc:
        return
    raise InvalidArgument(f"Invalid download URL: {url!r} (expected an http, https or file URL)")
