"""
Error taxonomy — every failure the services can raise.

Services raise these; the CLI layer catches ``CloudToolsError``, writes
the message to stderr and exits with ``exc.exit_code``.

Exit codes are uniform across all commands:
    0  success
    1  operational failure
    2  usage error (bad arguments)
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


class CloudToolsError(Exception):
    """Base class for all cloudtools failures."""

    exit_code: int = EXIT_ERROR


class InvalidArgument(CloudToolsError):
    """A caller passed a bad argument (usage error)."""

    exit_code = EXIT_USAGE


class MissingDependency(CloudToolsError):
    """One or more prerequisite binaries are not on the search path."""

    def __init__(self, missing: list[str], message: str = "") -> None:
        self.missing = list(missing)
        super().__init__(message or f"Missing binaries: {' '.join(self.missing)}")


class MissingEnvironment(CloudToolsError):
    """One or more required environment variables are not set."""

    def __init__(self, missing: list[str], message: str = "") -> None:
        self.missing = list(missing)
        super().__init__(
            message or f"Environment variable(s) not set: {' '.join(self.missing)}"
        )


class UnsupportedPlatform(CloudToolsError):
    """The host OS or CPU architecture has no known artifact naming."""

    def __init__(self, message: str, *, exit_code: int = EXIT_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class VersionResolutionFailed(CloudToolsError):
    """A ``latest`` version could not be resolved from its release index."""


class TransferFailed(CloudToolsError):
    """Downloading or extracting an artifact failed."""


class PlacementFailed(CloudToolsError):
    """Moving an artifact into place or marking it executable failed."""


class TransportError(CloudToolsError):
    """A connection-level HTTP failure survived every retry."""


class HttpError(CloudToolsError):
    """An HTTP endpoint answered with a non-200 status."""

    def __init__(self, status: int, body: str = "") -> None:
        self.status = status
        self.body = body
        super().__init__(f"HTTP {status}")


class ApiError(CloudToolsError):
    """The endpoint answered 200 but reported an error in its body."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MalformedResponse(CloudToolsError):
    """The response body lacked the expected payload."""

    def __init__(self, message: str, body: str = "") -> None:
        self.body = body
        super().__init__(message)
