"""Reliability — retry policies for network calls."""

from cloudtools.core.reliability.retry import (  # noqa: F401
    DEFAULT_POLICY,
    DOWNLOAD_POLICY,
    RetryPolicy,
    call_with_retry,
)
