"""
Retry policy — bounded retries for connection-level failures.

Mirrors the transfer flags the installers have always used:
``--retry 3 --retry-delay 2 --max-time 10``.  Only transient
connection errors are retried; an HTTP error status is an answer,
not a failure of the transport, and is never retried here.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how patiently to retry a call.

    Args:
        retries: Extra attempts after the first one.
        delay: Seconds to sleep between attempts.
        timeout: Per-attempt timeout in seconds.
    """

    retries: int = 3
    delay: float = 2.0
    timeout: float = 10.0

    @property
    def attempts(self) -> int:
        return self.retries + 1


DEFAULT_POLICY = RetryPolicy()
DOWNLOAD_POLICY = RetryPolicy(timeout=20.0)


def call_with_retry(
    fn: Callable[[], T],
    policy: RetryPolicy = DEFAULT_POLICY,
    *,
    retry_on: tuple[type[BaseException], ...] = (OSError,),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``fn`` until it returns, retrying on ``retry_on`` exceptions.

    The last exception is re-raised once ``policy.attempts`` is exhausted.
    """
    for attempt in range(1, policy.attempts + 1):
        try:
            return fn()
        except retry_on as exc:
            if attempt >= policy.attempts:
                raise
            logger.debug(
                "Attempt %d/%d failed (%s); retrying in %.1fs",
                attempt, policy.attempts, exc, policy.delay,
            )
            sleep(policy.delay)
    raise AssertionError("unreachable")  # pragma: no cover
