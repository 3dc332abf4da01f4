"""
HTTP transport — the single place where urllib talks to the network.

Every HTTP status comes back as an ``HttpResponse``; callers decide
what a 401 or a 404 means.  Connection-level failures (refused,
reset, DNS, timeouts) are retried per ``RetryPolicy`` and then raised
as ``TransportError``.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cloudtools import __version__
from cloudtools.core.errors import TransferFailed, TransportError
from cloudtools.core.reliability.retry import (
    DEFAULT_POLICY,
    DOWNLOAD_POLICY,
    RetryPolicy,
    call_with_retry,
)

logger = logging.getLogger(__name__)

USER_AGENT = f"cloudtools/{__version__}"


@dataclass
class HttpResponse:
    """Status, body and headers of one HTTP exchange."""

    status: int
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == 200

    def json(self) -> Any:
        """Decode the body as JSON (raises ``ValueError`` if it is not)."""
        return json.loads(self.body)


def request(
    method: str,
    url: str,
    *,
    data: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    policy: RetryPolicy = DEFAULT_POLICY,
) -> HttpResponse:
    """Perform one HTTP request, following redirects.

    Args:
        method: HTTP verb.
        url: Absolute URL.
        data: Optional form fields, sent url-encoded.
        headers: Extra request headers.
        policy: Retry / timeout policy for connection failures.

    Raises:
        TransportError: When no response could be obtained.
    """
    body = urllib.parse.urlencode(data).encode() if data is not None else None
    all_headers = {"User-Agent": USER_AGENT}
    if data is not None:
        all_headers["Content-Type"] = "application/x-www-form-urlencoded"
    all_headers.update(headers or {})

    try:
        req = urllib.request.Request(url, data=body, headers=all_headers, method=method)
    except ValueError as exc:
        raise TransportError(f"Invalid URL {url!r}: {exc}") from exc

    def _once() -> HttpResponse:
        try:
            with urllib.request.urlopen(req, timeout=policy.timeout) as resp:
                return HttpResponse(
                    status=resp.getcode(),
                    body=resp.read().decode("utf-8", errors="replace"),
                    headers=dict(resp.headers.items()),
                )
        except urllib.error.HTTPError as exc:
            return HttpResponse(
                status=exc.code,
                body=exc.read().decode("utf-8", errors="replace"),
                headers=dict(exc.headers.items()) if exc.headers else {},
            )
        except http.client.HTTPException as exc:
            # Truncated or garbled answer: retried like a dropped connection.
            raise ConnectionError(f"incomplete response: {exc!r}") from exc

    logger.debug("%s %s", method, url)
    try:
        return call_with_retry(_once, policy)
    except OSError as exc:
        raise TransportError(f"{method} {url} failed: {exc}") from exc


def get(url: str, *, headers: dict[str, str] | None = None,
        policy: RetryPolicy = DEFAULT_POLICY) -> HttpResponse:
    return request("GET", url, headers=headers, policy=policy)


def post_form(url: str, data: dict[str, str], *, headers: dict[str, str] | None = None,
              policy: RetryPolicy = DEFAULT_POLICY) -> HttpResponse:
    return request("POST", url, data=data, headers=headers, policy=policy)


def _copy_counted(src, dst, chunk_size: int = 64 * 1024) -> int:
    """Copy ``src`` into ``dst``; return the number of bytes written."""
    total = 0
    while True:
        chunk = src.read(chunk_size)
        if not chunk:
            return total
        dst.write(chunk)
        total += len(chunk)


def download(url: str, dest: Path, *, policy: RetryPolicy = DOWNLOAD_POLICY) -> Path:
    """Stream ``url`` into ``dest``.

    ``dest`` is truncated on every attempt, so a retried download never
    appends to a partial file.  A body shorter than the declared
    ``Content-Length`` counts as a dropped connection and is retried.

    Raises:
        TransferFailed: On a malformed URL, a non-200 answer, or when
            retries run out.
    """
    try:
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    except ValueError as exc:
        raise TransferFailed(f"Invalid download URL {url!r}: {exc}") from exc

    def _once() -> Path:
        try:
            with urllib.request.urlopen(req, timeout=policy.timeout) as resp, open(dest, "wb") as f:
                declared = resp.headers.get("Content-Length")
                received = _copy_counted(resp, f)
        except urllib.error.HTTPError as exc:
            # An answer, not a connection failure: no retry.
            raise TransferFailed(f"Failed to download {url}: HTTP {exc.code}") from exc
        except http.client.HTTPException as exc:
            raise ConnectionError(f"incomplete transfer: {exc!r}") from exc

        if declared and declared.isdigit() and received < int(declared):
            raise ConnectionError(
                f"incomplete transfer: received {received} of {declared} bytes"
            )
        return dest

    logger.debug("Downloading %s → %s", url, dest)
    try:
        return call_with_retry(_once, policy)
    except OSError as exc:
        raise TransferFailed(f"Failed to download {url}: {exc}") from exc
