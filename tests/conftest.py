"""
Shared test fixtures and configuration.
"""

import logging
import tarfile
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path

import pytest

from cloudtools.core.models.install import Platform
from cloudtools.core.services.tool_install.detection.platform import detect_platform

_CLOUDTOOLS_ENV = (
    "IBMCLOUD_API_KEY",
    "IBMCLOUD_IAM_API_ENDPOINT",
    "IBMCLOUD_HOME",
    "VERBOSE",
    "CLOUDTOOLS_LOG_LEVEL",
    "CLOUDTOOLS_LOG_FILE",
    "CLOUDTOOLS_LOG_FILE_LEVEL",
)


@pytest.fixture(autouse=True)
def _fresh_platform():
    """Every test re-detects the platform."""
    detect_platform.cache_clear()
    yield
    detect_platform.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI invocations reconfigure the root logger; undo that."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Clear cloudtools env vars and run from an empty temp directory."""
    for name in _CLOUDTOOLS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def linux_amd64() -> Platform:
    return Platform(os="linux", arch="amd64")


@pytest.fixture
def make_tgz(tmp_path: Path):
    """Build a .tgz holding one file at ``member``."""

    def _make(member: str = "IBM_Cloud_CLI/ibmcloud",
              content: bytes = b"#!/bin/sh\necho ibmcloud\n") -> Path:
        payload = tmp_path / "payload"
        payload.write_bytes(content)
        archive = tmp_path / "archive.tgz"
        with tarfile.open(archive, "w:gz") as tf:
            tf.add(payload, arcname=member)
        return archive

    return _make


class _TruncatingHandler(BaseHTTPRequestHandler):
    """Declares 1000 bytes, sends 10, then closes the connection."""

    def do_GET(self):
        self.send_response(200)
        self.send_header("Content-Length", "1000")
        self.end_headers()
        self.wfile.write(b"0123456789")
        self.close_connection = True

    def log_message(self, format, *args):
        pass


@pytest.fixture
def truncating_server(monkeypatch: pytest.MonkeyPatch):
    """URL of a local server whose responses stop short of Content-Length."""
    monkeypatch.setenv("no_proxy", "127.0.0.1")
    monkeypatch.setenv("NO_PROXY", "127.0.0.1")
    server = HTTPServer(("127.0.0.1", 0), _TruncatingHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}/artifact"
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)
