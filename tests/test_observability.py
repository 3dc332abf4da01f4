"""
Tests for logging setup — level precedence, handlers, file output.
"""

import logging
import sys

from cloudtools.core.observability.logging_config import resolve_level, setup_logging


class TestResolveLevel:
    def test_default_is_warning(self):
        assert resolve_level() == "WARNING"

    def test_env_fallback(self):
        assert resolve_level(env_level="INFO") == "INFO"

    def test_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True, env_level="ERROR") == "DEBUG"
        assert resolve_level(verbose=True, quiet=True, env_level="ERROR") == "INFO"
        assert resolve_level(quiet=True, env_level="DEBUG") == "ERROR"


class TestSetupLogging:
    def test_console_on_stderr(self):
        setup_logging(level="INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr
        assert root.level == logging.INFO

    def test_unknown_level_falls_back_to_warning(self):
        setup_logging(level="CHATTY")
        assert logging.getLogger().level == logging.WARNING

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "cloudtools.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG

        logging.getLogger("cloudtools.test").debug("detail for the file")
        for h in root.handlers:
            h.flush()
        file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
        for h in file_handlers:
            h.close()

        assert "detail for the file" in log_file.read_text()

    def test_repeat_call_replaces_handlers(self):
        setup_logging(level="INFO")
        setup_logging(level="DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
