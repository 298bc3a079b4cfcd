"""
Tests for logging setup — level resolution and handlers.
"""

import logging
from pathlib import Path

import pytest

from devutils.core.observability.logging_config import ENV_LOG_LEVEL, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_flag_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True, env={}) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True, env={}) == "INFO"
        assert resolve_level(quiet=True, env={ENV_LOG_LEVEL: "DEBUG"}) == "ERROR"

    def test_env_then_default(self):
        assert resolve_level(env={ENV_LOG_LEVEL: "INFO"}) == "INFO"
        assert resolve_level(env={}) == "WARNING"


class TestSetupLogging:
    def test_console_handler_level(self, monkeypatch):
        monkeypatch.delenv("DEVUTILS_LOG_FILE", raising=False)
        setup_logging("INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_unknown_level_means_warning(self, monkeypatch):
        monkeypatch.delenv("DEVUTILS_LOG_FILE", raising=False)
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_log_file_from_env(self, tmp_path: Path, monkeypatch):
        log_file = tmp_path / "dev.log"
        monkeypatch.setenv("DEVUTILS_LOG_FILE", str(log_file))
        monkeypatch.setenv("DEVUTILS_LOG_FILE_LEVEL", "DEBUG")
        setup_logging("WARNING")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("devutils.test").debug("written to file only")
        for handler in root.handlers:
            handler.flush()
        assert "written to file only" in log_file.read_text()

    def test_third_party_quieted(self, monkeypatch):
        monkeypatch.delenv("DEVUTILS_LOG_FILE", raising=False)
        setup_logging("INFO")
        assert logging.getLogger("urllib3").level == logging.WARNING
