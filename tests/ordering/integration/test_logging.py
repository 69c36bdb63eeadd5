"""Integration tests for logging configuration."""

import logging

import pytest
import structlog
from ordering.utils.logging import add_context, clear_context, configure_logging, get_log_level


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestLogLevel:
    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level() == "ERROR"

    def test_environment_default(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert get_log_level() == "INFO"


class TestConfigureLogging:
    def test_writes_log_files(self, tmp_path, restore_root_logger):
        configure_logging(log_dir=tmp_path)

        logging.getLogger("ordering.test").warning("order log line")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert (tmp_path / "ordering.log").exists()
        assert (tmp_path / "ordering_error.log").exists()
        assert "order log line" in (tmp_path / "ordering.log").read_text()

    def test_context_helpers(self, tmp_path, restore_root_logger):
        configure_logging(log_dir=tmp_path)
        add_context(request_id="req-1")
        assert structlog.contextvars.get_contextvars()["request_id"] == "req-1"

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
