"""Tests for setup_logging and ContextualLogger."""

import logging

import pytest

from remotepipe.log_config.logger import ContextualLogger, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    def test_creates_rotating_log_file(self, tmp_path, restore_root_logger):
        log_dir = tmp_path / "logs"
        setup_logging("DEBUG", str(log_dir))
        get_logger("remotepipe.test").debug("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello file" in (log_dir / "remotepipe.log").read_text(encoding="utf-8")
        assert logging.getLogger().level == logging.DEBUG

    def test_console_only(self, restore_root_logger):
        setup_logging("WARNING", None)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING

    def test_idempotent(self, tmp_path, restore_root_logger):
        setup_logging("INFO", str(tmp_path))
        setup_logging("INFO", str(tmp_path))
        assert len(logging.getLogger().handlers) == 2

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        setup_logging("LOUD", None)
        assert logging.getLogger().level == logging.INFO


class TestContextualLogger:
    def test_prefix(self, caplog):
        log = ContextualLogger(get_logger("remotepipe.ctx"), engine="remote-1")
        with caplog.at_level(logging.INFO, logger="remotepipe.ctx"):
            log.info("started %s", "ok")
        assert "[engine=remote-1] started ok" in caplog.text

    def test_exception_includes_traceback(self, caplog):
        log = ContextualLogger(get_logger("remotepipe.ctx"))
        with caplog.at_level(logging.ERROR, logger="remotepipe.ctx"):
            try:
                raise RuntimeError("kaput")
            except RuntimeError:
                log.exception("failed")
        assert caplog.records[-1].exc_info is not None
        assert caplog.records[-1].getMessage() == "failed"
