"""Tests for log file selection."""
import logging

import pytest

from debian_ai_setup import logging_utils
from debian_ai_setup.logging_utils import FALLBACK_LOG_NAME, configure_logging


@pytest.fixture
def fresh_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    for attr in ("_debian_ai_setup_configured", "_debian_ai_setup_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
    yield root
    for h in root.handlers:
        if h not in saved_handlers:
            h.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    for attr in ("_debian_ai_setup_configured", "_debian_ai_setup_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)


class TestConfigureLogging:
    def test_requested_path_keeps_debug_records(self, tmp_path, fresh_root_logger):
        log_path = tmp_path / "log" / "setup.log"
        assert configure_logging(log_path=str(log_path), also_console=False) == str(log_path)

        logging.getLogger("debian_ai_setup.lib.command").debug("STDOUT: Reading package lists...")
        for h in fresh_root_logger.handlers:
            h.flush()
        assert "Reading package lists" in log_path.read_text(encoding="utf-8")

    def test_second_call_returns_first_path(self, tmp_path, fresh_root_logger):
        first = configure_logging(log_path=str(tmp_path / "a.log"), also_console=False)
        count = len(fresh_root_logger.handlers)
        assert configure_logging(log_path=str(tmp_path / "b.log"), also_console=False) == first
        assert len(fresh_root_logger.handlers) == count

    def test_falls_back_to_cwd(self, tmp_path, monkeypatch, fresh_root_logger):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        chosen = configure_logging(log_path=str(blocker / "setup.log"), also_console=False)
        assert chosen == str(tmp_path / FALLBACK_LOG_NAME)

    def test_console_only_when_nothing_opens(self, tmp_path, monkeypatch, fresh_root_logger):
        file_handler_cls = logging.FileHandler
        before = list(fresh_root_logger.handlers)

        def no_file(path, encoding=None):
            raise PermissionError(13, "Permission denied", path)

        monkeypatch.setattr(logging_utils.logging, "FileHandler", no_file)
        assert configure_logging(log_path=str(tmp_path / "setup.log")) is None
        assert not any(isinstance(h, file_handler_cls) for h in fresh_root_logger.handlers if h not in before)
