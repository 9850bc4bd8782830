"""Tests for logging setup."""

import logging
import logging.handlers
from contextlib import contextmanager

from src.logging_config import LOG_FILE_NAME, setup_logging


@contextmanager
def _bare_root_logger():
    """Empty the root logger's handlers for the block, then put them back."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    root.handlers.clear()
    try:
        yield root
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


class TestSetupLogging:
    def test_creates_log_file_in_given_dir(self, tmp_path):
        with _bare_root_logger():
            log_file = setup_logging(log_dir=tmp_path / "logs")
        assert log_file == tmp_path / "logs" / LOG_FILE_NAME
        assert log_file.exists()

    def test_installs_rotating_file_and_console_handlers(self, tmp_path):
        with _bare_root_logger() as root:
            setup_logging("DEBUG", log_dir=tmp_path)
            kinds = {type(h) for h in root.handlers}
            level = root.level
        assert kinds == {logging.handlers.RotatingFileHandler, logging.StreamHandler}
        assert level == logging.DEBUG

    def test_console_kept_at_warning_or_above(self, tmp_path):
        with _bare_root_logger() as root:
            setup_logging("INFO", log_dir=tmp_path)
            console = next(
                h for h in root.handlers
                if not isinstance(h, logging.handlers.RotatingFileHandler)
            )
        assert console.level == logging.WARNING

    def test_second_call_is_noop(self, tmp_path):
        with _bare_root_logger() as root:
            setup_logging(log_dir=tmp_path)
            setup_logging(log_dir=tmp_path)
            count = len(root.handlers)
        assert count == 2
