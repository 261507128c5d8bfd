"""
tests/test_logging_config.py
============================
Log formatting and retention.
"""
import logging
import os
import time

from core.logging_config import ColoredFormatter, LoggingConfig


def _record(level=logging.WARNING, msg="careful"):
    return logging.LogRecord("installwiz", level, __file__, 1, msg, None, None)


class TestColoredFormatter:

    def test_level_colored(self):
        out = ColoredFormatter("%(levelname)s %(message)s").format(_record())
        assert out.startswith("\033[33mWARNING\033[0m")

    def test_record_left_untouched(self):
        record = _record()
        ColoredFormatter("%(levelname)s").format(record)
        assert record.levelname == "WARNING"


class TestCleanup:

    def test_old_logs_removed(self, tmp_path):
        old = tmp_path / "installwiz_20200101.log"
        new = tmp_path / "installwiz_today.log"
        old.write_text("x", encoding="utf-8")
        new.write_text("x", encoding="utf-8")
        stale = time.time() - 30 * 86400
        os.utime(old, (stale, stale))

        assert LoggingConfig.cleanup_old_logs(str(tmp_path), days_to_keep=14) == 1
        assert not old.exists()
        assert new.exists()

    def test_missing_dir(self, tmp_path):
        assert LoggingConfig.cleanup_old_logs(str(tmp_path / "nope")) == 0


class TestSetup:

    def test_file_handler_written(self, tmp_path):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            LoggingConfig.setup_logging("DEBUG", str(tmp_path), enable_console=False)
            logging.getLogger("installwiz.test").debug("hello file")
            for handler in root.handlers:
                handler.flush()

            logs = list(tmp_path.glob("installwiz_*.log"))
            assert len(logs) == 1
            assert "hello file" in logs[0].read_text(encoding="utf-8")
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
