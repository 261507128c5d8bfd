"""
core/logging_config.py — INSTALLWIZ
====================================
Root logger setup for the installer.

  - stderr console, colored when attached to a terminal
  - daily file installwiz_YYYYMMDD.log in the user data dir, rotated by size
  - level from LOG_LEVEL unless given explicitly
  - cleanup_old_logs() prunes files past the retention window
"""
import logging
import logging.handlers
import sys
from pathlib import Path
from datetime import datetime, timedelta
from typing import Optional

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class ColoredFormatter(logging.Formatter):
    """Console formatter painting the level name with ANSI colors."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)
        # other handlers share the record
        painted = logging.makeLogRecord(record.__dict__)
        painted.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(painted)


class LoggingConfig:

    MAX_BYTES = 2 * 1024 * 1024
    BACKUP_COUNT = 5
    RETENTION_DAYS = 14

    @staticmethod
    def log_dir(log_dir: Optional[str] = None) -> Path:
        if log_dir:
            return Path(log_dir)
        from core.paths import logs_path
        return logs_path()

    @classmethod
    def setup_logging(
            cls,
            log_level: Optional[str] = None,
            log_dir: Optional[str] = None,
            enable_console: bool = True,
            enable_colors: bool = True,
    ) -> Path:
        """Replace the root handlers; returns the log file path."""
        if not log_level:
            from core.config import get_log_level
            log_level = get_log_level()

        directory = cls.log_dir(log_dir)
        directory.mkdir(parents=True, exist_ok=True)

        root = logging.getLogger()
        root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        for handler in root.handlers[:]:
            root.removeHandler(handler)

        if enable_console and sys.stderr is not None:
            console = logging.StreamHandler(sys.stderr)
            console.setLevel(logging.INFO)
            if enable_colors and sys.stderr.isatty():
                console.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
            else:
                console.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
            root.addHandler(console)

        log_file = directory / f"installwiz_{datetime.now():%Y%m%d}.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=cls.MAX_BYTES,
            backupCount=cls.BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(file_handler)

        logging.getLogger(__name__).debug(f"Logging to {log_file} at {log_level.upper()}")
        return log_file

    @classmethod
    def cleanup_old_logs(cls, log_dir: Optional[str] = None, days_to_keep: Optional[int] = None) -> int:
        """Delete log files not modified within ``days_to_keep``; returns the count."""
        directory = cls.log_dir(log_dir)
        if not directory.exists():
            return 0

        keep = cls.RETENTION_DAYS if days_to_keep is None else days_to_keep
        cutoff = (datetime.now() - timedelta(days=keep)).timestamp()
        removed = 0

        for log_file in directory.glob("*.log*"):
            try:
                if log_file.stat().st_mtime < cutoff:
                    log_file.unlink()
                    removed += 1
            except OSError as e:
                logging.getLogger(__name__).debug(f"Could not remove {log_file}: {e}")

        return removed
