"""
Centralized logging configuration for camera-notifier.

Informational lines go to stdout and warnings/errors to stderr. Both streams
are flushed on every record, since the process usually runs under a
supervisor that may kill it at any time.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class _MaxLevelFilter(logging.Filter):
    """Pass only records below a level."""

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


class NotifierLogger:
    """
    Centralized logger configuration for camera-notifier.

    Provides split stdout/stderr console output and an optional rotating
    log file.
    """

    _configured = False
    _log_file_path: Optional[Path] = None

    @classmethod
    def configure(
        cls,
        verbose: bool = False,
        log_file: Optional[Path] = None,
        max_file_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        stdout=None,
        stderr=None,
        force: bool = False,
    ) -> None:
        """
        Configure logging for camera-notifier.

        Args:
            verbose: Log DEBUG records to the console instead of INFO and above
            log_file: Optional path to a rotating log file
            max_file_size: Maximum size of log file before rotation
            backup_count: Number of backup log files to keep
            stdout: Stream for informational records (defaults to sys.stdout)
            stderr: Stream for warnings and errors (defaults to sys.stderr)
            force: Reconfigure even if logging was already set up
        """
        if cls._configured and not force:
            return

        level = logging.DEBUG if verbose else logging.INFO

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG if log_file else level)
        root_logger.handlers.clear()

        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

        # StreamHandler flushes after every record
        info_handler = logging.StreamHandler(stdout or sys.stdout)
        info_handler.setFormatter(formatter)
        info_handler.setLevel(level)
        info_handler.addFilter(_MaxLevelFilter(logging.WARNING))
        root_logger.addHandler(info_handler)

        error_handler = logging.StreamHandler(stderr or sys.stderr)
        error_handler.setFormatter(formatter)
        error_handler.setLevel(logging.WARNING)
        root_logger.addHandler(error_handler)

        cls._log_file_path = None
        if log_file is not None:
            try:
                log_file = Path(log_file)
                log_file.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.handlers.RotatingFileHandler(
                    log_file,
                    maxBytes=max_file_size,
                    backupCount=backup_count,
                    encoding='utf-8'
                )
                file_handler.setFormatter(formatter)
                file_handler.setLevel(logging.DEBUG)
                root_logger.addHandler(file_handler)
                cls._log_file_path = log_file
            except OSError as e:
                # Continue with console only
                root_logger.warning(f"Could not set up file logging: {e}")

        # HTTP client internals are noisy at DEBUG
        for name in ('httpx', 'httpcore'):
            logging.getLogger(name).setLevel(logging.WARNING)

        cls._configured = True
        logging.getLogger(__name__).debug(
            f"Logging configured - Verbose: {verbose}, File: {cls._log_file_path}"
        )

    @classmethod
    def get_log_file_path(cls) -> Optional[Path]:
        """Get the current log file path."""
        return cls._log_file_path


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None, **kwargs) -> None:
    """Convenience function to set up camera-notifier logging."""
    NotifierLogger.configure(verbose=verbose, log_file=log_file, **kwargs)
