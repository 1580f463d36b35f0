"""
LoggingHandler module for managing logging operations.
This module handles log file creation and rotation.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

from geode_installer.shared.paths import get_logs_dir

DEFAULT_LOG_FILE = "geode-installer.log"


class LoggingHandler:
    """
    Central logging handler for the Geode installer.
    - Uses ~/.local/share/geode-installer/logs/ as the log directory.
    - Handles log rotation and log directory creation.
    Usage:
        logger = LoggingHandler().setup_logger('geode_installer', 'geode-installer.log')
    """
    def __init__(self, log_dir: Optional[Union[str, Path]] = None):
        self.log_dir = Path(log_dir) if log_dir else get_logs_dir()
        self.ensure_log_directory()

    def ensure_log_directory(self) -> None:
        """Ensure the log directory exists."""
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            print(f"Failed to create log directory: {e}")

    def rotate_log_file_per_run(self, log_file_path: Path, backup_count: int = 5):
        """Rotate the log file on every run, keeping up to backup_count backups."""
        if log_file_path.exists():
            # Remove the oldest backup if it exists
            oldest = log_file_path.with_suffix(log_file_path.suffix + f'.{backup_count}')
            if oldest.exists():
                oldest.unlink()
            # Shift backups
            for i in range(backup_count - 1, 0, -1):
                src = log_file_path.with_suffix(log_file_path.suffix + f'.{i}')
                dst = log_file_path.with_suffix(log_file_path.suffix + f'.{i+1}')
                if src.exists():
                    src.rename(dst)
            log_file_path.rename(log_file_path.with_suffix(log_file_path.suffix + '.1'))

    def rotate_log_for_logger(self, log_file: Optional[str] = None, backup_count: int = 5):
        """
        Rotate a log file before any logging occurs.
        Must be called BEFORE the file handler is attached.
        """
        file_path = self.log_dir / (log_file or DEFAULT_LOG_FILE)
        try:
            self.rotate_log_file_per_run(file_path, backup_count=backup_count)
        except OSError as e:
            print(f"Failed to rotate log file {file_path}: {e}")

    def setup_logger(self, name: str, log_file: Optional[str] = None, console_level: int = logging.ERROR) -> logging.Logger:
        """Set up a logger with file and console handlers."""
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        if not any(type(h) is logging.StreamHandler for h in logger.handlers):
            console_handler = logging.StreamHandler()
            console_handler.setLevel(console_level)
            console_handler.setFormatter(console_formatter)
            logger.addHandler(console_handler)

        file_path = self.log_dir / (log_file or DEFAULT_LOG_FILE)
        if not any(isinstance(h, logging.handlers.RotatingFileHandler) and getattr(h, 'baseFilename', None) == str(file_path) for h in logger.handlers):
            try:
                file_handler = logging.handlers.RotatingFileHandler(
                    file_path, mode='a', encoding='utf-8', maxBytes=1024*1024, backupCount=5
                )
            except OSError as e:
                # Console-only logging
                print(f"Failed to open log file {file_path}: {e}")
            else:
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(file_formatter)
                logger.addHandler(file_handler)

        return logger

    def set_console_level(self, logger: logging.Logger, level: int) -> None:
        """Change the level of a logger's console handler only."""
        for handler in logger.handlers:
            if type(handler) is logging.StreamHandler:
                handler.setLevel(level)
