"""
HybridLogger - per-class logging on top of the stdlib logging module

Console output is coloured; an optional log directory adds a timestamped
plain-text file per run.
"""

import logging
import sys
import traceback
from contextlib import suppress
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

LIBRARY_LOGGER_NAME = "push_button"


class ColoredFormatter(logging.Formatter):
    """Formatter producing '[time] [level] [class] message', optionally coloured"""

    COLORS = {
        'DEBUG': '\033[94m',    # Blue
        'INFO': '\033[92m',     # Green
        'WARNING': '\033[93m',  # Yellow
        'ERROR': '\033[91m',    # Red
        'CRITICAL': '\033[95m', # Magenta
        'RESET': '\033[0m'
    }

    def __init__(self, use_colors: bool = False):
        self.use_colors = use_colors
        super().__init__('[%(asctime)s] [%(levelname)s] [%(class_name)s] %(message)s')

    def format(self, record: logging.LogRecord) -> str:
        # Records from plain logging calls carry no class name
        if not hasattr(record, 'class_name'):
            record.class_name = record.name

        formatted = super().format(record)
        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            formatted = f"{color}{formatted}{self.COLORS['RESET']}"
        return formatted


class ClassLogger:
    """Per-class logger wrapper with its own level filter"""

    def __init__(self, main_logger: logging.Logger, class_name: str, level: int):
        self.main_logger = main_logger
        self.class_name = class_name
        self.level = level

    @classmethod
    def for_library(cls, class_name: str, level: int = logging.DEBUG) -> "ClassLogger":
        """
        ClassLogger on the shared 'push_button' logger, installing no handlers.

        Used by components when the application does not inject a logger;
        output then follows whatever logging configuration the host has.
        """
        return cls(logging.getLogger(LIBRARY_LOGGER_NAME), class_name, level)

    def is_enabled_for(self, level: int) -> bool:
        """True if a message at level would be emitted"""
        return level >= self.level and self.main_logger.isEnabledFor(level)

    def _log(self, level: int, message: str, exc_info: bool = False) -> None:
        if not self.is_enabled_for(level):
            return
        exc_info_tuple = sys.exc_info() if exc_info else None
        record = self.main_logger.makeRecord(
            self.main_logger.name, level, "", 0, message, (), exc_info_tuple
        )
        record.class_name = self.class_name
        self.main_logger.handle(record)

    def debug(self, message: str) -> None:
        self._log(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self._log(logging.INFO, message)

    def warning(self, message: str) -> None:
        self._log(logging.WARNING, message)

    def error(self, message: str, exception: Optional[Exception] = None) -> None:
        """Log error message, appending type and location of exception if given"""
        if exception:
            exc_type = type(exception).__name__
            tb = traceback.extract_tb(exception.__traceback__)
            filename, lineno, _, _ = tb[-1] if tb else ("unknown", 0, "unknown", "")
            message = f"{message} | Type: {exc_type} | File: {filename} | Line: {lineno}"
            self._log(logging.ERROR, message, exc_info=True)
        else:
            self._log(logging.ERROR, message)


class HybridLogger:
    """
    Logger factory handing out ClassLogger instances.

    Example:
        main_logger = HybridLogger("button_monitor", log_dir="logs")
        logger = main_logger.get_class_logger("PushButton", logging.DEBUG)
        button = PushButton(17, logger=logger)
        ...
        main_logger.cleanup()
    """

    def __init__(self, name: str = LIBRARY_LOGGER_NAME, log_dir: Optional[str] = None):
        self.name = name
        self.log_dir = log_dir
        self.main_logger: Optional[logging.Logger] = None
        self.log_file: Optional[Path] = None
        self.class_loggers: Dict[str, ClassLogger] = {}
        self._setup_main_logger()

    def _setup_main_logger(self) -> None:
        """Create the main logger with console and optional file handlers"""
        self.main_logger = logging.getLogger(self.name)
        self.main_logger.setLevel(logging.DEBUG)
        self.main_logger.propagate = False
        self.main_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredFormatter(use_colors=True))
        self.main_logger.addHandler(console_handler)

        if self.log_dir:
            Path(self.log_dir).mkdir(parents=True, exist_ok=True)
            stamp = datetime.now().strftime('%Y-%m-%d_%H-%M-%S')
            self.log_file = Path(self.log_dir) / f"{self.name}_{stamp}.log"
            file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
            file_handler.setFormatter(ColoredFormatter(use_colors=False))
            self.main_logger.addHandler(file_handler)

    def get_class_logger(self, class_name: str, level: int = logging.INFO) -> ClassLogger:
        """
        Get a logger for a specific class with custom log level

        Args:
            class_name: Name shown in the [class] column
            level: Minimum log level for this class

        Returns:
            ClassLogger: Cached logger for class_name
        """
        if class_name not in self.class_loggers:
            self.class_loggers[class_name] = ClassLogger(
                self.main_logger, class_name, level
            )
        return self.class_loggers[class_name]

    def get_main_logger(self, level: int = logging.INFO) -> ClassLogger:
        return self.get_class_logger("Main", level)

    def cleanup(self) -> None:
        """Flush and close all handlers"""
        if self.main_logger:
            for handler in self.main_logger.handlers:
                with suppress(OSError, ValueError):
                    handler.flush()
                    handler.close()
            self.main_logger.handlers.clear()
