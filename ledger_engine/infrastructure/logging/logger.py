"""Logging helpers for the ledger engine.

Loggers are built once per name and write to a daily file under
``<project root>/logs/<subdir>/`` plus an optional console stream.
"""

from datetime import date
import logging
from pathlib import Path
from typing import Callable

from ledger_engine.utils.utils import get_project_root


FormatterFactory = Callable[[], logging.Formatter]
FileHandlerFactory = Callable[[Path, logging.Formatter], logging.Handler]
ConsoleHandlerFactory = Callable[[logging.Formatter], logging.Handler]


class LoggerBuilder:
    """Fluent builder for configured ``logging.Logger`` instances."""

    def __init__(self) -> None:
        self._name = "ledger_engine"
        self._subdir = "app"
        self._prefix = "app_logs"
        self._console = True
        self._level = logging.INFO
        self._formatter_factory: FormatterFactory = self._default_formatter
        self._file_handler_factory: FileHandlerFactory = (
            self._default_file_handler
        )
        self._console_handler_factory: ConsoleHandlerFactory = (
            self._default_console_handler
        )

    def name(self, name: str) -> "LoggerBuilder":
        self._name = name
        return self

    def subdir(self, subdir: str) -> "LoggerBuilder":
        self._subdir = subdir
        return self

    def prefix(self, prefix: str) -> "LoggerBuilder":
        self._prefix = prefix
        return self

    def console(self, enabled: bool) -> "LoggerBuilder":
        self._console = enabled
        return self

    def level(self, level: int) -> "LoggerBuilder":
        self._level = level
        return self

    def formatter(self, factory: FormatterFactory) -> "LoggerBuilder":
        self._formatter_factory = factory
        return self

    def file_handler(self, factory: FileHandlerFactory) -> "LoggerBuilder":
        self._file_handler_factory = factory
        return self

    def console_handler(
        self,
        factory: ConsoleHandlerFactory,
    ) -> "LoggerBuilder":
        self._console_handler_factory = factory
        return self

    def build(self) -> logging.Logger:
        """Return the configured logger, reusing it if already built.

        Returns:
            logging.Logger: Logger with file and optional console handlers.
        """
        logger = logging.getLogger(self._name)
        logger.setLevel(self._level)
        if logger.handlers:
            return logger

        log_dir = get_project_root() / "logs" / self._subdir
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{self._today_stamp()}_{self._prefix}.log"

        fmt = self._formatter_factory()
        logger.addHandler(self._file_handler_factory(log_path, fmt))
        if self._console:
            logger.addHandler(self._console_handler_factory(fmt))
        logger.propagate = False
        return logger

    @staticmethod
    def _today_stamp() -> str:
        return date.today().strftime("%Y%m%d")

    @staticmethod
    def _default_formatter() -> logging.Formatter:
        return logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    @staticmethod
    def _default_file_handler(
        path: Path,
        fmt: logging.Formatter,
    ) -> logging.Handler:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler

    @staticmethod
    def _default_console_handler(fmt: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler


class Logger:
    """Singleton wrapper delegating to a built ``logging.Logger``."""

    _instance = None
    _subdir = "app"
    _prefix = "app_logs"

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._initialized = False
            cls._instance = instance
        return cls._instance

    def __init__(self, name: str = "ledger_engine") -> None:
        if self._initialized:
            return
        self.logger = (
            LoggerBuilder()
            .name(name)
            .subdir(self._subdir)
            .prefix(self._prefix)
            .build()
        )
        self._initialized = True

    def info(self, msg: str) -> None:
        self.logger.info(msg)

    def warning(self, msg: str) -> None:
        self.logger.warning(msg)

    def error(self, msg: str) -> None:
        self.logger.error(msg)

    def debug(self, msg: str) -> None:
        self.logger.debug(msg)

    def critical(self, msg: str) -> None:
        self.logger.critical(msg)

    def exception(self, msg: str) -> None:
        self.logger.exception(msg)


class AppLogger(Logger):
    """Application logger for engine operations."""

    _instance = None


class UsageLogger(Logger):
    """Audit logger recording which entry points were invoked."""

    _instance = None
    _subdir = "usage"
    _prefix = "usage_logs"


def get_app_logger() -> AppLogger:
    """Return the shared application logger."""
    return AppLogger("ledger_engine")


def get_usage_logger() -> UsageLogger:
    """Return the shared usage logger."""
    return UsageLogger("ledger_engine.usage")


__all__ = [
    "LoggerBuilder",
    "Logger",
    "AppLogger",
    "UsageLogger",
    "get_app_logger",
    "get_usage_logger",
]
