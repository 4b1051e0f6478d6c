"""Centralized logging for streambyter."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from rich.logging import RichHandler

LOGGER_NAME = "streambyter"


class StreambyterLogger:
    """
    Process-wide logger with structured ``extra`` fields.

    Obtain it with ``StreambyterLogger.get_instance()``. Until ``configure``
    is called the logger has no handlers of its own and records propagate
    to whatever the host application set up.
    """

    _instance: Optional["StreambyterLogger"] = None

    def __init__(self):
        self._logger = logging.getLogger(LOGGER_NAME)
        self._configured = False

    @classmethod
    def get_instance(cls) -> "StreambyterLogger":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls):
        """Drop the singleton and its handlers (used by tests)."""
        if cls._instance is not None:
            cls._instance._remove_handlers()
        cls._instance = None

    def configure(self, config: Any):
        """
        Apply a ``LoggingConfig``.

        Args:
            config: Logging configuration model
        """
        self._remove_handlers()
        self._logger.setLevel(config.level)

        if config.console:
            console_handler = RichHandler(show_path=False, rich_tracebacks=True)
            console_handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(console_handler)

        if config.file:
            log_path = Path(config.file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ))
            self._logger.addHandler(file_handler)

        # Own handlers now; avoid printing twice through the root logger
        self._logger.propagate = not self._logger.handlers
        self._configured = True

    def _remove_handlers(self):
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()
        self._logger.propagate = True
        self._configured = False

    @property
    def is_configured(self) -> bool:
        return self._configured

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._logger.debug(self._format(message, extra), extra=extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._logger.info(self._format(message, extra), extra=extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._logger.warning(self._format(message, extra), extra=extra)

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
    ):
        self._logger.error(self._format(message, extra), extra=extra, exc_info=exc_info)

    @staticmethod
    def _format(message: str, extra: Optional[Dict[str, Any]]) -> str:
        if not extra:
            return message
        fields = " ".join(f"{key}={value}" for key, value in extra.items())
        return f"{message} [{fields}]"
