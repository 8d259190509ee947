"""Logging adapter implementing LoggingPort."""

from typing import Any

from domain.base.ports.logging_port import LoggingPort
from infrastructure.logging.logger import get_logger


class LoggingAdapter(LoggingPort):
    """Adapter that implements LoggingPort using the structlog logger.

    Positional arguments are %-style interpolated; keyword arguments become
    structured event fields.
    """

    def __init__(self, name: str = "terminator") -> None:
        """Initialize with logger name."""
        self._logger = get_logger(name)

    def bind(self, **fields: Any) -> "LoggingAdapter":
        """Return an adapter whose events all carry ``fields``."""
        bound = LoggingAdapter.__new__(LoggingAdapter)
        bound._logger = self._logger.bind(**fields)
        return bound

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log debug message."""
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log info message."""
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log warning message."""
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log error message."""
        self._logger.error(message, *args, **kwargs)

    def exception(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._logger.exception(message, *args, **kwargs)
