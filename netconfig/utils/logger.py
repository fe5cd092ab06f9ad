"""Centralized logging for netconfig.

Logging must be configured once before use, normally by the CLI or by
``NetworkService``.

Usage:
    from netconfig.utils.logger import Logger

    Logger.configure(level="INFO", timestamps=True)

    log = Logger.get("network.engine")
    log.info("Enumerating interfaces...")
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to Python logging level."""
        level: int = getattr(logging, self.value)
        return level


class LoggerNotConfiguredError(Exception):
    """Raised when trying to use Logger before calling Logger.configure()."""

    def __init__(self) -> None:
        super().__init__(
            "Logger not configured. Call Logger.configure() at application startup."
        )


class Logger:
    """Centralized logging for netconfig.

    Every logger handed out is a child of the ``netconfig`` root logger, so a
    single handler configured here covers the engine, the parsers, the
    hotspot backends and the monitor thread.

    Example:
        >>> Logger.configure(level="DEBUG")
        >>> log = Logger.get("hotspot.monitor")
        >>> log.info("Monitor started")
    """

    _configured: bool = False
    _root_name: str = "netconfig"

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "INFO",
        output: str | Path | TextIO | None = None,
        timestamps: bool = True,
        include_location: bool = False,
    ) -> None:
        """Configure the root netconfig logger.

        Args:
            level: Log level name or LogLevel value.
            output: None for stdout, "stderr", a file path, or any file-like
                object.
            timestamps: Prefix messages with a timestamp (milliseconds
                included, the monitor ticks are often sub-second in tests).
            include_location: Append [filename:lineno].
        """
        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())

        for existing_handler in logger.handlers[:]:
            logger.removeHandler(existing_handler)
            existing_handler.close()

        handler: logging.Handler
        if output is None:
            handler = logging.StreamHandler(sys.stdout)
        elif output == "stderr":
            handler = logging.StreamHandler(sys.stderr)
        elif isinstance(output, str | Path):
            handler = logging.FileHandler(str(output), encoding="utf-8")
        elif hasattr(output, "write"):
            handler = logging.StreamHandler(output)
        else:
            raise ValueError(f"Invalid output: {type(output)}")

        handler.setLevel(level.to_logging_level())

        parts = []
        if timestamps:
            parts.append("%(asctime)s.%(msecs)03d")
        parts.append("%(levelname)s")
        parts.append("[%(name)s]")
        if include_location:
            parts.append("[%(filename)s:%(lineno)d]")
        parts.append("%(message)s")

        handler.setFormatter(
            logging.Formatter(" ".join(parts), datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(handler)
        logger.propagate = False

        cls._configured = True

    @classmethod
    def ensure_configured(cls, level: str | LogLevel = "INFO") -> None:
        """Configure with defaults unless the application already did."""
        if not cls._configured:
            cls.configure(level=level, output="stderr")

    @classmethod
    def get(cls, name: str | None = None) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name, appended to "netconfig.".

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        if name:
            return logging.getLogger(f"{cls._root_name}.{name}")
        return logging.getLogger(cls._root_name)

    @classmethod
    def set_level(cls, level: str | LogLevel) -> None:
        """Change log level without reconfiguring.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())
        for handler in logger.handlers:
            handler.setLevel(level.to_logging_level())

    @classmethod
    def is_configured(cls) -> bool:
        """Check if logger has been configured."""
        return cls._configured
