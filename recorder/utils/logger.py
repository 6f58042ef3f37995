"""Centralized logging for recorder.

Applications configure the ``recorder`` root logger once; library modules
ask for a child logger and never configure anything themselves.

Usage:
    from recorder.utils.logger import Logger

    # Application startup (CLI, agent bootstrap)
    Logger.configure(level="INFO", timestamps=True)
    Logger.get("cli").info("Recorder starting")

    # Library code that may run before the host configured logging
    log = Logger.child("resolver")
    log.warning("Interface enumeration failed")
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
    """Raised when Logger.get() is called before Logger.configure()."""

    def __init__(self) -> None:
        super().__init__(
            "Logger not configured. Call Logger.configure() at application startup."
        )


class Logger:
    """Logging facade rooted at the ``recorder`` logger.

    ``get`` is for application code and insists on prior configuration.
    ``child`` is for library code: it hands out the same namespaced logger
    whether or not a handler has been installed yet, so discovery helpers
    can log from an unconfigured host without failing.
    """

    _configured: bool = False
    _root_name: str = "recorder"

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "INFO",
        output: str | Path | TextIO | None = None,
        timestamps: bool = True,
        include_location: bool = False,
        format_string: str | None = None,
    ) -> None:
        """Install a single handler on the ``recorder`` root logger.

        Args:
            level: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL" or a
                LogLevel value.
            output: None for stdout, "stderr", a file path, or any object
                with a ``write`` method.
            timestamps: Prefix messages with the time.
            include_location: Add ``[filename:lineno]``.
            format_string: Custom format, overrides the two flags above.
        """
        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())

        for existing_handler in logger.handlers[:]:
            logger.removeHandler(existing_handler)
            existing_handler.close()

        new_handler: logging.Handler
        if output is None:
            new_handler = logging.StreamHandler(sys.stdout)
        elif output == "stderr":
            new_handler = logging.StreamHandler(sys.stderr)
        elif isinstance(output, str | Path):
            Path(output).parent.mkdir(parents=True, exist_ok=True)
            new_handler = logging.FileHandler(str(output), encoding="utf-8")
        elif hasattr(output, "write"):
            new_handler = logging.StreamHandler(output)
        else:
            raise ValueError(f"Invalid output: {type(output)}")

        new_handler.setLevel(level.to_logging_level())

        if format_string is None:
            parts = []
            if timestamps:
                parts.append("%(asctime)s")
            parts.append("%(levelname)s")
            parts.append("[%(name)s]")
            if include_location:
                parts.append("[%(filename)s:%(lineno)d]")
            parts.append("%(message)s")
            format_string = " ".join(parts)

        new_handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(new_handler)
        logger.propagate = False

        cls._configured = True

    @classmethod
    def get(cls, name: str | None = None) -> logging.Logger:
        """Return ``recorder.<name>``, or the root logger when name is None.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()
        return cls.child(name)

    @classmethod
    def child(cls, name: str | None = None) -> logging.Logger:
        """Return ``recorder.<name>`` without requiring configuration."""
        if name:
            return logging.getLogger(f"{cls._root_name}.{name}")
        return logging.getLogger(cls._root_name)

    @classmethod
    def set_level(cls, level: str | LogLevel) -> None:
        """Change the level of the root logger and its handlers.

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
