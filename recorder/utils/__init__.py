"""Recorder utilities - logging and environment configuration."""

from recorder.utils.env import (
    EnvVarError,
    EnvVarTypeError,
    get_env,
)
from recorder.utils.logger import (
    Logger,
    LoggerNotConfiguredError,
    LogLevel,
)

__all__ = [
    # Env
    "EnvVarError",
    "EnvVarTypeError",
    "LogLevel",
    # Logger
    "Logger",
    "LoggerNotConfiguredError",
    "get_env",
]
