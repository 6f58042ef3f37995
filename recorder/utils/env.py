"""Environment variable helpers with type coercion.

Every ``RECORDER_*`` knob is read through these helpers:

    from recorder.utils.env import get_env

    home = get_env("RECORDER_HOME", default="~/.ngrinder_recorder")
    timeout = get_env("RECORDER_PROBE_TIMEOUT", default=2.0, as_type=float)
    hosts = get_env("RECORDER_PROBE_HOSTS", as_type=list)
"""

from __future__ import annotations

import os
from typing import Any, TypeVar, cast, overload

from recorder.utils.logger import Logger

T = TypeVar("T")

_FALSE_VALUES = ("false", "0", "", "no", "off")


class EnvVarError(Exception):
    """Base exception for environment variable errors."""


class EnvVarTypeError(EnvVarError):
    """Raised when a value cannot be converted to the requested type."""

    def __init__(self, name: str, value: str, expected_type: type) -> None:
        self.name = name
        self.value = value
        self.expected_type = expected_type
        super().__init__(f"Cannot convert {name}='{value}' to {expected_type.__name__}")


def _coerce_type(name: str, value: str, as_type: type) -> Any:
    """Convert a raw string to ``as_type``.

    bool treats "false", "0", "", "no" and "off" as False. list splits on
    commas and drops empty items.
    """
    try:
        if as_type is bool:
            return value.strip().lower() not in _FALSE_VALUES
        if as_type is list or getattr(as_type, "__origin__", None) is list:
            return [item.strip() for item in value.split(",") if item.strip()]
        return as_type(value.strip())
    except (ValueError, TypeError) as e:
        raise EnvVarTypeError(name, value, as_type) from e


@overload
def get_env(name: str, *, default: T, as_type: type[T]) -> T:
    ...


@overload
def get_env(name: str, *, default: T) -> T:
    ...


@overload
def get_env(name: str, *, as_type: type[T]) -> T | None:
    ...


@overload
def get_env(name: str) -> str | None:
    ...


def get_env(
    name: str,
    *,
    default: T | None = None,
    as_type: type[T] | None = None,
) -> T | str | None:
    """Read an environment variable, coercing it when ``as_type`` is given.

    Args:
        name: Environment variable name.
        default: Returned when the variable is unset.
        as_type: bool, int, float, str or list.

    Returns:
        The converted value, or ``default`` if the variable is unset.

    Raises:
        EnvVarTypeError: If the value cannot be converted.
    """
    value = os.environ.get(name)
    Logger.child("env").debug("ENV GET %s=%s", name, value)

    if value is None:
        return default
    if as_type is not None:
        return cast(T, _coerce_type(name, value, as_type))
    return value
