"""Directory-backed home for recorder files, logs and properties."""

from __future__ import annotations

import os
import re
import shutil
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from recorder.models.constants import DEFAULT_HOME_DIRNAME, LOG_DIRNAME
from recorder.utils.env import get_env
from recorder.utils.logger import Logger

_log = Logger.child("home")

_SEPARATOR = re.compile(r"\s*[=:]\s*|\s+")


class RecorderHomeError(Exception):
    """Raised when the home directory is unusable or a file cannot be copied."""


def _split_entry(line: str) -> tuple[str, str]:
    match = _SEPARATOR.search(line)
    if match is None:
        return line, ""
    return line[: match.start()], line[match.end() :]


def _ends_with_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``key=value`` text.

    Separators are ``=``, ``:`` or whitespace. Lines starting with ``#`` or
    ``!`` are comments. A line ending in an odd number of backslashes
    continues on the next line. Escape sequences are not interpreted.
    """
    properties: dict[str, str] = {}
    pending = ""
    for raw in text.splitlines():
        line = raw.strip()
        if not pending and (not line or line[0] in "#!"):
            continue
        if _ends_with_continuation(line):
            pending += line[:-1]
            continue
        key, value = _split_entry(pending + line)
        properties[key] = value
        pending = ""
    if pending:
        key, value = _split_entry(pending)
        properties[key] = value
    return properties


class RecorderHome:
    """The recorder's home directory.

    The directory is validated once, on construction: it is created when
    missing and must then be a writable directory whose absolute path has
    no spaces.

    Storage layout::

        ~/.ngrinder_recorder/
        ├── log/
        └── *.properties

    Parameters
    ----------
    directory : str | Path
        Home directory. ``~`` is expanded.

    Raises
    ------
    RecorderHomeError
        If the directory is None, contains a space, cannot be created, is
        not a directory or is not writable.
    """

    def __init__(self, directory: str | Path) -> None:
        if directory is None:
            raise RecorderHomeError("The directory should not be None.")

        path = Path(directory).expanduser().absolute()
        if " " in str(path).strip():
            raise RecorderHomeError(
                f'Recorder home directory "{path}" should not contain space. '
                "Please set RECORDER_HOME env var in a different location"
            )

        if not path.exists():
            try:
                path.mkdir(parents=True)
            except OSError as e:
                raise RecorderHomeError(
                    f"Recorder home directory {path} is not created. "
                    "Please check the permission"
                ) from e

        if not path.is_dir():
            raise RecorderHomeError(
                f"Recorder home directory {path} is not directory. "
                "Please delete this file in advance"
            )

        if not os.access(path, os.W_OK):
            raise RecorderHomeError(
                f"Recorder home directory {path} is not writable. "
                "Please adjust permission on this folder"
            )

        self._directory = path
        _log.debug("Using recorder home %s", path)

    @classmethod
    def from_env(cls) -> RecorderHome:
        """Home at ``RECORDER_HOME``, or ``~/.ngrinder_recorder``."""
        default = str(Path.home() / DEFAULT_HOME_DIRNAME)
        return cls(get_env("RECORDER_HOME", default=default))

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def log_directory(self) -> Path:
        return self._directory / LOG_DIRNAME

    def get_file(self, path: str | Path) -> Path:
        """Return ``path`` resolved against the home directory."""
        return self._directory / path

    def copy_file_to(
        self, stream: BinaryIO, target: str | Path, overwrite: bool = False
    ) -> Path:
        """Write ``stream`` into the home under the file name of ``target``.

        Only the final component of ``target`` is used. An existing file is
        kept unless ``overwrite`` is True.

        Parameters
        ----------
        stream : BinaryIO
            Readable binary stream; it is read but not closed.
        target : str | Path
            Path whose name is used for the copy.
        overwrite : bool
            Replace an existing file.

        Returns
        -------
        Path
            The file in the home directory.

        Raises
        ------
        RecorderHomeError
            If writing fails.
        """
        destination = self._directory / Path(target).name
        if destination.exists() and not overwrite:
            return destination
        try:
            with open(destination, "wb") as out:
                shutil.copyfileobj(stream, out)
        except OSError as e:
            raise RecorderHomeError(f"Failed to write a file to {destination}") from e
        return destination

    def get_properties(self, path: str | Path) -> dict[str, str]:
        """Load a properties file from the home.

        Returns
        -------
        dict[str, str]
            Parsed properties, or an empty dict if the file is missing or
            unreadable.
        """
        try:
            text = self.get_file(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            _log.debug("No properties loaded from %s: %s", path, e)
            return {}
        return parse_properties(text)

    def save_properties(self, path: str | Path, properties: Mapping[str, object]) -> None:
        """Write ``properties`` as sorted ``key=value`` lines.

        Best effort: a failure is logged, not raised.
        """
        target = self.get_file(path)
        lines = [f"#{datetime.now().strftime('%a %b %d %H:%M:%S %Y')}"]
        lines.extend(f"{key}={value}" for key, value in sorted(properties.items()))
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as e:
            _log.error("Could not save property file on %s: %s", target, e)
