"""Recorder - local address discovery, port probing and home directory helpers."""

from recorder.version.recorder_version import RECORDER_VERSION, Version

__version__ = str(RECORDER_VERSION)
__version_info__ = RECORDER_VERSION

__all__ = [
    "RECORDER_VERSION",
    "Version",
    "__version__",
    "__version_info__",
]
