"""Recorder home directory management."""

from recorder.home.store import RecorderHome, RecorderHomeError, parse_properties

__all__ = ["RecorderHome", "RecorderHomeError", "parse_properties"]
