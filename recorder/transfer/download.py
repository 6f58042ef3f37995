"""Streamed HTTP(S) download to a local file."""

from __future__ import annotations

from pathlib import Path

import requests

from recorder.models.constants import TRANSFER_CHUNK_SIZE
from recorder.utils.logger import Logger

_log = Logger.child("transfer")


class TransferError(Exception):
    """Raised when a URL could not be copied to a file."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Error while downloading {url}: {reason}")


def _describe(err: Exception) -> str:
    """Return a short human-readable reason for a failed transfer."""
    if isinstance(err, requests.exceptions.HTTPError) and err.response is not None:
        return f"HTTP {err.response.status_code} {err.response.reason or ''}".strip()
    if isinstance(err, requests.exceptions.Timeout):
        return "Timeout"
    if isinstance(err, requests.exceptions.ConnectionError):
        return "Connection failed"
    return str(err) or err.__class__.__name__


def transfer_url_to_file(
    url: str,
    destination: str | Path,
    *,
    timeout: float | None = None,
) -> int:
    """Download ``url`` into ``destination`` in fixed-size chunks.

    The body is never held in memory as a whole. The response and the file
    are closed on every path. A file that was partially written before a
    failure is left in place; removing it is up to the caller.

    Args:
        url: HTTP or HTTPS URL.
        destination: File to create or overwrite.
        timeout: Passed to requests. None waits as long as the server does.

    Returns:
        Number of bytes written.

    Raises:
        TransferError: If the connection, the HTTP status, the stream or the
            file write fails. The underlying exception is chained.
    """
    destination = Path(destination)
    written = 0
    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with open(destination, "wb") as out:
                for chunk in response.iter_content(chunk_size=TRANSFER_CHUNK_SIZE):
                    out.write(chunk)
                    written += len(chunk)
    except (requests.exceptions.RequestException, OSError) as e:
        _log.error("Download from %s failed after %d bytes: %s", url, written, e)
        raise TransferError(url, _describe(e)) from e

    _log.debug("Downloaded %d bytes from %s to %s", written, url, destination)
    return written
