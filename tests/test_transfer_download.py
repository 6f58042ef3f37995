"""Tests for streamed URL-to-file transfer."""

import gc
import os
import threading
import warnings
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import MagicMock, patch

import pytest
import requests

from recorder.resolver import resolve_available_port
from recorder.transfer.download import TransferError, transfer_url_to_file

PAYLOAD = os.urandom(4096 * 3 + 517)


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):  # noqa: N802 - http.server naming
        if self.path == "/missing":
            self.send_error(404, "Not Found")
            return
        self.send_response(200)
        self.send_header("Content-Type", "application/octet-stream")
        self.send_header("Content-Length", str(len(PAYLOAD)))
        self.end_headers()
        self.wfile.write(PAYLOAD)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def http_server():
    """Serve PAYLOAD on an ephemeral loopback port."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


def test_downloads_exact_bytes(http_server, tmp_path):
    """The destination holds exactly the served bytes."""
    destination = tmp_path / "agent.tar.gz"
    written = transfer_url_to_file(f"{http_server}/agent.tar.gz", destination)
    assert written == len(PAYLOAD)
    assert destination.read_bytes() == PAYLOAD


def test_http_error_status_is_a_transfer_failure(http_server, tmp_path):
    """A 404 raises TransferError naming the status."""
    url = f"{http_server}/missing"
    with pytest.raises(TransferError) as excinfo:
        transfer_url_to_file(url, tmp_path / "missing.bin")
    assert excinfo.value.url == url
    assert "HTTP 404" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, requests.exceptions.HTTPError)


def test_unreachable_url_raises_transfer_error(tmp_path):
    """Nothing listens on the port: the failure wraps the connection error."""
    port = resolve_available_port("127.0.0.1", 0)
    destination = tmp_path / "never.bin"
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ResourceWarning)
        with pytest.raises(TransferError) as excinfo:
            transfer_url_to_file(
                f"http://127.0.0.1:{port}/file", destination, timeout=2
            )
        gc.collect()

    assert not [w for w in caught if issubclass(w.category, ResourceWarning)]
    assert "Connection failed" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, requests.exceptions.ConnectionError)
    assert not destination.exists()


def test_malformed_url_raises_transfer_error(tmp_path):
    with pytest.raises(TransferError):
        transfer_url_to_file("not a url", tmp_path / "x.bin")


def test_streams_in_bounded_chunks_and_closes_response(tmp_path):
    """Chunks are requested at 4 KiB and the response is always closed."""
    response = MagicMock()
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    response.iter_content.return_value = [b"a" * 4096, b"b" * 10]

    with patch(
        "recorder.transfer.download.requests.get", return_value=response
    ) as get:
        written = transfer_url_to_file("http://example.test/f", tmp_path / "f")

    get.assert_called_once_with("http://example.test/f", stream=True, timeout=None)
    response.iter_content.assert_called_once_with(chunk_size=4096)
    response.__exit__.assert_called_once()
    assert written == 4106


def test_mid_stream_failure_keeps_partial_file_and_closes(tmp_path):
    """A broken stream raises, closes the response and leaves partial data."""

    def broken_stream(chunk_size):
        yield b"x" * chunk_size
        raise requests.exceptions.ChunkedEncodingError("connection reset")

    response = MagicMock()
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    response.iter_content.side_effect = broken_stream
    destination = tmp_path / "partial.bin"

    with patch("recorder.transfer.download.requests.get", return_value=response):
        with pytest.raises(TransferError):
            transfer_url_to_file("http://example.test/f", destination)

    response.__exit__.assert_called_once()
    assert destination.read_bytes() == b"x" * 4096
