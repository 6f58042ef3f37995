"""Shared pytest fixtures for recorder tests."""

from __future__ import annotations

import socket
from io import StringIO

import pytest

from recorder.backends.base import NetworkBackend
from recorder.models.network_models import InterfaceDescriptor, NetworkAddress
from recorder.utils.logger import Logger

_RECORDER_ENV = (
    "RECORDER_HOME",
    "RECORDER_LOG_LEVEL",
    "RECORDER_PREFER_IPV6",
    "RECORDER_PROBE_HOSTS",
    "RECORDER_PROBE_TIMEOUT",
    "RECORDER_DEFAULT_PORT",
)


def _raise_or_return(value):
    if isinstance(value, BaseException):
        raise value
    return value


class FakeNetwork(NetworkBackend):
    """In-memory NetworkBackend; no socket is ever opened.

    Any constructor value may be an exception instance, which is then
    raised by the matching method.
    """

    def __init__(
        self,
        interfaces=(),
        host_name="localhost",
        host_address="127.0.0.1",
        probes=None,
        reverse=None,
        hosts=None,
    ):
        self._interfaces = interfaces
        self.host_name = host_name
        self.host_address = host_address
        self.probes = probes or {}
        self.reverse = reverse or {}
        self.hosts = hosts or {}
        self.probed: list[tuple[str, int, float]] = []

    def interfaces(self):
        return list(_raise_or_return(self._interfaces))

    def local_host_name(self):
        return _raise_or_return(self.host_name)

    def local_host_address(self):
        return NetworkAddress.parse(_raise_or_return(self.host_address))

    def probe_local_address(self, host, port, timeout):
        self.probed.append((host, port, timeout))
        result = self.probes.get(host, OSError(f"{host} unreachable"))
        return NetworkAddress.parse(_raise_or_return(result))

    def reverse_lookup(self, address):
        if address.address not in self.reverse:
            raise socket.herror(1, "Unknown host")
        return self.reverse[address.address]

    def addresses_for(self, host):
        if host not in self.hosts:
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        return [NetworkAddress.parse(text) for text in self.hosts[host]]


def make_interface(name, *addresses, up=True, display_name=None):
    return InterfaceDescriptor(
        name=name,
        display_name=display_name or name,
        is_up=up,
        addresses=[NetworkAddress.parse(text) for text in addresses],
    )


@pytest.fixture(autouse=True)
def clean_recorder_env(monkeypatch):
    """Keep the developer's RECORDER_* variables out of every test."""
    for name in _RECORDER_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_network():
    """Factory for FakeNetwork instances."""
    return FakeNetwork


@pytest.fixture
def interface():
    """Factory for InterfaceDescriptor snapshots."""
    return make_interface


@pytest.fixture
def log_output():
    """Configure the Logger into a buffer and return the buffer."""
    output = StringIO()
    Logger.configure(level="DEBUG", output=output, timestamps=False)
    return output
