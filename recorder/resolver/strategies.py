"""Ordered fallback strategies for local address and host name discovery.

A strategy takes the network backend and the settings and returns a result,
or None when it has nothing to offer. Strategies may raise; ``first_result``
logs the failure and moves on to the next one.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

from recorder.backends.base import NetworkBackend
from recorder.models.constants import LOCALHOST_NAME, IPVersion
from recorder.models.network_models import NetworkAddress, ResolverSettings
from recorder.utils.logger import Logger

T = TypeVar("T")
Strategy = Callable[[NetworkBackend, ResolverSettings], T | None]

_log = Logger.child("resolver.strategies")


def first_result(
    strategies: Sequence[Strategy[T]],
    network: NetworkBackend,
    settings: ResolverSettings,
) -> T | None:
    """Run ``strategies`` in order and return the first non-None result."""
    for strategy in strategies:
        try:
            result = strategy(network, settings)
        except Exception as e:  # noqa: BLE001
            _log.error("Strategy %s failed: %s", strategy.__name__, e)
            _log.debug("Strategy failure details", exc_info=True)
            continue
        if result is not None:
            _log.debug("Strategy %s resolved %s", strategy.__name__, result)
            return result
    return None


def _accepts(address: NetworkAddress, settings: ResolverSettings) -> bool:
    if address.version == IPVersion.V4:
        return not settings.prefer_ipv6
    return not settings.prefer_ipv4


# -------------------------------------------------------------------------
# Address strategies
# -------------------------------------------------------------------------


def interface_address(
    network: NetworkBackend, settings: ResolverSettings
) -> NetworkAddress | None:
    """First non-loopback address on an up, non host-only interface.

    Interfaces and their addresses are walked in platform order and the
    first acceptable address wins. ``prefer_ipv4`` skips IPv6 addresses and
    ``prefer_ipv6`` skips IPv4 addresses.
    """
    marker = settings.host_only_marker.lower()
    for interface in network.interfaces():
        if not interface.is_up:
            continue
        if marker in interface.display_name.lower():
            continue
        for address in interface.addresses:
            if not address.is_loopback and _accepts(address, settings):
                return address
    return None


def host_name_address(
    network: NetworkBackend, settings: ResolverSettings
) -> NetworkAddress | None:
    """The address of the OS host name, unless it is loopback."""
    address = network.local_host_address()
    return None if address.is_loopback else address


def probed_address(
    network: NetworkBackend, settings: ResolverSettings
) -> NetworkAddress | None:
    """Local end of a throwaway connection to the first reachable probe host."""
    for host in settings.probe_hosts:
        try:
            return network.probe_local_address(
                host, settings.probe_port, settings.probe_timeout
            )
        except (OSError, ValueError) as e:
            _log.warning(
                "Connection probe to %s:%d failed: %s", host, settings.probe_port, e
            )
    return None


ADDRESS_STRATEGIES: tuple[Strategy[NetworkAddress], ...] = (
    interface_address,
    host_name_address,
    probed_address,
)


# -------------------------------------------------------------------------
# Host name strategies
# -------------------------------------------------------------------------


def reported_host_name(
    network: NetworkBackend, settings: ResolverSettings
) -> str | None:
    """The OS host name; "localhost" counts as no answer.

    A host whose hosts file is incomplete reports "localhost", which is
    useless to remote peers, so it is treated exactly like a failure.
    """
    name = network.local_host_name()
    if not name or name == LOCALHOST_NAME:
        return None
    return name


def probed_host_name(
    network: NetworkBackend, settings: ResolverSettings
) -> str | None:
    """Reverse-mapped name of the probed local address, or its text."""
    address = probed_address(network, settings)
    if address is None:
        return None
    try:
        return network.reverse_lookup(address)
    except (OSError, UnicodeError) as e:
        _log.debug("Reverse lookup of %s failed: %s", address, e)
        return address.address


HOST_NAME_STRATEGIES: tuple[Strategy[str], ...] = (
    reported_host_name,
    probed_host_name,
)
