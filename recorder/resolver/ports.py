"""Free listening port discovery.

A port reported here is only a hint. The probe socket is closed before
returning, so another process (or another thread calling this function)
may take the port before the caller binds it.
"""

from __future__ import annotations

import socket

from recorder.models.constants import DEFAULT_PORT, LISTEN_BACKLOG
from recorder.models.network_models import NetworkAddress, PortBinding
from recorder.utils.logger import Logger

_log = Logger.child("resolver.ports")


def _probe_port(host: str, port: int) -> PortBinding:
    """Listen on ``host:port`` just long enough to learn the bound port."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    with socket.socket(family, socket.SOCK_STREAM) as sock:
        sock.bind((host, port))
        sock.listen(LISTEN_BACKLOG)
        bound_host, bound_port = sock.getsockname()[:2]
    return PortBinding(address=bound_host, port=bound_port)


def resolve_available_port(
    bind_address: str | NetworkAddress | None = None,
    preferred_port: int = 0,
    default_port: int = DEFAULT_PORT,
) -> int:
    """Return a port that could be bound on ``bind_address`` a moment ago.

    Tries ``preferred_port`` first (0 lets the OS choose), then one
    OS-chosen ephemeral port. Never raises.

    Args:
        bind_address: Address to bind; None or "" means all interfaces. A
            link-local NetworkAddress is bound with its scope id.
        preferred_port: Port to try first.
        default_port: Returned when no probe succeeds.

    Returns:
        The bound port number, or ``default_port``.
    """
    if isinstance(bind_address, NetworkAddress):
        host = bind_address.bind_host
    else:
        host = bind_address or ""

    for port in dict.fromkeys((preferred_port, 0)):
        try:
            binding = _probe_port(host, port)
        except (OSError, OverflowError) as e:
            _log.error("Error while opening port %d on '%s': %s", port, host, e)
            _log.debug("Port probe details", exc_info=True)
            continue
        _log.debug("Port %d is available on %s", binding.port, binding.address)
        return binding.port

    _log.warning("No port could be opened on '%s', using %d", host, default_port)
    return default_port
