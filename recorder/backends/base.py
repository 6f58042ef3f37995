"""Abstract base class for the operating-system network collaborator.

The resolver never touches sockets or interface tables directly; it asks a
NetworkBackend. The production implementation wraps psutil and socket,
tests substitute a fake that needs no real network.

Implementations raise OSError (or ValueError for unparsable platform
data) on failure. The resolver decides what a failure means.
"""

from abc import ABC, abstractmethod

from recorder.models.network_models import InterfaceDescriptor, NetworkAddress


class NetworkBackend(ABC):
    """Platform network services used by address and host name resolution."""

    @abstractmethod
    def interfaces(self) -> list[InterfaceDescriptor]:
        """Enumerate interfaces in platform order, freshly on every call."""
        pass

    @abstractmethod
    def local_host_name(self) -> str:
        """Return the host name the OS reports for this machine."""
        pass

    @abstractmethod
    def local_host_address(self) -> NetworkAddress:
        """Return the address the OS resolves for this machine's host name."""
        pass

    @abstractmethod
    def probe_local_address(
        self, host: str, port: int, timeout: float
    ) -> NetworkAddress:
        """Connect to ``host:port`` and return the local end of the connection.

        The connection is closed before returning. Used only to make the OS
        pick a route; no data is exchanged.
        """
        pass

    @abstractmethod
    def reverse_lookup(self, address: NetworkAddress) -> str:
        """Return the host name mapped to ``address``."""
        pass

    @abstractmethod
    def addresses_for(self, host: str) -> list[NetworkAddress]:
        """Resolve ``host`` to every known address."""
        pass
