"""Network backend - interface and name information using psutil and socket."""

from __future__ import annotations

import socket

import psutil

from recorder.backends.base import NetworkBackend
from recorder.models.network_models import InterfaceDescriptor, NetworkAddress

_IP_FAMILIES = (socket.AF_INET, socket.AF_INET6)


class SystemNetwork(NetworkBackend):
    """Live view of the host's network configuration.

    Nothing is cached: every call reflects the interface table and resolver
    state at that moment.
    """

    def interfaces(self) -> list[InterfaceDescriptor]:
        """Snapshot all interfaces with their up flag and IP addresses.

        psutil keys interfaces by their friendly name on Windows (e.g.
        "VirtualBox Host-Only Network"), which is what the display name
        filter needs; elsewhere the display name is the interface name.

        Returns
        -------
            List of InterfaceDescriptor in psutil's order.
        """
        interfaces = []
        stats = psutil.net_if_stats()
        addrs = psutil.net_if_addrs()

        for interface_name, interface_addrs in addrs.items():
            if_stats = stats.get(interface_name)
            is_up = if_stats.isup if if_stats else False

            addresses = []
            for addr in interface_addrs:
                if addr.family not in _IP_FAMILIES:
                    continue
                try:
                    addresses.append(NetworkAddress.parse(addr.address))
                except ValueError:
                    continue

            interfaces.append(
                InterfaceDescriptor(
                    name=interface_name,
                    display_name=interface_name,
                    is_up=is_up,
                    addresses=addresses,
                )
            )

        return interfaces

    def local_host_name(self) -> str:
        return socket.gethostname()

    def local_host_address(self) -> NetworkAddress:
        return NetworkAddress.parse(socket.gethostbyname(socket.gethostname()))

    def probe_local_address(
        self, host: str, port: int, timeout: float
    ) -> NetworkAddress:
        with socket.create_connection((host, port), timeout=timeout) as sock:
            return NetworkAddress.parse(sock.getsockname()[0])

    def reverse_lookup(self, address: NetworkAddress) -> str:
        return socket.gethostbyaddr(address.address)[0]

    def addresses_for(self, host: str) -> list[NetworkAddress]:
        """Resolve ``host`` with getaddrinfo, dropping duplicate addresses.

        Raises:
            socket.gaierror: If the name cannot be resolved.
        """
        addresses: list[NetworkAddress] = []
        for _family, _type, _proto, _canon, sockaddr in socket.getaddrinfo(
            host, None, proto=socket.IPPROTO_TCP
        ):
            address = NetworkAddress.parse(sockaddr[0])
            if address not in addresses:
                addresses.append(address)
        return addresses
