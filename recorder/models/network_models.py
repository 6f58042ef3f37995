"""Pydantic models for local address discovery."""

from __future__ import annotations

import ipaddress

from pydantic import BaseModel, ConfigDict, Field, model_validator

from recorder.models.constants import (
    DEFAULT_PORT,
    DEFAULT_PROBE_HOSTS,
    DEFAULT_PROBE_PORT,
    DEFAULT_PROBE_TIMEOUT,
    HOST_ONLY_MARKER,
    IPVersion,
)
from recorder.utils.env import get_env


class NetworkAddress(BaseModel):
    """A single IPv4 or IPv6 address as reported by the platform."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Textual IP address, without scope id")
    version: IPVersion = Field(..., description="IP protocol version (4 or 6)")
    scope_id: str | None = Field(
        default=None, description="IPv6 zone such as an interface name"
    )

    @classmethod
    def parse(cls, text: str) -> NetworkAddress:
        """Build an address from platform text such as ``fe80::1%eth0``.

        Raises:
            ValueError: If ``text`` is not an IP address.
        """
        text, _, scope = text.partition("%")
        ip = ipaddress.ip_address(text)
        return cls(
            address=str(ip), version=IPVersion(ip.version), scope_id=scope or None
        )

    @property
    def bind_host(self) -> str:
        """Host text for bind(), with the zone kept for link-local use."""
        return f"{self.address}%{self.scope_id}" if self.scope_id else self.address

    @property
    def is_loopback(self) -> bool:
        """Whether this is a loopback address (127.0.0.0/8 or ::1)."""
        return ipaddress.ip_address(self.address).is_loopback

    def __str__(self) -> str:
        return self.address


class InterfaceDescriptor(BaseModel):
    """Snapshot of a network interface taken at enumeration time."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Interface name (e.g., 'eth0', 'en0')")
    display_name: str = Field(..., description="Human-readable adapter name")
    is_up: bool = Field(..., description="Whether interface is currently up")
    addresses: list[NetworkAddress] = Field(
        default_factory=list, description="IP addresses bound to this interface"
    )


class PortBinding(BaseModel):
    """A port held open only while its availability is probed."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Address the probe socket was bound to")
    port: int = Field(..., ge=1, le=65535, description="Bound port number")


class ResolverSettings(BaseModel):
    """Tunables for address, host name and port resolution."""

    model_config = ConfigDict(frozen=True)

    prefer_ipv4: bool = Field(True, description="Skip IPv6 interface addresses")
    prefer_ipv6: bool = Field(False, description="Skip IPv4 interface addresses")
    probe_hosts: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PROBE_HOSTS),
        description="Public hosts contacted, in order, to discover the routed address",
    )
    probe_port: int = Field(DEFAULT_PROBE_PORT, ge=1, le=65535)
    probe_timeout: float = Field(
        DEFAULT_PROBE_TIMEOUT, gt=0, description="Connect timeout in seconds"
    )
    default_port: int = Field(
        DEFAULT_PORT, ge=1, le=65535, description="Port returned when probing fails"
    )
    host_only_marker: str = Field(
        HOST_ONLY_MARKER,
        min_length=1,
        description="Display-name substring of virtualization-only adapters",
    )

    @model_validator(mode="after")
    def _check_preference(self) -> ResolverSettings:
        if self.prefer_ipv4 and self.prefer_ipv6:
            raise ValueError("prefer_ipv4 and prefer_ipv6 are mutually exclusive")
        return self

    @classmethod
    def from_env(cls) -> ResolverSettings:
        """Build settings from ``RECORDER_*`` environment variables."""
        prefer_ipv6 = get_env("RECORDER_PREFER_IPV6", default=False, as_type=bool)
        return cls(
            prefer_ipv4=not prefer_ipv6,
            prefer_ipv6=prefer_ipv6,
            probe_hosts=get_env(
                "RECORDER_PROBE_HOSTS", default=list(DEFAULT_PROBE_HOSTS), as_type=list
            ),
            probe_timeout=get_env(
                "RECORDER_PROBE_TIMEOUT", default=DEFAULT_PROBE_TIMEOUT, as_type=float
            ),
            default_port=get_env(
                "RECORDER_DEFAULT_PORT", default=DEFAULT_PORT, as_type=int
            ),
        )
