"""Local network address and port resolution.

Quick Start:
    from recorder.resolver import AddressResolver, resolve_available_port

    resolver = AddressResolver()
    address = resolver.resolve_local_address()
    port = resolve_available_port(address, 0)
"""

from recorder.resolver.validation import is_well_formed_ipv4
from recorder.resolver.ports import resolve_available_port
from recorder.resolver.strategies import (
    ADDRESS_STRATEGIES,
    HOST_NAME_STRATEGIES,
    first_result,
)
from recorder.resolver.address import (
    AddressResolver,
    default_resolver,
    resolve_addresses_for_host,
    resolve_local_address,
    resolve_local_host_name,
    settings_from_env,
)

__all__ = [
    "ADDRESS_STRATEGIES",
    "HOST_NAME_STRATEGIES",
    "AddressResolver",
    "default_resolver",
    "first_result",
    "is_well_formed_ipv4",
    "resolve_addresses_for_host",
    "resolve_available_port",
    "resolve_local_address",
    "resolve_local_host_name",
    "settings_from_env",
]
