"""Local address, host name and port resolution.

Local address discovery depends on platform and topology: extra virtual
adapters, an incomplete hosts file or a missing default route can each
defeat a single lookup. AddressResolver therefore runs ordered strategies
(see ``recorder.resolver.strategies``) and ends every cascade with a safe
literal instead of an error.
"""

from __future__ import annotations

from pydantic import ValidationError

from recorder.backends.base import NetworkBackend
from recorder.backends.network import SystemNetwork
from recorder.models.constants import LOCALHOST_NAME, LOOPBACK_ADDRESS
from recorder.models.network_models import NetworkAddress, ResolverSettings
from recorder.resolver import strategies
from recorder.resolver.ports import resolve_available_port
from recorder.utils.env import EnvVarError
from recorder.utils.logger import Logger

_log = Logger.child("resolver")


class AddressResolver:
    """Stateless resolver over a NetworkBackend.

    Safe to share between threads: each call re-reads the platform state
    and keeps nothing between calls.

    Parameters
    ----------
    settings : ResolverSettings | None
        Preferences and fallbacks. Defaults to ``ResolverSettings()``.
    network : NetworkBackend | None
        Platform collaborator. Defaults to ``SystemNetwork()``.
    """

    def __init__(
        self,
        settings: ResolverSettings | None = None,
        network: NetworkBackend | None = None,
    ) -> None:
        self.settings = settings or ResolverSettings()
        self.network = network or SystemNetwork()

    def resolve_local_address(self) -> NetworkAddress:
        """Return a non-loopback local address, or 127.0.0.1 as a last resort.

        Order: interface enumeration, host name lookup, connection probe.
        """
        address = strategies.first_result(
            strategies.ADDRESS_STRATEGIES, self.network, self.settings
        )
        if address is None:
            _log.warning("No usable local address, falling back to %s", LOOPBACK_ADDRESS)
            return NetworkAddress.parse(LOOPBACK_ADDRESS)
        return address

    def resolve_local_host_name(self) -> str:
        """Return the local host name, or "localhost" as a last resort."""
        name = strategies.first_result(
            strategies.HOST_NAME_STRATEGIES, self.network, self.settings
        )
        if name is None:
            _log.warning("No usable host name, falling back to %s", LOCALHOST_NAME)
            return LOCALHOST_NAME
        return name

    def resolve_available_port(
        self,
        bind_address: str | NetworkAddress | None = None,
        preferred_port: int = 0,
    ) -> int:
        """See :func:`recorder.resolver.ports.resolve_available_port`."""
        return resolve_available_port(
            bind_address, preferred_port, default_port=self.settings.default_port
        )

    def resolve_addresses_for_host(self, host_name: str) -> list[NetworkAddress]:
        """Return every address of ``host_name``; empty when it cannot be resolved.

        An empty list covers both "no such host" and "resolver unreachable".
        """
        try:
            return self.network.addresses_for(host_name)
        except (OSError, ValueError) as e:
            _log.warning("Error while resolving addresses for %s: %s", host_name, e)
            return []


def settings_from_env() -> ResolverSettings:
    """Read ``RECORDER_*`` settings, using defaults if any value is unusable."""
    try:
        return ResolverSettings.from_env()
    except EnvVarError as e:
        _log.warning("Ignoring resolver environment, %s", e)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        _log.warning("Ignoring resolver environment, invalid %s", fields or "settings")
    return ResolverSettings()


def default_resolver() -> AddressResolver:
    """Build a resolver configured from the environment."""
    return AddressResolver(settings=settings_from_env())


def resolve_local_address() -> NetworkAddress:
    return default_resolver().resolve_local_address()


def resolve_local_host_name() -> str:
    return default_resolver().resolve_local_host_name()


def resolve_addresses_for_host(host_name: str) -> list[NetworkAddress]:
    return default_resolver().resolve_addresses_for_host(host_name)
