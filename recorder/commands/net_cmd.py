"""Network commands - local address, host name, free port, lookup and download."""

from __future__ import annotations

import sys

import click

from recorder.models.network_models import NetworkAddress
from recorder.resolver import AddressResolver, is_well_formed_ipv4, settings_from_env
from recorder.transfer.download import TransferError, transfer_url_to_file


def _resolver(resolver: AddressResolver | None) -> AddressResolver:
    return resolver or AddressResolver(settings=settings_from_env())


def run_address(resolver: AddressResolver | None = None) -> None:
    """Print the resolved local address."""
    click.echo(str(_resolver(resolver).resolve_local_address()))


def run_hostname(resolver: AddressResolver | None = None) -> None:
    """Print the resolved local host name."""
    click.echo(_resolver(resolver).resolve_local_host_name())


def run_port(
    bind_address: str | NetworkAddress | None,
    preferred_port: int,
    resolver: AddressResolver | None = None,
) -> None:
    """Print a port that was free on ``bind_address`` a moment ago.

    Args:
        bind_address: Address to probe; None probes the resolved local address.
        preferred_port: Port to try first, 0 for an ephemeral port.
        resolver: Resolver to use; built from the environment when omitted.
    """
    resolver = _resolver(resolver)
    if bind_address is None:
        bind_address = resolver.resolve_local_address()
    click.echo(str(resolver.resolve_available_port(bind_address, preferred_port)))


def run_lookup(host: str, resolver: AddressResolver | None = None) -> None:
    """Print every address of ``host``, one per line; exit 1 if none."""
    addresses = _resolver(resolver).resolve_addresses_for_host(host)
    if not addresses:
        click.echo(f"Error: Could not resolve {host}")
        sys.exit(1)
    for address in addresses:
        click.echo(f"{address}  (IPv{int(address.version)})")


def run_validate_ip(text: str) -> None:
    """Report whether ``text`` is a well-formed IPv4 address; exit 1 if not."""
    if is_well_formed_ipv4(text):
        click.echo(f"{text} is a well-formed IPv4 address")
        return
    click.echo(f"{text} is not a well-formed IPv4 address")
    sys.exit(1)


def run_download(url: str, destination: str, timeout: float | None) -> None:
    """Download ``url`` into ``destination``; exit 1 on failure."""
    try:
        size = transfer_url_to_file(url, destination, timeout=timeout)
    except TransferError as e:
        click.echo(f"Error: {e}")
        click.echo(f"Partial data may remain in {destination}")
        sys.exit(1)
    click.echo(f"Saved {size} bytes to {destination}")
