"""Pydantic models and constants."""

from recorder.models.network_models import (
    InterfaceDescriptor,
    NetworkAddress,
    PortBinding,
    ResolverSettings,
)

__all__ = [
    "InterfaceDescriptor",
    "NetworkAddress",
    "PortBinding",
    "ResolverSettings",
]
