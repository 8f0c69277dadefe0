"""Name and NAT mappers.

A name mapper rewrites logical object names before they reach the server. A
NAT mapper rewrites addresses advertised by the server (cluster nodes,
sentinel-reported masters and slaves) into addresses reachable from the
client. Addresses are ``[scheme://]host:port`` strings and the scheme is
preserved by every mapper.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Annotated, Literal

from pydantic import Field

from .base import Strategy


class BaseNameMapper(Strategy):
    @abstractmethod
    def map(self, name: str) -> str: ...

    @abstractmethod
    def unmap(self, name: str) -> str: ...


class DirectNameMapper(BaseNameMapper):
    type: Literal["direct"] = "direct"

    def map(self, name: str) -> str:
        return name

    def unmap(self, name: str) -> str:
        return name


class PrefixNameMapper(BaseNameMapper):
    """Prepends ``prefix`` to every name, e.g. for tenant isolation."""

    type: Literal["prefix"] = "prefix"
    prefix: str = Field(default="", description="Prefix added to every object name")

    def map(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def unmap(self, name: str) -> str:
        if self.prefix and name.startswith(self.prefix):
            return name[len(self.prefix) :]
        return name


def split_address(address: str) -> tuple[str, str, str]:
    """Split an address into ``(scheme prefix, host, port)``.

    Parameters
    ----------
    address : str
        Address such as ``redis://10.0.0.1:6379`` or ``10.0.0.1:6379``.

    Returns
    -------
    tuple[str, str, str]
        The scheme prefix including ``://`` (empty when absent), the host and
        the port (empty when absent).

    Examples
    --------
    >>> split_address("rediss://cache.local:6380")
    ('rediss://', 'cache.local', '6380')
    """
    scheme, separator, rest = address.rpartition("://")
    prefix = f"{scheme}{separator}"
    host, _, port = rest.rpartition(":")
    if not host:
        return prefix, rest, ""
    return prefix, host, port


class BaseNatMapper(Strategy):
    @abstractmethod
    def map(self, address: str) -> str: ...


class DirectNatMapper(BaseNatMapper):
    type: Literal["direct"] = "direct"

    def map(self, address: str) -> str:
        return address


class HostNatMapper(BaseNatMapper):
    """Maps hosts and keeps the advertised port."""

    type: Literal["host"] = "host"
    hosts_map: dict[str, str] = Field(default_factory=dict, description="Advertised host to reachable host")

    def map(self, address: str) -> str:
        prefix, host, port = split_address(address)
        mapped = self.hosts_map.get(host)
        if mapped is None:
            return address
        return f"{prefix}{mapped}:{port}" if port else f"{prefix}{mapped}"


class HostPortNatMapper(BaseNatMapper):
    """Maps ``host:port`` pairs to ``host:port`` pairs."""

    type: Literal["host_port"] = "host_port"
    host_port_map: dict[str, str] = Field(
        default_factory=dict,
        description="Advertised host:port to reachable host:port",
    )

    def map(self, address: str) -> str:
        prefix, host, port = split_address(address)
        mapped = self.host_port_map.get(f"{host}:{port}")
        if mapped is None:
            return address
        return f"{prefix}{mapped}"


NameMapper = Annotated[DirectNameMapper | PrefixNameMapper, Field(discriminator="type")]
NatMapper = Annotated[DirectNatMapper | HostNatMapper | HostPortNatMapper, Field(discriminator="type")]
