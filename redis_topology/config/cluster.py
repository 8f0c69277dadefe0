from __future__ import annotations

import warnings
from collections.abc import Iterable, Mapping
from typing import Literal, Self

from pydantic import Field

from ..strategies.mapper import DirectNatMapper, HostPortNatMapper, NatMapper
from .base import BaseMasterSlaveServersConfig


class ClusterServersConfig(BaseMasterSlaveServersConfig):
    """Redis Cluster settings.

    Node addresses are seeds for slot discovery. They keep insertion order and
    duplicates.
    """

    kind: Literal["cluster"] = "cluster"
    node_addresses: list[str] = Field(default_factory=list, description="Seed node addresses")
    scan_interval: int = Field(default=5000, description="Cluster topology scan interval (ms)")
    nat_mapper: NatMapper = Field(default_factory=DirectNatMapper, description="Advertised to reachable address")
    check_slots_coverage: bool = Field(default=True, description="Require all hash slots to be covered")

    def add_node_address(self, *addresses: str) -> Self:
        self.node_addresses.extend(addresses)
        return self._set("node_addresses", self.node_addresses)

    def set_node_addresses(self, addresses: Iterable[str]) -> Self:
        return self._set("node_addresses", list(addresses))

    def set_scan_interval(self, scan_interval: int) -> Self:
        return self._set("scan_interval", scan_interval)

    def set_nat_mapper(self, nat_mapper: NatMapper) -> Self:
        return self._set("nat_mapper", nat_mapper)

    def set_nat_map(self, nat_map: Mapping[str, str]) -> Self:
        """Install a ``host:port`` NAT mapping.

        .. deprecated::
            Use :meth:`set_nat_mapper` with a :class:`HostPortNatMapper`.
            This replaces any mapper set before, it does not merge with it.
        """
        warnings.warn(
            "set_nat_map() is deprecated, use set_nat_mapper(HostPortNatMapper(...))",
            DeprecationWarning,
            stacklevel=2,
        )
        return self._set("nat_mapper", HostPortNatMapper(host_port_map=dict(nat_map)))

    def set_check_slots_coverage(self, check_slots_coverage: bool) -> Self:
        return self._set("check_slots_coverage", check_slots_coverage)

    def validation_problems(self) -> list[str]:
        problems = super().validation_problems()
        if not self.node_addresses:
            problems.append("cluster topology has no node addresses")
        return problems
