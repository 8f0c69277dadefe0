from __future__ import annotations

from collections.abc import Iterable
from typing import Literal, Self

from pydantic import Field

from .base import BaseMasterSlaveServersConfig


class ReplicatedServersConfig(BaseMasterSlaveServersConfig):
    """Replicated nodes whose master role is discovered by polling, e.g. managed Redis offerings."""

    kind: Literal["replicated"] = "replicated"
    node_addresses: list[str] = Field(default_factory=list, description="Addresses of all nodes")
    scan_interval: int = Field(default=1000, description="Node role polling interval (ms)")
    database: int = Field(default=0, description="Database index")

    def add_node_address(self, *addresses: str) -> Self:
        self.node_addresses.extend(addresses)
        return self._set("node_addresses", self.node_addresses)

    def set_node_addresses(self, addresses: Iterable[str]) -> Self:
        return self._set("node_addresses", list(addresses))

    def set_scan_interval(self, scan_interval: int) -> Self:
        return self._set("scan_interval", scan_interval)

    def set_database(self, database: int) -> Self:
        return self._set("database", database)

    def validation_problems(self) -> list[str]:
        problems = super().validation_problems()
        if not self.node_addresses:
            problems.append("replicated topology has no node addresses")
        return problems
