from __future__ import annotations

from collections.abc import Iterable
from typing import Literal, Self

from pydantic import Field

from .base import BaseMasterSlaveServersConfig


class MasterSlaveServersConfig(BaseMasterSlaveServersConfig):
    """Statically configured master with a set of slaves.

    Slave addresses form a set: adding the same address twice keeps one
    entry and iteration order is unspecified.
    """

    kind: Literal["master_slave"] = "master_slave"
    master_address: str | None = Field(default=None, description="Master address")
    slave_addresses: set[str] = Field(default_factory=set, description="Slave addresses")
    database: int = Field(default=0, description="Database index")

    def set_master_address(self, master_address: str | None) -> Self:
        return self._set("master_address", master_address)

    def add_slave_address(self, *addresses: str) -> Self:
        self.slave_addresses.update(addresses)
        return self._set("slave_addresses", self.slave_addresses)

    def set_slave_addresses(self, addresses: Iterable[str]) -> Self:
        return self._set("slave_addresses", set(addresses))

    def set_database(self, database: int) -> Self:
        return self._set("database", database)

    def validation_problems(self) -> list[str]:
        problems = super().validation_problems()
        if not self.master_address:
            problems.append("master address is not set")
        return problems
