from __future__ import annotations

import warnings
from collections.abc import Iterable, Mapping
from typing import Literal, Self

from pydantic import Field, SecretStr, field_serializer

from ..strategies.mapper import DirectNatMapper, HostPortNatMapper, NatMapper
from .base import BaseMasterSlaveServersConfig, as_secret, reveal_secret


class SentinelServersConfig(BaseMasterSlaveServersConfig):
    """Sentinel-monitored master/slave settings.

    ``check_sentinels_list``, ``check_slave_status_with_syncing`` and
    ``sentinels_discovery`` only inform the connection manager; they have no
    effect on this object.
    """

    kind: Literal["sentinel"] = "sentinel"
    sentinel_addresses: list[str] = Field(default_factory=list, description="Sentinel addresses")
    master_name: str | None = Field(default=None, description="Name of the monitored master")
    sentinel_username: str | None = Field(default=None, description="Username for sentinel authentication")
    sentinel_password: SecretStr | None = Field(default=None, description="Password for sentinel authentication")
    database: int = Field(default=0, description="Database index")
    scan_interval: int = Field(default=1000, description="Sentinel topology scan interval (ms)")
    nat_mapper: NatMapper = Field(default_factory=DirectNatMapper, description="Advertised to reachable address")
    check_sentinels_list: bool = Field(default=True, description="Fail when no sentinels are reachable")
    check_slave_status_with_syncing: bool = Field(
        default=True,
        description="Skip slaves still syncing with the master",
    )
    sentinels_discovery: bool = Field(default=True, description="Discover further sentinels from known ones")

    @field_serializer("sentinel_password")
    def _serialize_sentinel_password(self, value: SecretStr | str | None) -> str | None:
        return reveal_secret(value)

    def set_master_name(self, master_name: str | None) -> Self:
        return self._set("master_name", master_name)

    def set_sentinel_username(self, sentinel_username: str | None) -> Self:
        return self._set("sentinel_username", sentinel_username)

    def set_sentinel_password(self, sentinel_password: SecretStr | str | None) -> Self:
        return self._set("sentinel_password", as_secret(sentinel_password))

    def add_sentinel_address(self, *addresses: str) -> Self:
        self.sentinel_addresses.extend(addresses)
        return self._set("sentinel_addresses", self.sentinel_addresses)

    def set_sentinel_addresses(self, addresses: Iterable[str]) -> Self:
        return self._set("sentinel_addresses", list(addresses))

    def set_database(self, database: int) -> Self:
        return self._set("database", database)

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

    def set_check_sentinels_list(self, check_sentinels_list: bool) -> Self:
        return self._set("check_sentinels_list", check_sentinels_list)

    def set_check_slave_status_with_syncing(self, check_slave_status_with_syncing: bool) -> Self:
        return self._set("check_slave_status_with_syncing", check_slave_status_with_syncing)

    def set_sentinels_discovery(self, sentinels_discovery: bool) -> Self:
        return self._set("sentinels_discovery", sentinels_discovery)

    def validation_problems(self) -> list[str]:
        problems = super().validation_problems()
        if not self.sentinel_addresses:
            problems.append("sentinel topology has no sentinel addresses")
        if not self.master_name:
            problems.append("sentinel master name is not set")
        return problems
