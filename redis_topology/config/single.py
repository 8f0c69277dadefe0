from __future__ import annotations

from typing import ClassVar, Literal, Self

from pydantic import Field

from .base import BaseConfig


class SingleServerConfig(BaseConfig):
    """Settings for a single, standalone Redis server.

    Examples
    --------
    >>> single = SingleServerConfig().set_address("redis://127.0.0.1:6379").set_database(2)
    >>> single.address
    'redis://127.0.0.1:6379'
    >>> single.set_address(None).address
    'redis://127.0.0.1:6379'
    """

    POOL_SIZE_PAIRS: ClassVar[tuple[tuple[str, str], ...]] = (
        ("connection_minimum_idle_size", "connection_pool_size"),
        ("subscription_connection_minimum_idle_size", "subscription_connection_pool_size"),
    )

    kind: Literal["single_server"] = "single_server"
    address: str | None = Field(default=None, description="Server address, e.g. redis://127.0.0.1:6379")
    database: int = Field(default=0, description="Database index")
    connection_minimum_idle_size: int = Field(default=24, description="Idle connections kept open")
    connection_pool_size: int = Field(default=64, description="Maximum connections")
    subscription_connection_minimum_idle_size: int = Field(default=1, description="Idle subscribe connections")
    subscription_connection_pool_size: int = Field(default=50, description="Maximum subscribe connections")
    dns_monitoring_interval: int = Field(default=5000, description="DNS change check interval (ms), -1 disables")

    def set_address(self, address: str | None) -> Self:
        """Set the server address; ``None`` leaves the current address untouched."""
        if address is not None:
            self._set("address", address)
        return self

    def set_database(self, database: int) -> Self:
        return self._set("database", database)

    def set_connection_minimum_idle_size(self, size: int) -> Self:
        return self._set("connection_minimum_idle_size", size)

    def set_connection_pool_size(self, size: int) -> Self:
        return self._set("connection_pool_size", size)

    def set_subscription_connection_minimum_idle_size(self, size: int) -> Self:
        return self._set("subscription_connection_minimum_idle_size", size)

    def set_subscription_connection_pool_size(self, size: int) -> Self:
        return self._set("subscription_connection_pool_size", size)

    def set_dns_monitoring_interval(self, interval: int) -> Self:
        return self._set("dns_monitoring_interval", interval)

    def validation_problems(self) -> list[str]:
        problems = super().validation_problems()
        if not self.address:
            problems.append("single server address is not set")
        return problems
