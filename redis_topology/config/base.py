"""Shared connection settings and replica pool settings.

Setters follow a fluent style: each assigns one field and returns the same
instance so calls chain across the class hierarchy. Assignment is never
validated; documents are validated when parsed and value ranges are left to
the connection manager (or the opt-in ``validation_problems``).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_serializer

from ..core.enums import ReadMode, SslProvider, SubscriptionMode
from ..hooks import notify_setter
from ..strategies.balancer import LoadBalancer, RoundRobinLoadBalancer
from ..strategies.mapper import DirectNameMapper, NameMapper


def reveal_secret(value: SecretStr | str | None) -> str | None:
    """Serialize a secret in clear text so documents round-trip."""
    if isinstance(value, SecretStr):
        return value.get_secret_value()
    return value


def as_secret(value: SecretStr | str | None) -> SecretStr | None:
    if value is None or isinstance(value, SecretStr):
        return value
    return SecretStr(value)


class FluentModel(BaseModel):
    """Mutable model with chained setters and defensive copies."""

    model_config = ConfigDict(extra="forbid")

    def _set(self, field: str, value: object) -> Self:
        setattr(self, field, value)
        notify_setter(type(self).__name__, field, value)
        return self

    def snapshot(self) -> Self:
        """Copy this config for hand-off to a connection manager.

        Scalars are copied and collections are rebuilt, so later mutation of
        either object does not leak into the other. Strategy objects (load
        balancer, mappers) are shared by reference.

        Returns
        -------
        Self
            An independent instance of the same class.
        """
        rebuilt = {
            name: type(value)(value) for name, value in self.__dict__.items() if isinstance(value, list | set | dict)
        }
        return self.model_copy(update=rebuilt)


class BaseConfig(FluentModel):
    """Connection parameters shared by every topology."""

    POOL_SIZE_PAIRS: ClassVar[tuple[tuple[str, str], ...]] = ()

    idle_connection_timeout: int = Field(
        default=10_000,
        description="Close pooled connections idle longer than this (ms)",
    )
    connect_timeout: int = Field(default=10_000, description="Timeout while connecting to a server (ms)")
    timeout: int = Field(default=3000, description="Server response timeout once a command was sent (ms)")
    retry_attempts: int = Field(default=3, description="Attempts to send a command before failing")
    retry_interval: int = Field(default=1500, description="Interval between send attempts (ms)")
    username: str | None = Field(default=None, description="Username for ACL authentication (Redis 6+)")
    password: SecretStr | None = Field(default=None, description="Password for authentication")
    subscriptions_per_connection: int = Field(default=5, description="Subscriptions per subscribe connection")
    client_name: str | None = Field(default=None, description="Name sent with CLIENT SETNAME")
    ssl_enable_endpoint_identification: bool = Field(default=True, description="Verify server hostname")
    ssl_provider: SslProvider = Field(default=SslProvider.DEFAULT, description="TLS implementation")
    ssl_truststore: str | None = Field(default=None, description="Truststore path or URL")
    ssl_truststore_password: SecretStr | None = Field(default=None, description="Truststore password")
    ssl_keystore: str | None = Field(default=None, description="Keystore path or URL")
    ssl_keystore_password: SecretStr | None = Field(default=None, description="Keystore password")
    ssl_protocols: list[str] | None = Field(default=None, description="Allowed TLS protocol versions")
    ping_connection_interval: int = Field(
        default=30_000,
        description="PING interval per connection (ms), 0 disables",
    )
    keep_alive: bool = Field(default=False, description="Enable TCP keepalive")
    tcp_no_delay: bool = Field(default=True, description="Enable TCP_NODELAY")
    name_mapper: NameMapper = Field(default_factory=DirectNameMapper, description="Object name mapper")

    @field_serializer("password", "ssl_truststore_password", "ssl_keystore_password")
    def _serialize_secret(self, value: SecretStr | str | None) -> str | None:
        return reveal_secret(value)

    def set_idle_connection_timeout(self, idle_connection_timeout: int) -> Self:
        return self._set("idle_connection_timeout", idle_connection_timeout)

    def set_connect_timeout(self, connect_timeout: int) -> Self:
        return self._set("connect_timeout", connect_timeout)

    def set_timeout(self, timeout: int) -> Self:
        return self._set("timeout", timeout)

    def set_retry_attempts(self, retry_attempts: int) -> Self:
        return self._set("retry_attempts", retry_attempts)

    def set_retry_interval(self, retry_interval: int) -> Self:
        return self._set("retry_interval", retry_interval)

    def set_username(self, username: str | None) -> Self:
        return self._set("username", username)

    def set_password(self, password: SecretStr | str | None) -> Self:
        return self._set("password", as_secret(password))

    def set_subscriptions_per_connection(self, subscriptions_per_connection: int) -> Self:
        return self._set("subscriptions_per_connection", subscriptions_per_connection)

    def set_client_name(self, client_name: str | None) -> Self:
        return self._set("client_name", client_name)

    def set_ssl_enable_endpoint_identification(self, enabled: bool) -> Self:
        return self._set("ssl_enable_endpoint_identification", enabled)

    def set_ssl_provider(self, ssl_provider: SslProvider) -> Self:
        return self._set("ssl_provider", ssl_provider)

    def set_ssl_truststore(self, ssl_truststore: str | None) -> Self:
        return self._set("ssl_truststore", ssl_truststore)

    def set_ssl_truststore_password(self, password: SecretStr | str | None) -> Self:
        return self._set("ssl_truststore_password", as_secret(password))

    def set_ssl_keystore(self, ssl_keystore: str | None) -> Self:
        return self._set("ssl_keystore", ssl_keystore)

    def set_ssl_keystore_password(self, password: SecretStr | str | None) -> Self:
        return self._set("ssl_keystore_password", as_secret(password))

    def set_ssl_protocols(self, ssl_protocols: Iterable[str] | None) -> Self:
        return self._set("ssl_protocols", list(ssl_protocols) if ssl_protocols is not None else None)

    def set_ping_connection_interval(self, ping_connection_interval: int) -> Self:
        return self._set("ping_connection_interval", ping_connection_interval)

    def set_keep_alive(self, keep_alive: bool) -> Self:
        return self._set("keep_alive", keep_alive)

    def set_tcp_no_delay(self, tcp_no_delay: bool) -> Self:
        return self._set("tcp_no_delay", tcp_no_delay)

    def set_name_mapper(self, name_mapper: NameMapper) -> Self:
        return self._set("name_mapper", name_mapper)

    def pool_size_violations(self) -> list[str]:
        """List pool pairs whose minimum idle size exceeds the pool size."""
        problems = []
        for idle_field, size_field in self.POOL_SIZE_PAIRS:
            idle, size = getattr(self, idle_field), getattr(self, size_field)
            if idle > size:
                problems.append(f"{idle_field} ({idle}) exceeds {size_field} ({size})")
        return problems

    def validation_problems(self) -> list[str]:
        """Problems a connection manager would reject at startup.

        Nothing calls this implicitly; setters and ``snapshot`` never validate.
        """
        return self.pool_size_violations()


class BaseMasterSlaveServersConfig(BaseConfig):
    """Connection pool and routing settings for topologies with replicas."""

    POOL_SIZE_PAIRS: ClassVar[tuple[tuple[str, str], ...]] = (
        ("master_connection_minimum_idle_size", "master_connection_pool_size"),
        ("slave_connection_minimum_idle_size", "slave_connection_pool_size"),
        ("subscription_connection_minimum_idle_size", "subscription_connection_pool_size"),
    )

    load_balancer: LoadBalancer = Field(
        default_factory=RoundRobinLoadBalancer,
        description="Selects the slave serving each read",
    )
    slave_connection_minimum_idle_size: int = Field(default=24, description="Idle connections kept per slave")
    slave_connection_pool_size: int = Field(default=64, description="Maximum connections per slave")
    failed_slave_reconnection_interval: int = Field(
        default=3000,
        description="Interval between reconnection attempts to a failed slave (ms)",
    )
    failed_slave_check_interval: int = Field(
        default=180_000,
        description="Slave is excluded once commands fail for this long (ms)",
    )
    master_connection_minimum_idle_size: int = Field(default=24, description="Idle connections kept for the master")
    master_connection_pool_size: int = Field(default=64, description="Maximum connections to the master")
    read_mode: ReadMode = Field(default=ReadMode.SLAVE, description="Node class serving reads")
    subscription_mode: SubscriptionMode = Field(
        default=SubscriptionMode.MASTER,
        description="Node class serving subscriptions",
    )
    subscription_connection_minimum_idle_size: int = Field(
        default=1,
        description="Idle subscribe connections kept per node",
    )
    subscription_connection_pool_size: int = Field(default=50, description="Maximum subscribe connections per node")
    dns_monitoring_interval: int = Field(
        default=5000,
        description="DNS change check interval (ms), -1 disables",
    )

    def set_load_balancer(self, load_balancer: LoadBalancer) -> Self:
        return self._set("load_balancer", load_balancer)

    def set_slave_connection_minimum_idle_size(self, size: int) -> Self:
        return self._set("slave_connection_minimum_idle_size", size)

    def set_slave_connection_pool_size(self, size: int) -> Self:
        return self._set("slave_connection_pool_size", size)

    def set_failed_slave_reconnection_interval(self, interval: int) -> Self:
        return self._set("failed_slave_reconnection_interval", interval)

    def set_failed_slave_check_interval(self, interval: int) -> Self:
        return self._set("failed_slave_check_interval", interval)

    def set_master_connection_minimum_idle_size(self, size: int) -> Self:
        return self._set("master_connection_minimum_idle_size", size)

    def set_master_connection_pool_size(self, size: int) -> Self:
        return self._set("master_connection_pool_size", size)

    def set_read_mode(self, read_mode: ReadMode) -> Self:
        return self._set("read_mode", read_mode)

    def set_subscription_mode(self, subscription_mode: SubscriptionMode) -> Self:
        return self._set("subscription_mode", subscription_mode)

    def set_subscription_connection_minimum_idle_size(self, size: int) -> Self:
        return self._set("subscription_connection_minimum_idle_size", size)

    def set_subscription_connection_pool_size(self, size: int) -> Self:
        return self._set("subscription_connection_pool_size", size)

    def set_dns_monitoring_interval(self, interval: int) -> Self:
        return self._set("dns_monitoring_interval", interval)

    def check_skip_slaves_init(self) -> bool:
        """Whether slave pools can be skipped entirely.

        True only when both reads and subscriptions go to the master.
        """
        return self.read_mode == ReadMode.MASTER and self.subscription_mode == SubscriptionMode.MASTER
