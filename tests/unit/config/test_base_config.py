"""Tests for shared connection settings and replica pool settings.

No server required - pure model behaviour.
"""

from __future__ import annotations

import pytest
from pydantic import SecretStr
from rich.console import Console

from redis_topology.config import (
    BaseConfig,
    BaseMasterSlaveServersConfig,
    ClusterServersConfig,
    MasterSlaveServersConfig,
    ReplicatedServersConfig,
    SentinelServersConfig,
)
from redis_topology.core import ReadMode, SslProvider, SubscriptionMode
from redis_topology.strategies import (
    DirectNameMapper,
    PrefixNameMapper,
    RandomLoadBalancer,
    RoundRobinLoadBalancer,
)

console = Console()


class TestBaseConfigDefaults:
    """Test BaseConfig default values."""

    @pytest.mark.parametrize(
        ("field", "expected"),
        [
            ("idle_connection_timeout", 10_000),
            ("connect_timeout", 10_000),
            ("timeout", 3000),
            ("retry_attempts", 3),
            ("retry_interval", 1500),
            ("username", None),
            ("password", None),
            ("subscriptions_per_connection", 5),
            ("client_name", None),
            ("ssl_enable_endpoint_identification", True),
            ("ssl_provider", SslProvider.DEFAULT),
            ("ssl_truststore", None),
            ("ssl_truststore_password", None),
            ("ssl_keystore", None),
            ("ssl_keystore_password", None),
            ("ssl_protocols", None),
            ("ping_connection_interval", 30_000),
            ("keep_alive", False),
            ("tcp_no_delay", True),
        ],
    )
    def test_default_values(self, field: str, expected: object) -> None:
        """Test BaseConfig has documented default values."""
        assert getattr(BaseConfig(), field) == expected

    def test_default_name_mapper_is_identity(self) -> None:
        """Test default name mapper leaves names untouched."""
        config = BaseConfig()

        assert isinstance(config.name_mapper, DirectNameMapper)
        assert config.name_mapper.map("orders") == "orders"


class TestBaseConfigSetters:
    """Test fluent setters on BaseConfig."""

    def test_setters_chain_on_same_instance(self) -> None:
        """Test each setter returns the instance it was called on."""
        console.print("[bold blue]Testing fluent setter chaining[/bold blue]")

        config = BaseConfig()
        result = (
            config.set_timeout(5000)
            .set_connect_timeout(2000)
            .set_retry_attempts(5)
            .set_retry_interval(100)
            .set_client_name("worker-1")
            .set_keep_alive(True)
            .set_tcp_no_delay(False)
        )

        assert result is config
        assert config.timeout == 5000
        assert config.connect_timeout == 2000
        assert config.retry_attempts == 5
        assert config.retry_interval == 100
        assert config.client_name == "worker-1"
        assert config.keep_alive is True
        assert config.tcp_no_delay is False

        console.print("[green]✓ Setters chain and assign[/green]")

    def test_inherited_setters_keep_subclass_type(self) -> None:
        """Test base setters return the concrete subclass so chaining continues."""
        config = ClusterServersConfig()

        result = config.set_timeout(1000).set_read_mode(ReadMode.MASTER).add_node_address("redis://10.0.0.1:7000")

        assert result is config
        assert config.node_addresses == ["redis://10.0.0.1:7000"]

    @pytest.mark.parametrize(
        ("setter", "field", "value"),
        [
            ("set_timeout", "timeout", -1),
            ("set_retry_attempts", "retry_attempts", -5),
            ("set_ping_connection_interval", "ping_connection_interval", 0),
            ("set_subscriptions_per_connection", "subscriptions_per_connection", 0),
            ("set_client_name", "client_name", ""),
            ("set_username", "username", None),
        ],
    )
    def test_setters_accept_any_value(self, setter: str, field: str, value: object) -> None:
        """Test setters never validate ranges; the connection layer does."""
        console.print(f"[bold blue]Testing {setter}({value!r})[/bold blue]")

        config = getattr(BaseConfig(), setter)(value)

        assert getattr(config, field) == value
        console.print(f"[yellow]✓ {setter} accepted {value!r}[/yellow]")

    def test_password_stored_as_secret(self) -> None:
        """Test plain string passwords are wrapped in SecretStr."""
        config = BaseConfig().set_password("supersecret")

        assert isinstance(config.password, SecretStr)
        assert config.password.get_secret_value() == "supersecret"
        assert "supersecret" not in repr(config)

    def test_password_accepts_secret_and_none(self) -> None:
        """Test SecretStr passes through and None clears the password."""
        secret = SecretStr("s3cret")
        config = BaseConfig().set_password(secret)
        assert config.password is secret

        config.set_password(None)
        assert config.password is None

    def test_tls_settings(self) -> None:
        """Test TLS setters including protocol list conversion."""
        config = (
            BaseConfig()
            .set_ssl_provider(SslProvider.OPENSSL)
            .set_ssl_truststore("/etc/redis/truststore.pem")
            .set_ssl_truststore_password("trust")
            .set_ssl_keystore("/etc/redis/keystore.pem")
            .set_ssl_keystore_password("key")
            .set_ssl_protocols(("TLSv1.2", "TLSv1.3"))
            .set_ssl_enable_endpoint_identification(False)
        )

        assert config.ssl_provider == SslProvider.OPENSSL
        assert config.ssl_truststore == "/etc/redis/truststore.pem"
        assert config.ssl_truststore_password is not None
        assert config.ssl_truststore_password.get_secret_value() == "trust"
        assert config.ssl_keystore_password is not None
        assert config.ssl_keystore_password.get_secret_value() == "key"
        assert config.ssl_protocols == ["TLSv1.2", "TLSv1.3"]
        assert config.ssl_enable_endpoint_identification is False

    def test_name_mapper_is_stored_by_reference(self) -> None:
        """Test the config keeps the exact mapper instance it was given."""
        mapper = PrefixNameMapper(prefix="tenant-a:")
        config = BaseConfig().set_name_mapper(mapper)

        assert config.name_mapper is mapper


class TestBaseMasterSlaveServersConfig:
    """Test replica pool defaults and derived routing logic."""

    @pytest.mark.parametrize(
        ("field", "expected"),
        [
            ("slave_connection_minimum_idle_size", 24),
            ("slave_connection_pool_size", 64),
            ("master_connection_minimum_idle_size", 24),
            ("master_connection_pool_size", 64),
            ("subscription_connection_minimum_idle_size", 1),
            ("subscription_connection_pool_size", 50),
            ("failed_slave_reconnection_interval", 3000),
            ("failed_slave_check_interval", 180_000),
            ("read_mode", ReadMode.SLAVE),
            ("subscription_mode", SubscriptionMode.MASTER),
            ("dns_monitoring_interval", 5000),
        ],
    )
    def test_default_values(self, field: str, expected: object) -> None:
        """Test BaseMasterSlaveServersConfig has documented default values."""
        assert getattr(BaseMasterSlaveServersConfig(), field) == expected

    def test_default_load_balancer_is_round_robin(self) -> None:
        """Test round robin is the default slave selection policy."""
        assert isinstance(BaseMasterSlaveServersConfig().load_balancer, RoundRobinLoadBalancer)

    def test_pool_setters(self) -> None:
        """Test every pool and interval setter assigns its field."""
        balancer = RandomLoadBalancer()
        config = (
            BaseMasterSlaveServersConfig()
            .set_slave_connection_minimum_idle_size(4)
            .set_slave_connection_pool_size(8)
            .set_master_connection_minimum_idle_size(2)
            .set_master_connection_pool_size(16)
            .set_subscription_connection_minimum_idle_size(0)
            .set_subscription_connection_pool_size(10)
            .set_failed_slave_reconnection_interval(500)
            .set_failed_slave_check_interval(60_000)
            .set_dns_monitoring_interval(-1)
            .set_load_balancer(balancer)
        )

        assert config.slave_connection_minimum_idle_size == 4
        assert config.slave_connection_pool_size == 8
        assert config.master_connection_minimum_idle_size == 2
        assert config.master_connection_pool_size == 16
        assert config.subscription_connection_minimum_idle_size == 0
        assert config.subscription_connection_pool_size == 10
        assert config.failed_slave_reconnection_interval == 500
        assert config.failed_slave_check_interval == 60_000
        assert config.dns_monitoring_interval == -1
        assert config.load_balancer is balancer

    @pytest.mark.parametrize(
        ("read_mode", "subscription_mode", "expected"),
        [
            (ReadMode.MASTER, SubscriptionMode.MASTER, True),
            (ReadMode.MASTER, SubscriptionMode.SLAVE, False),
            (ReadMode.SLAVE, SubscriptionMode.MASTER, False),
            (ReadMode.SLAVE, SubscriptionMode.SLAVE, False),
        ],
    )
    def test_check_skip_slaves_init_truth_table(
        self,
        read_mode: ReadMode,
        subscription_mode: SubscriptionMode,
        expected: bool,
    ) -> None:
        """Test slave pools are skippable only when reads and subscriptions use the master."""
        config = BaseMasterSlaveServersConfig().set_read_mode(read_mode).set_subscription_mode(subscription_mode)

        assert config.check_skip_slaves_init() is expected

    @pytest.mark.parametrize(
        "config_cls",
        [MasterSlaveServersConfig, SentinelServersConfig, ClusterServersConfig, ReplicatedServersConfig],
    )
    def test_check_skip_slaves_init_same_for_every_topology(
        self,
        config_cls: type[BaseMasterSlaveServersConfig],
    ) -> None:
        """Test no topology overrides the derived rule."""
        config = config_cls()
        assert config.check_skip_slaves_init() is False

        config.set_read_mode(ReadMode.MASTER)
        assert config.check_skip_slaves_init() is True

    def test_default_pools_have_no_violations(self) -> None:
        """Test defaults keep every minimum idle size within its pool size."""
        assert BaseMasterSlaveServersConfig().pool_size_violations() == []

    def test_inverted_pool_reported_not_raised(self) -> None:
        """Test an inverted pool pair is accepted by the setter and reported on request."""
        config = BaseMasterSlaveServersConfig().set_slave_connection_minimum_idle_size(100)

        problems = config.pool_size_violations()

        assert len(problems) == 1
        assert "slave_connection_minimum_idle_size (100)" in problems[0]
        assert "slave_connection_pool_size (64)" in problems[0]
