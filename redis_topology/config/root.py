"""Root configuration aggregate.

The active topology lives in a single tagged slot, ``servers``, so at most one
topology is configured at any time. In documents the slot is written as one
block keyed by the topology name::

    threads: 16
    cluster_servers_config:
      node_addresses: [redis://10.0.0.1:7000, redis://10.0.0.2:7000]
      load_balancer: {type: round_robin}
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, Self, cast

from pydantic import Field, SerializerFunctionWrapHandler, model_serializer, model_validator

from ..core.enums import TransportMode
from ..exceptions import ConfigValidationError
from ..logger import get_logger
from .base import FluentModel
from .cluster import ClusterServersConfig
from .master_slave import MasterSlaveServersConfig
from .replicated import ReplicatedServersConfig
from .sentinel import SentinelServersConfig
from .single import SingleServerConfig

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

logger: BoundLogger = get_logger(__name__)

type TopologyConfig = (
    SingleServerConfig | MasterSlaveServersConfig | SentinelServersConfig | ClusterServersConfig | ReplicatedServersConfig
)

Topology = Annotated[
    SingleServerConfig | MasterSlaveServersConfig | SentinelServersConfig | ClusterServersConfig | ReplicatedServersConfig,
    Field(discriminator="kind"),
]

TOPOLOGY_KEYS: dict[str, str] = {
    "single_server": "single_server_config",
    "master_slave": "master_slave_servers_config",
    "sentinel": "sentinel_servers_config",
    "cluster": "cluster_servers_config",
    "replicated": "replicated_servers_config",
}
_KIND_BY_KEY = {key: kind for kind, key in TOPOLOGY_KEYS.items()}


class Config(FluentModel):
    """Process-wide settings plus exactly one topology.

    Examples
    --------
    >>> config = Config().set_threads(8)
    >>> cluster = config.use_cluster_servers().add_node_address("redis://10.0.0.1:7000")
    >>> snapshot = config.snapshot()
    >>> Config.from_yaml(config.to_yaml()) == config
    True
    """

    threads: int = Field(default=16, description="Threads shared by listeners and services")
    netty_threads: int = Field(default=32, description="I/O threads used by the transport")
    codec: str | None = Field(default=None, description="Codec name resolved by the client, None for its default")
    transport_mode: TransportMode = Field(default=TransportMode.NIO, description="Transport implementation")
    lock_watchdog_timeout: int = Field(default=30_000, description="Lock lease extension period (ms)")
    reliable_topic_watchdog_timeout: int = Field(
        default=600_000,
        description="Reliable topic subscriber expiry (ms)",
    )
    keep_pub_sub_order: bool = Field(default=True, description="Deliver messages in publish order")
    use_script_cache: bool = Field(default=False, description="Send scripts with EVALSHA")
    min_clean_up_delay: int = Field(default=5, description="Minimum expired entry clean-up delay (s)")
    max_clean_up_delay: int = Field(default=1800, description="Maximum expired entry clean-up delay (s)")
    clean_up_keys_amount: int = Field(default=100, description="Expired keys removed per clean-up run")
    reference_enabled: bool = Field(default=True, description="Resolve object references stored as values")
    servers: Topology | None = Field(default=None, description="Active topology")

    @model_validator(mode="before")
    @classmethod
    def _lift_topology_block(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        # documents name the topology by block key, never through the slot itself
        if "servers" in data:
            raise ValueError(f"unknown field 'servers', use one of {', '.join(TOPOLOGY_KEYS.values())}")

        present = [key for key in TOPOLOGY_KEYS.values() if data.get(key) is not None]
        if len(present) > 1:
            raise ValueError(f"only one topology may be configured, found {', '.join(present)}")

        lifted = {name: value for name, value in data.items() if name not in _KIND_BY_KEY}
        if present:
            key = present[0]
            block = data[key]
            if isinstance(block, dict):
                if "kind" in block:
                    raise ValueError(f"unknown field 'kind' in {key}, the block key selects the topology")
                block = {**block, "kind": _KIND_BY_KEY[key]}
            lifted["servers"] = block
        return lifted

    @model_serializer(mode="wrap")
    def _key_topology_block(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = cast(dict[str, Any], handler(self))
        block = data.pop("servers", None)
        if self.servers is not None and isinstance(block, dict):
            block.pop("kind", None)
            data[TOPOLOGY_KEYS[self.servers.kind]] = block
        return data

    # Process-wide settings

    def set_threads(self, threads: int) -> Self:
        return self._set("threads", threads)

    def set_netty_threads(self, netty_threads: int) -> Self:
        return self._set("netty_threads", netty_threads)

    def set_codec(self, codec: str | None) -> Self:
        return self._set("codec", codec)

    def set_transport_mode(self, transport_mode: TransportMode) -> Self:
        return self._set("transport_mode", transport_mode)

    def set_lock_watchdog_timeout(self, timeout: int) -> Self:
        return self._set("lock_watchdog_timeout", timeout)

    def set_reliable_topic_watchdog_timeout(self, timeout: int) -> Self:
        return self._set("reliable_topic_watchdog_timeout", timeout)

    def set_keep_pub_sub_order(self, keep_pub_sub_order: bool) -> Self:
        return self._set("keep_pub_sub_order", keep_pub_sub_order)

    def set_use_script_cache(self, use_script_cache: bool) -> Self:
        return self._set("use_script_cache", use_script_cache)

    def set_min_clean_up_delay(self, delay: int) -> Self:
        return self._set("min_clean_up_delay", delay)

    def set_max_clean_up_delay(self, delay: int) -> Self:
        return self._set("max_clean_up_delay", delay)

    def set_clean_up_keys_amount(self, amount: int) -> Self:
        return self._set("clean_up_keys_amount", amount)

    def set_reference_enabled(self, reference_enabled: bool) -> Self:
        return self._set("reference_enabled", reference_enabled)

    # Topology selection

    def _select[C: TopologyConfig](self, servers: C) -> C:
        current = self.servers
        if isinstance(current, type(servers)):
            return current
        if current is not None:
            logger.warning("Replacing configured topology", previous=current.kind, selected=servers.kind)
        self._set("servers", servers)
        return servers

    def use_single_server(self) -> SingleServerConfig:
        return self._select(SingleServerConfig())

    def use_master_slave_servers(self) -> MasterSlaveServersConfig:
        return self._select(MasterSlaveServersConfig())

    def use_sentinel_servers(self) -> SentinelServersConfig:
        return self._select(SentinelServersConfig())

    def use_cluster_servers(self) -> ClusterServersConfig:
        return self._select(ClusterServersConfig())

    def use_replicated_servers(self) -> ReplicatedServersConfig:
        return self._select(ReplicatedServersConfig())

    @property
    def single_server_config(self) -> SingleServerConfig | None:
        return self.servers if isinstance(self.servers, SingleServerConfig) else None

    @property
    def master_slave_servers_config(self) -> MasterSlaveServersConfig | None:
        return self.servers if isinstance(self.servers, MasterSlaveServersConfig) else None

    @property
    def sentinel_servers_config(self) -> SentinelServersConfig | None:
        return self.servers if isinstance(self.servers, SentinelServersConfig) else None

    @property
    def cluster_servers_config(self) -> ClusterServersConfig | None:
        return self.servers if isinstance(self.servers, ClusterServersConfig) else None

    @property
    def replicated_servers_config(self) -> ReplicatedServersConfig | None:
        return self.servers if isinstance(self.servers, ReplicatedServersConfig) else None

    def is_cluster_config(self) -> bool:
        return self.cluster_servers_config is not None

    def is_sentinel_config(self) -> bool:
        return self.sentinel_servers_config is not None

    # Copy and validation

    def snapshot(self) -> Self:
        """Copy this config and its topology for hand-off to a connection manager."""
        clone = super().snapshot()
        if self.servers is not None:
            clone.servers = self.servers.snapshot()
        return clone

    def ensure_valid(self) -> Self:
        """Reject configs a connection manager could not start with.

        Opt-in: neither setters nor ``snapshot`` call this.

        Raises
        ------
        ConfigValidationError
            If no topology is selected, identity data is missing, or a minimum
            idle size exceeds its pool size.
        """
        if self.servers is None:
            problems = ["no topology selected, call one of the use_* methods"]
        else:
            problems = self.servers.validation_problems()
        if problems:
            raise ConfigValidationError(problems)
        return self

    # Documents

    @classmethod
    def from_json(cls, source: str | bytes) -> Self:
        from ..support import from_json

        return cast(Self, from_json(source, cls))

    @classmethod
    def from_yaml(cls, source: str | bytes) -> Self:
        from ..support import from_yaml

        return cast(Self, from_yaml(source, cls))

    @classmethod
    def load(cls, path: str | Path) -> Self:
        from ..support import load

        return cast(Self, load(path, cls))

    def to_json(self) -> str:
        from ..support import to_json

        return to_json(self)

    def to_yaml(self) -> str:
        from ..support import to_yaml

        return to_yaml(self)

    def save(self, path: str | Path) -> None:
        from ..support import save

        save(self, path)


class NodeFileConfig(Config):
    """Config for a standalone worker node, with executor worker counts."""

    map_reduce_workers: int = Field(default=0, description="MapReduce workers, 0 uses one per CPU core")
    executor_service_workers: dict[str, int] = Field(
        default_factory=dict,
        description="Worker count per executor service name",
    )
    node_initializer: str | None = Field(
        default=None,
        description="Dotted import path of a callable run when the node starts",
    )

    def set_map_reduce_workers(self, workers: int) -> Self:
        return self._set("map_reduce_workers", workers)

    def set_executor_service_workers(self, workers: dict[str, int]) -> Self:
        return self._set("executor_service_workers", workers)

    def set_node_initializer(self, node_initializer: str | None) -> Self:
        return self._set("node_initializer", node_initializer)
