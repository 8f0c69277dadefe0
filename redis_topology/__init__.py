"""Topology and connection configuration for Redis clients.

Usage
-----
Build a config fluently and hand a snapshot to the connection layer::

    config = Config()
    config.use_sentinel_servers() \\
        .set_master_name("mymaster") \\
        .add_sentinel_address("redis://10.0.0.1:26379", "redis://10.0.0.2:26379") \\
        .set_read_mode(ReadMode.MASTER)
    snapshot = config.snapshot()

Load from a file::

    config = Config.load("redis.yaml")
"""

from __future__ import annotations

from .config import (
    BaseConfig,
    BaseMasterSlaveServersConfig,
    ClusterServersConfig,
    Config,
    MasterSlaveServersConfig,
    NodeFileConfig,
    ReplicatedServersConfig,
    SentinelServersConfig,
    SingleServerConfig,
)
from .core import ReadMode, SslProvider, SubscriptionMode, TransportMode
from .exceptions import ConfigFileError, ConfigParseError, ConfigValidationError, RedisTopologyError
from .strategies import (
    DirectNameMapper,
    DirectNatMapper,
    HostNatMapper,
    HostPortNatMapper,
    PrefixNameMapper,
    RandomLoadBalancer,
    RoundRobinLoadBalancer,
    WeightedRoundRobinLoadBalancer,
)

__all__ = [
    # Configs
    "BaseConfig",
    "BaseMasterSlaveServersConfig",
    "ClusterServersConfig",
    "Config",
    "MasterSlaveServersConfig",
    "NodeFileConfig",
    "ReplicatedServersConfig",
    "SentinelServersConfig",
    "SingleServerConfig",
    # Enums
    "ReadMode",
    "SslProvider",
    "SubscriptionMode",
    "TransportMode",
    # Errors
    "ConfigFileError",
    "ConfigParseError",
    "ConfigValidationError",
    "RedisTopologyError",
    # Strategies
    "DirectNameMapper",
    "DirectNatMapper",
    "HostNatMapper",
    "HostPortNatMapper",
    "PrefixNameMapper",
    "RandomLoadBalancer",
    "RoundRobinLoadBalancer",
    "WeightedRoundRobinLoadBalancer",
]
