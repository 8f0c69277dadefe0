"""Configuration model exports."""

from __future__ import annotations

from .base import BaseConfig, BaseMasterSlaveServersConfig, FluentModel
from .cluster import ClusterServersConfig
from .master_slave import MasterSlaveServersConfig
from .replicated import ReplicatedServersConfig
from .root import TOPOLOGY_KEYS, Config, NodeFileConfig, Topology, TopologyConfig
from .sentinel import SentinelServersConfig
from .single import SingleServerConfig

__all__ = [
    # Base
    "BaseConfig",
    "BaseMasterSlaveServersConfig",
    "FluentModel",
    # Topologies
    "ClusterServersConfig",
    "MasterSlaveServersConfig",
    "ReplicatedServersConfig",
    "SentinelServersConfig",
    "SingleServerConfig",
    # Root
    "Config",
    "NodeFileConfig",
    "TOPOLOGY_KEYS",
    "Topology",
    "TopologyConfig",
]
