"""Strategy objects referenced (never owned) by configs."""

from __future__ import annotations

from .balancer import (
    BaseLoadBalancer,
    LoadBalancer,
    RandomLoadBalancer,
    RoundRobinLoadBalancer,
    WeightedRoundRobinLoadBalancer,
)
from .base import Strategy
from .mapper import (
    BaseNameMapper,
    BaseNatMapper,
    DirectNameMapper,
    DirectNatMapper,
    HostNatMapper,
    HostPortNatMapper,
    NameMapper,
    NatMapper,
    PrefixNameMapper,
    split_address,
)

__all__ = [
    # Load balancers
    "BaseLoadBalancer",
    "LoadBalancer",
    "RandomLoadBalancer",
    "RoundRobinLoadBalancer",
    "WeightedRoundRobinLoadBalancer",
    # Name mappers
    "BaseNameMapper",
    "DirectNameMapper",
    "NameMapper",
    "PrefixNameMapper",
    # NAT mappers
    "BaseNatMapper",
    "DirectNatMapper",
    "HostNatMapper",
    "HostPortNatMapper",
    "NatMapper",
    # Helpers
    "Strategy",
    "split_address",
]
