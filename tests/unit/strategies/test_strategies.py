"""Tests for load balancers, name mappers and NAT mappers."""

from __future__ import annotations

from collections import Counter
from concurrent.futures import ThreadPoolExecutor

import pytest
from rich.console import Console

from redis_topology.strategies import (
    BaseLoadBalancer,
    BaseNameMapper,
    BaseNatMapper,
    DirectNameMapper,
    DirectNatMapper,
    HostNatMapper,
    HostPortNatMapper,
    PrefixNameMapper,
    RandomLoadBalancer,
    RoundRobinLoadBalancer,
    WeightedRoundRobinLoadBalancer,
    split_address,
)

console = Console()


class TestRoundRobinLoadBalancer:
    """Test round robin selection."""

    def test_cycles_through_candidates(self) -> None:
        """Test candidates are returned in order and wrap around."""
        balancer = RoundRobinLoadBalancer()
        candidates = ["a", "b", "c"]

        picks = [balancer.select(candidates) for _ in range(4)]

        assert picks == ["a", "b", "c", "a"]

    def test_empty_candidates_raise(self) -> None:
        """Test selecting from nothing fails."""
        with pytest.raises(ValueError, match="No candidates"):
            RoundRobinLoadBalancer().select([])

    def test_concurrent_selection_is_even(self) -> None:
        """Test concurrent callers never skip or repeat a position."""
        console.print("[bold blue]Testing concurrent round robin[/bold blue]")

        balancer = RoundRobinLoadBalancer()
        candidates = ["a", "b", "c", "d"]

        with ThreadPoolExecutor(max_workers=8) as pool:
            picks = list(pool.map(lambda _: balancer.select(candidates), range(400)))

        assert Counter(picks) == {"a": 100, "b": 100, "c": 100, "d": 100}
        console.print(f"[green]✓ Distribution: {dict(Counter(picks))}[/green]")


class TestWeightedRoundRobinLoadBalancer:
    """Test weighted round robin selection."""

    def test_weights_repeat_candidates(self) -> None:
        """Test a weight of two gives a candidate two slots per cycle."""
        balancer = WeightedRoundRobinLoadBalancer(weights={"a": 2})

        picks = [balancer.select(["a", "b"]) for _ in range(4)]

        assert picks == ["a", "a", "b", "a"]

    def test_zero_weight_excludes_candidate(self) -> None:
        """Test a zero weight removes a candidate while others remain."""
        balancer = WeightedRoundRobinLoadBalancer(weights={"b": 0})

        picks = {balancer.select(["a", "b", "c"]) for _ in range(6)}

        assert picks == {"a", "c"}

    def test_all_zero_weights_fall_back_to_round_robin(self) -> None:
        """Test candidates are still served when every weight is zero."""
        balancer = WeightedRoundRobinLoadBalancer(default_weight=0)

        picks = [balancer.select(["a", "b"]) for _ in range(3)]

        assert picks == ["a", "b", "a"]

    def test_large_weights(self) -> None:
        """Test very large weights select by position without expanding the cycle."""
        balancer = WeightedRoundRobinLoadBalancer(weights={"a": 1_000_000_000, "b": 1})
        balancer._position = 999_999_999

        assert balancer.select(["a", "b"]) == "a"
        assert balancer.select(["a", "b"]) == "b"
        assert balancer.select(["a", "b"]) == "a"

    def test_empty_candidates_raise(self) -> None:
        """Test selecting from nothing fails."""
        with pytest.raises(ValueError, match="No candidates"):
            WeightedRoundRobinLoadBalancer().select([])


class TestRandomLoadBalancer:
    """Test random selection."""

    def test_selects_a_candidate(self) -> None:
        """Test every pick comes from the candidate list."""
        balancer = RandomLoadBalancer()
        candidates = ["a", "b", "c"]

        picks = {balancer.select(candidates) for _ in range(50)}

        assert picks <= set(candidates)

    def test_single_candidate(self) -> None:
        """Test a single candidate is always chosen."""
        assert RandomLoadBalancer().select(["only"]) == "only"

    def test_empty_candidates_raise(self) -> None:
        """Test selecting from nothing fails."""
        with pytest.raises(ValueError, match="No candidates"):
            RandomLoadBalancer().select([])


class TestNameMappers:
    """Test object name mappers."""

    def test_direct_mapper_is_identity(self) -> None:
        """Test names pass through unchanged both ways."""
        mapper = DirectNameMapper()

        assert mapper.map("orders") == "orders"
        assert mapper.unmap("orders") == "orders"

    def test_prefix_mapper(self) -> None:
        """Test the prefix is added and removed."""
        mapper = PrefixNameMapper(prefix="tenant-a:")

        assert mapper.map("orders") == "tenant-a:orders"
        assert mapper.unmap("tenant-a:orders") == "orders"

    def test_prefix_mapper_leaves_foreign_names(self) -> None:
        """Test unmap ignores names without the prefix."""
        assert PrefixNameMapper(prefix="tenant-a:").unmap("tenant-b:orders") == "tenant-b:orders"


class TestSplitAddress:
    """Test address parsing used by NAT mappers."""

    @pytest.mark.parametrize(
        ("address", "expected"),
        [
            ("redis://10.0.0.1:6379", ("redis://", "10.0.0.1", "6379")),
            ("rediss://cache.local:6380", ("rediss://", "cache.local", "6380")),
            ("10.0.0.1:6379", ("", "10.0.0.1", "6379")),
            ("cache.local", ("", "cache.local", "")),
            ("redis://cache.local", ("redis://", "cache.local", "")),
        ],
    )
    def test_split(self, address: str, expected: tuple[str, str, str]) -> None:
        """Test scheme, host and port are separated."""
        assert split_address(address) == expected


class TestNatMappers:
    """Test address translation."""

    def test_direct_mapper_is_identity(self) -> None:
        """Test addresses pass through unchanged."""
        assert DirectNatMapper().map("redis://10.0.0.1:6379") == "redis://10.0.0.1:6379"

    def test_host_mapper_keeps_port_and_scheme(self) -> None:
        """Test only the host is rewritten."""
        mapper = HostNatMapper(hosts_map={"10.0.0.1": "public.example.com"})

        assert mapper.map("redis://10.0.0.1:7001") == "redis://public.example.com:7001"
        assert mapper.map("10.0.0.1:7002") == "public.example.com:7002"
        assert mapper.map("redis://10.0.0.2:7001") == "redis://10.0.0.2:7001"

    def test_host_port_mapper(self) -> None:
        """Test host:port pairs are rewritten as a unit."""
        mapper = HostPortNatMapper(host_port_map={"172.17.0.2:6379": "127.0.0.1:16379"})

        assert mapper.map("redis://172.17.0.2:6379") == "redis://127.0.0.1:16379"
        assert mapper.map("172.17.0.2:6379") == "127.0.0.1:16379"
        assert mapper.map("redis://172.17.0.2:6380") == "redis://172.17.0.2:6380"


class TestStrategyModels:
    """Test strategy objects as configuration values."""

    def test_equality_ignores_runtime_state(self) -> None:
        """Test balancers compare by declared fields, not by position counters."""
        used = RoundRobinLoadBalancer()
        used.select(["a", "b"])

        assert used == RoundRobinLoadBalancer()

    def test_equality_depends_on_fields_and_type(self) -> None:
        """Test different fields or types are unequal."""
        assert HostNatMapper(hosts_map={"a": "b"}) != HostNatMapper(hosts_map={"a": "c"})
        assert DirectNatMapper() != DirectNameMapper()
        assert RoundRobinLoadBalancer() != RandomLoadBalancer()

    def test_unknown_fields_rejected(self) -> None:
        """Test strategies refuse fields they do not declare."""
        with pytest.raises(ValueError, match="extra"):
            PrefixNameMapper.model_validate({"type": "prefix", "prefix": "a:", "suffix": ":b"})

    @pytest.mark.parametrize("abstract_cls", [BaseLoadBalancer, BaseNameMapper, BaseNatMapper])
    def test_abstract_bases_cannot_be_instantiated(self, abstract_cls: type) -> None:
        """Test the abstract strategy bases require a concrete subclass."""
        with pytest.raises(TypeError):
            abstract_cls()
