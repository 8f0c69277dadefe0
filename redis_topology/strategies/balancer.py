"""Load balancers choosing a slave connection among candidates.

Configs only store a reference to a balancer. The connection manager calls
``select`` from several I/O threads, so every variant guards its own state.
"""

from __future__ import annotations

import random
import threading
from abc import abstractmethod
from collections.abc import Sequence
from typing import Annotated, Literal

from pydantic import Field, PrivateAttr

from .base import Strategy


class BaseLoadBalancer(Strategy):
    @abstractmethod
    def select[T](self, candidates: Sequence[T]) -> T:
        """Pick one candidate.

        Raises
        ------
        ValueError
            If ``candidates`` is empty.
        """


def _require_candidates(candidates: Sequence[object]) -> None:
    if not candidates:
        raise ValueError("No candidates to select from")


class RoundRobinLoadBalancer(BaseLoadBalancer):
    type: Literal["round_robin"] = "round_robin"

    _position: int = PrivateAttr(default=0)
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    def select[T](self, candidates: Sequence[T]) -> T:
        _require_candidates(candidates)
        with self._lock:
            index = self._position % len(candidates)
            self._position += 1
        return candidates[index]


class RandomLoadBalancer(BaseLoadBalancer):
    type: Literal["random"] = "random"

    def select[T](self, candidates: Sequence[T]) -> T:
        _require_candidates(candidates)
        return random.choice(candidates)


class WeightedRoundRobinLoadBalancer(BaseLoadBalancer):
    """Round robin where each candidate appears ``weight`` times per cycle.

    Candidates are matched against ``weights`` by their string form, which for
    addresses is ``host:port``. Candidates without an entry get
    ``default_weight``.
    """

    type: Literal["weighted_round_robin"] = "weighted_round_robin"
    weights: dict[str, int] = Field(default_factory=dict, description="Weight per candidate address")
    default_weight: int = Field(default=1, description="Weight for candidates missing from weights")

    _position: int = PrivateAttr(default=0)
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    def select[T](self, candidates: Sequence[T]) -> T:
        _require_candidates(candidates)
        weights = [max(self.weights.get(str(candidate), self.default_weight), 0) for candidate in candidates]
        total = sum(weights)
        # all weights zero: fall back to plain round robin
        if total == 0:
            weights, total = [1] * len(candidates), len(candidates)
        with self._lock:
            slot = self._position % total
            self._position += 1
        for candidate, weight in zip(candidates, weights, strict=True):
            if slot < weight:
                return candidate
            slot -= weight
        raise AssertionError("slot outside cumulative weights")


LoadBalancer = Annotated[
    RoundRobinLoadBalancer | RandomLoadBalancer | WeightedRoundRobinLoadBalancer,
    Field(discriminator="type"),
]
