"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from redis_topology.hooks import clear_setter_hooks

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _isolate_setter_hooks() -> Iterator[None]:
    """Ensure hooks registered by one test never observe another."""
    clear_setter_hooks()
    yield
    clear_setter_hooks()
