"""Core module exports."""

from __future__ import annotations

from .enums import ReadMode, SslProvider, SubscriptionMode, TransportMode

__all__ = [
    "ReadMode",
    "SslProvider",
    "SubscriptionMode",
    "TransportMode",
]
