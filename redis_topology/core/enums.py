from __future__ import annotations

from enum import StrEnum


class ReadMode(StrEnum):
    """Node class serving read commands."""

    SLAVE = "SLAVE"
    MASTER = "MASTER"


class SubscriptionMode(StrEnum):
    """Node class serving pub/sub subscriptions."""

    SLAVE = "SLAVE"
    MASTER = "MASTER"


class SslProvider(StrEnum):
    """TLS implementation; DEFAULT is the platform stack."""

    DEFAULT = "DEFAULT"
    OPENSSL = "OPENSSL"


class TransportMode(StrEnum):
    NIO = "NIO"
    EPOLL = "EPOLL"
    KQUEUE = "KQUEUE"
