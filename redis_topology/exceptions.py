"""Error taxonomy for configuration parsing, file access and opt-in validation."""

from __future__ import annotations


class RedisTopologyError(Exception):
    """Base class for all configuration errors."""


class ConfigParseError(RedisTopologyError):
    """Document is malformed or does not describe a valid configuration."""


class ConfigFileError(RedisTopologyError):
    """Configuration file could not be read or written."""


class ConfigValidationError(RedisTopologyError):
    """Configuration is structurally valid but unusable by a connection manager."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("; ".join(problems))
