"""Optional observation of fluent setter calls.

No hook is registered by default. Consumers that want an audit trail of how a
configuration was assembled register a callable receiving the config class
name, the field name and the assigned value.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from .logger import get_logger

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

logger: BoundLogger = get_logger(__name__)

type SetterHook = Callable[[str, str, object], None]

_hooks: list[SetterHook] = []


def register_setter_hook(hook: SetterHook) -> None:
    if hook not in _hooks:
        _hooks.append(hook)


def unregister_setter_hook(hook: SetterHook) -> None:
    if hook in _hooks:
        _hooks.remove(hook)


def clear_setter_hooks() -> None:
    _hooks.clear()


def notify_setter(owner: str, field: str, value: object) -> None:
    for hook in tuple(_hooks):
        hook(owner, field, value)


def log_setter_calls(owner: str, field: str, value: object) -> None:
    """Hook that logs every setter call at debug level.

    Secret fields arrive as ``SecretStr`` and are rendered masked.
    """
    logger.debug("Config field set", config=owner, field=field, value=value)
