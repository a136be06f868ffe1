"""
Message-scoped logging context.

Every record emitted while a message is handled carries the identifiers of
that message. The context lives in a ``ContextVar`` so concurrent handlers
(threads or tasks) never see each other's values.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class LogContext:
    """Identifiers of the message currently being handled.

    Attributes:
        message_id: Unique id of the CALL this message belongs to
        action: Action name of the message
        charge_point_id: Identity of the remote charge point
        extra: Additional context fields
    """

    message_id: str | None = None
    action: str | None = None
    charge_point_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging, skipping unset identifiers."""
        result = {
            key: value
            for key, value in (
                ("message_id", self.message_id),
                ("action", self.action),
                ("charge_point_id", self.charge_point_id),
            )
            if value
        }
        result.update(self.extra)
        return result

    def with_extra(self, **kwargs: Any) -> LogContext:
        """Create a new context with additional fields."""
        return replace(self, extra={**self.extra, **kwargs})


_EMPTY = LogContext()
_current: ContextVar[LogContext] = ContextVar("ocpp_log_context", default=_EMPTY)


def get_log_context() -> LogContext:
    """Get the current logging context."""
    return _current.get()


def set_log_context(context: LogContext) -> None:
    """Replace the logging context of the current thread or task."""
    _current.set(context)


def clear_log_context() -> None:
    """Reset the logging context to empty."""
    _current.set(_EMPTY)


@contextmanager
def log_context(**fields: Any) -> Iterator[LogContext]:
    """Overlay identifiers on the current context for the duration of a block.

    Example:
        >>> with log_context(action="Heartbeat", charge_point_id="CP-1"):
        ...     logger.debug("Decoding payload")
    """
    base = _current.get()
    known = {
        k: fields.pop(k)
        for k in ("message_id", "action", "charge_point_id")
        if k in fields
    }
    context = replace(base, **known, extra={**base.extra, **fields})
    token = _current.set(context)
    try:
        yield context
    finally:
        _current.reset(token)
