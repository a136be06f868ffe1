"""
Message dispatcher joining registry, codec and validator.

Outbound: a typed payload is validated and encoded, then handed to the
transport together with its action name. Inbound: the action name is
resolved in the registry, the raw payload is decoded into the expected
type and validated, and the typed payload is returned. Failures map to
OCPP-J call errors through :meth:`MessageDispatcher.to_call_error`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ocpp_lib_python.codec import PayloadCodec
from ocpp_lib_python.config import OcppLibConfig
from ocpp_lib_python.errors import (
    DecodeError,
    OcppLibError,
    UnknownActionError,
    ValidationError,
    classify_exception,
)
from ocpp_lib_python.feature import MessageKind
from ocpp_lib_python.registry import FeatureRegistry
from ocpp_lib_python.schema import Payload
from ocpp_lib_python.telemetry import get_logger, log_context
from ocpp_lib_python.validation import PayloadValidator

logger = get_logger("ocpp_lib_python.dispatch")


@dataclass(frozen=True)
class OutboundMessage:
    """Validated payload ready for the transport.

    Attributes:
        action: Action name
        kind: Request or confirmation
        payload: Wire dictionary
    """

    action: str
    kind: MessageKind
    payload: dict[str, Any]


@dataclass(frozen=True)
class CallError:
    """Protocol-level error to answer a failed message with.

    Attributes:
        code: OCPP-J error code (e.g., 'NotImplemented')
        description: Short description
        details: Structured details (JSON-ready)
    """

    code: str
    description: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "errorCode": self.code,
            "errorDescription": self.description,
            "errorDetails": self.details,
        }


class MessageDispatcher:
    """Generic dispatch over every registered feature.

    Example:
        >>> dispatcher = MessageDispatcher(registry)
        >>> out = dispatcher.prepare_request(new_trigger_message_request("Heartbeat"))
        >>> transport.send(out.action, out.payload)
        >>> ...
        >>> conf = dispatcher.accept_confirmation("TriggerMessage", {"status": "Accepted"})
    """

    def __init__(
        self,
        registry: FeatureRegistry,
        codec: PayloadCodec | None = None,
        config: OcppLibConfig | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Feature registry
            codec: Payload codec (default: built from ``config``)
            config: Library config used when no codec is given
                (default: read from the environment)
        """
        if codec is None:
            codec = PayloadCodec.from_config(config or OcppLibConfig.from_env())
        self._registry = registry
        self._codec = codec
        self._validator = PayloadValidator(registry)

    @property
    def registry(self) -> FeatureRegistry:
        return self._registry

    @property
    def validator(self) -> PayloadValidator:
        return self._validator

    @property
    def codec(self) -> PayloadCodec:
        return self._codec

    # ---- outbound ------------------------------------------------------

    def prepare_request(self, payload: Payload) -> OutboundMessage:
        """Validate and encode a request.

        Raises:
            UnknownActionError: If the payload's action is not registered
            ValidationError: If the payload violates its schema
        """
        return self._prepare(payload, MessageKind.REQUEST)

    def prepare_confirmation(self, payload: Payload) -> OutboundMessage:
        """Validate and encode a confirmation.

        Raises:
            UnknownActionError: If the payload's action is not registered
            ValidationError: If the payload violates its schema
        """
        return self._prepare(payload, MessageKind.CONFIRMATION)

    def _prepare(self, payload: Payload, kind: MessageKind) -> OutboundMessage:
        action = type(payload).action
        if action is None:
            raise TypeError(f"{type(payload).__name__} is not bound to an action")

        with log_context(action=action):
            result = self._validator.validate_payload(payload, kind, action)
            result.raise_if_invalid(action)
            logger.debug("Outbound payload validated", kind=kind.value)

        return OutboundMessage(
            action=action,
            kind=kind,
            payload=self._codec.encode(payload),
        )

    # ---- inbound -------------------------------------------------------

    def accept_request(self, action: str, raw: Any) -> Payload:
        """Resolve, decode and validate an inbound request.

        Raises:
            UnknownActionError: If the action is not implemented locally
            DecodeError: If the payload cannot be decoded
            ValidationError: If the decoded payload violates its schema
        """
        return self._accept(action, raw, MessageKind.REQUEST)

    def accept_confirmation(self, action: str, raw: Any) -> Payload:
        """Resolve, decode and validate an inbound confirmation.

        Raises:
            UnknownActionError: If the action is not implemented locally
            DecodeError: If the payload cannot be decoded
            ValidationError: If the decoded payload violates its schema
        """
        return self._accept(action, raw, MessageKind.CONFIRMATION)

    def _accept(self, action: str, raw: Any, kind: MessageKind) -> Payload:
        with log_context(action=action):
            descriptor = self._registry.lookup(action)
            schema = descriptor.schema_for(kind)

            payload = self._codec.decode(schema.model, raw, action=action)

            result = self._validator.validate_payload(payload, kind, action)
            result.raise_if_invalid(action)
            logger.debug("Inbound payload accepted", kind=kind.value)
        return payload

    # ---- errors --------------------------------------------------------

    def to_call_error(self, exc: BaseException) -> CallError:
        """Map an exception raised while handling a message to a call error.

        Args:
            exc: Exception from prepare_* or accept_*

        Returns:
            CallError with the matching OCPP-J error code
        """
        error_class = classify_exception(exc)
        details: dict[str, Any] = {}

        if isinstance(exc, ValidationError):
            details["violations"] = [v.to_dict() for v in exc.violations]
        elif isinstance(exc, DecodeError):
            details["errors"] = [
                {"loc": ".".join(str(p) for p in e.get("loc", ())), "msg": e.get("msg")}
                for e in exc.errors
            ]
        elif isinstance(exc, UnknownActionError):
            details["action"] = exc.action

        if isinstance(exc, OcppLibError):
            description = exc.message
        else:
            # Internal failures do not leak their message to the peer
            description = error_class.standard_code.description
            logger.error(
                "Unexpected error while handling message",
                error=type(exc).__name__,
                detail=str(exc),
            )

        return CallError(code=error_class.value, description=description, details=details)
