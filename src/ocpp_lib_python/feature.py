"""
Feature definitions and feature descriptors.

A feature is one remote operation: an action name bound to exactly one
request payload type and one confirmation payload type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from ocpp_lib_python.errors import ErrorContext, InitializationError
from ocpp_lib_python.schema import Payload, PayloadSchema

if TYPE_CHECKING:
    from ocpp_lib_python.rules.catalog import RuleCatalog


class Initiator(str, Enum):
    """Which side of the link sends the request of a feature."""

    CHARGE_POINT = "ChargePoint"
    CENTRAL_SYSTEM = "CentralSystem"
    BOTH = "Both"

    @property
    def from_charge_point(self) -> bool:
        return self in (Initiator.CHARGE_POINT, Initiator.BOTH)

    @property
    def from_central_system(self) -> bool:
        return self in (Initiator.CENTRAL_SYSTEM, Initiator.BOTH)


class MessageKind(str, Enum):
    """Direction of a payload within a feature."""

    REQUEST = "request"
    CONFIRMATION = "confirmation"


@dataclass(frozen=True)
class FeatureDescriptor:
    """Immutable, registry-ready description of a feature.

    The payload types are resolved when the descriptor is built; nothing
    inspects payload instances at dispatch time.

    Attributes:
        action_name: Unique action name
        request_schema: Schema of the request payload
        confirmation_schema: Schema of the confirmation payload
        initiator: Side that sends the request
        triggerable: Whether TriggerMessage may ask for this message
        description: Human-readable summary
    """

    action_name: str
    request_schema: PayloadSchema
    confirmation_schema: PayloadSchema
    initiator: Initiator = Initiator.CENTRAL_SYSTEM
    triggerable: bool = False
    description: str = ""

    @property
    def request_type(self) -> type[Payload]:
        return self.request_schema.model

    @property
    def confirmation_type(self) -> type[Payload]:
        return self.confirmation_schema.model

    def schema_for(self, kind: MessageKind) -> PayloadSchema:
        """Get the request or confirmation schema."""
        if kind is MessageKind.REQUEST:
            return self.request_schema
        return self.confirmation_schema

    def new_request(self, **values: Any) -> Payload:
        """Create a request payload for this feature."""
        return self.request_schema.new(**values)

    def new_confirmation(self, **values: Any) -> Payload:
        """Create a confirmation payload for this feature."""
        return self.confirmation_schema.new(**values)


@dataclass(frozen=True)
class Feature:
    """Declarative definition of a feature.

    Example:
        >>> HEARTBEAT = Feature(
        ...     action="Heartbeat",
        ...     request=HeartbeatRequest,
        ...     confirmation=HeartbeatConfirmation,
        ...     initiator=Initiator.CHARGE_POINT,
        ...     triggerable=True,
        ... )
        >>> descriptor = HEARTBEAT.describe(catalog)
    """

    action: str
    request: type[Payload]
    confirmation: type[Payload]
    initiator: Initiator = Initiator.CENTRAL_SYSTEM
    triggerable: bool = False
    description: str = ""

    def describe(self, catalog: RuleCatalog) -> FeatureDescriptor:
        """Build the descriptor, binding every rule reference.

        Args:
            catalog: Rule catalog

        Returns:
            FeatureDescriptor

        Raises:
            InitializationError: If a payload type belongs to another action
            UnregisteredRuleError: If a field references an unknown rule
        """
        if not self.action:
            raise InitializationError(
                "Feature action name must be non-empty",
                ErrorContext(source="registry"),
            )
        for model in (self.request, self.confirmation):
            if model.action is not None and model.action != self.action:
                raise InitializationError(
                    f"{model.__name__} belongs to {model.action!r}, not {self.action!r}",
                    ErrorContext(source="registry", details={"action": self.action}),
                )

        return FeatureDescriptor(
            action_name=self.action,
            request_schema=PayloadSchema.from_model(self.request, catalog),
            confirmation_schema=PayloadSchema.from_model(self.confirmation, catalog),
            initiator=self.initiator,
            triggerable=self.triggerable,
            description=self.description,
        )
