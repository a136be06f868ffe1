"""
Payload validation against payload schemas.

Runs every rule attached to every field and reports all violations, in
field declaration order and then rule attachment order. Validation never
mutates the payload and never raises for a violated rule: the outcome is
returned as data so the protocol layer can choose its response.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ocpp_lib_python.errors import ValidationError
from ocpp_lib_python.feature import MessageKind
from ocpp_lib_python.rules.base import BoundRule, RuleContext, RuleOutcome
from ocpp_lib_python.schema import FieldType, Payload, PayloadSchema
from ocpp_lib_python.telemetry import get_logger

if TYPE_CHECKING:
    from ocpp_lib_python.registry import FeatureRegistry

logger = get_logger("ocpp_lib_python.validation")


@dataclass(frozen=True)
class Violation:
    """One violated rule.

    Attributes:
        field: Wire path of the field (e.g., 'meterValue[0].timestamp')
        rule: Name of the violated rule
        reason: Human-readable reason
    """

    field: str
    rule: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason} ({self.rule})"

    def to_dict(self) -> dict[str, str]:
        """Convert violation to dictionary."""
        return {"field": self.field, "rule": self.rule, "reason": self.reason}


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one payload."""

    violations: tuple[Violation, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.violations

    def __bool__(self) -> bool:
        return self.valid

    @property
    def errors(self) -> list[str]:
        """Violations rendered as strings."""
        return [str(v) for v in self.violations]

    def raise_if_invalid(self, action: str | None = None) -> None:
        """Raise ValidationError if validation failed.

        Args:
            action: Action name to attach to the error
        """
        if not self.valid:
            raise ValidationError(
                f"Payload validation failed: {'; '.join(self.errors)}",
                self.violations,
                action=action,
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "valid": self.valid,
            "violations": [v.to_dict() for v in self.violations],
        }


def validate(
    payload: Payload,
    schema: PayloadSchema,
    registry: FeatureRegistry | None = None,
) -> ValidationResult:
    """Validate a payload against its schema.

    Args:
        payload: Populated payload value
        schema: Schema of the payload type
        registry: Registry consulted by dynamic enumeration rules

    Returns:
        ValidationResult with every violation found
    """
    violations: list[Violation] = []
    _check_fields(payload, schema, registry, "", violations)
    return ValidationResult(violations=tuple(violations))


def _evaluate(bound: BoundRule, value: Any, context: RuleContext) -> RuleOutcome:
    try:
        return bound(value, context)
    except TypeError:
        # Payloads built with model_construct skip type validation
        return RuleOutcome.violated(
            f"value has wrong type {type(value).__name__} for rule {bound.name!r}"
        )


def _check_fields(
    payload: Any,
    schema: PayloadSchema,
    registry: FeatureRegistry | None,
    prefix: str,
    out: list[Violation],
) -> None:
    for f in schema.fields:
        value = getattr(payload, f.name, None)
        path = f"{prefix}{f.alias}"
        context = RuleContext(registry=registry, field=path, payload=payload)

        if value is None:
            # Nothing to check beyond presence
            for bound in f.rules:
                if bound.is_required:
                    outcome = _evaluate(bound, value, context)
                    if not outcome.valid:
                        out.append(Violation(path, bound.name, outcome.reason or ""))
                    break
            continue

        for bound in f.rules:
            outcome = _evaluate(bound, value, context)
            if outcome.valid:
                continue
            out.append(Violation(path, bound.name, outcome.reason or ""))
            if bound.is_required:
                break

        if f.schema is None:
            continue
        if f.type is FieldType.PAYLOAD:
            _check_fields(value, f.schema, registry, f"{path}.", out)
        elif f.type is FieldType.LIST:
            for index, item in enumerate(value):
                if item is not None:
                    _check_fields(item, f.schema, registry, f"{path}[{index}].", out)


class PayloadValidator:
    """Validates payloads against the schemas registered for their action.

    Example:
        >>> validator = PayloadValidator(registry)
        >>> result = validator.validate_request(GetDiagnosticsRequest(retries=-1))
        >>> [v.rule for v in result.violations]
        ['required', 'min']
    """

    def __init__(self, registry: FeatureRegistry) -> None:
        """Initialize the validator.

        Args:
            registry: Registry resolving action names to schemas
        """
        self._registry = registry

    @property
    def registry(self) -> FeatureRegistry:
        return self._registry

    def validate_request(self, payload: Payload) -> ValidationResult:
        """Validate a request payload."""
        return self.validate_payload(payload, MessageKind.REQUEST)

    def validate_confirmation(self, payload: Payload) -> ValidationResult:
        """Validate a confirmation payload."""
        return self.validate_payload(payload, MessageKind.CONFIRMATION)

    def validate_payload(
        self,
        payload: Payload,
        kind: MessageKind,
        action: str | None = None,
    ) -> ValidationResult:
        """Validate a payload against the schema registered for its action.

        Args:
            payload: Payload to validate
            kind: Whether the payload is a request or a confirmation
            action: Action name, defaults to the payload type's action

        Returns:
            ValidationResult

        Raises:
            UnknownActionError: If the action is not registered
            TypeError: If the payload type does not match the registered schema
        """
        action = action or type(payload).action
        if action is None:
            raise TypeError(f"{type(payload).__name__} is not bound to an action")

        schema = self._registry.lookup(action).schema_for(kind)
        if not isinstance(payload, schema.model):
            raise TypeError(
                f"{action} {kind.value} expects {schema.name}, got {type(payload).__name__}"
            )

        result = validate(payload, schema, self._registry)
        if not result.valid:
            logger.debug(
                "Payload failed validation",
                action=action,
                kind=kind.value,
                violations=len(result.violations),
            )
        return result
