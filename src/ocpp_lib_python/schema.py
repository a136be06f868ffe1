"""
Payload models and payload schemas.

Payload types are Pydantic models whose fields carry their wire alias
(camelCase) and their constraint rules as ``Annotated`` metadata. A
:class:`PayloadSchema` is the immutable description of one payload type,
built once when its feature is described and shared by the validator and
the codec.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Union, get_args, get_origin

from pydantic import AliasChoices, BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ocpp_lib_python.rules.base import BoundRule, Rules

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo

    from ocpp_lib_python.rules.catalog import RuleCatalog


class Payload(BaseModel):
    """Base class of every request and confirmation payload.

    Fields are declared in snake_case and travel on the wire in camelCase.
    Every field should default to ``None`` so that a missing required value
    is reported by validation rather than by construction or decoding.
    Assignments are validated like construction, so a value of the wrong
    type never reaches the constraint rules.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    action: ClassVar[str | None] = None
    """Action name of the feature this payload belongs to."""

    @field_validator("*", mode="before")
    @classmethod
    def _unwrap_enum(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value

    @classmethod
    def wire_names(cls) -> frozenset[str]:
        """Get every key accepted on the wire (aliases and field names)."""
        names: set[str] = set()
        for name, info in cls.model_fields.items():
            names.add(name)
            if info.alias:
                names.add(info.alias)
            if isinstance(info.validation_alias, str):
                names.add(info.validation_alias)
            elif isinstance(info.validation_alias, AliasChoices):
                names.update(c for c in info.validation_alias.choices if isinstance(c, str))
        return frozenset(names)


class FieldType(str, Enum):
    """Semantic type of a payload field."""

    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    PAYLOAD = "payload"
    LIST = "list"
    ANY = "any"


@dataclass(frozen=True)
class PayloadField:
    """Description of one payload field.

    Attributes:
        name: Python attribute name
        alias: Wire name
        type: Semantic type
        optional: True when no ``required`` rule is attached
        rules: Bound rules in attachment order
        schema: Schema of the nested payload (or list item payload)
        description: Field description, if any
    """

    name: str
    alias: str
    type: FieldType
    optional: bool
    rules: tuple[BoundRule, ...] = ()
    schema: PayloadSchema | None = None
    description: str | None = None

    @property
    def rule_names(self) -> tuple[str, ...]:
        return tuple(r.name for r in self.rules)


@dataclass(frozen=True)
class PayloadSchema:
    """Immutable description of one payload type.

    Example:
        >>> schema = PayloadSchema.from_model(GetDiagnosticsRequest, catalog)
        >>> [f.alias for f in schema.describe_fields()]
        ['location', 'retries', 'retryInterval', 'startTime', 'stopTime']
    """

    model: type[Payload]
    fields: tuple[PayloadField, ...]

    @property
    def name(self) -> str:
        return self.model.__name__

    def describe_fields(self) -> tuple[PayloadField, ...]:
        """Get the fields in declaration order."""
        return self.fields

    def field(self, name: str) -> PayloadField:
        """Get a field by attribute name or wire alias.

        Raises:
            KeyError: If no such field exists
        """
        for f in self.fields:
            if name in (f.name, f.alias):
                return f
        raise KeyError(f"{self.name} has no field {name!r}")

    def new(self, **values: Any) -> Payload:
        """Create a payload instance of this schema's type."""
        return self.model(**values)

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @classmethod
    def from_model(cls, model: type[Payload], catalog: RuleCatalog) -> PayloadSchema:
        """Build the schema of a payload model.

        Rule references are bound against ``catalog`` here, so an unknown
        rule name fails at initialization instead of at validation time.

        Args:
            model: Payload model class
            catalog: Rule catalog to bind rule references against

        Returns:
            PayloadSchema for the model

        Raises:
            UnregisteredRuleError: If a field references an unknown rule
        """
        fields = tuple(
            _describe_field(name, info, catalog)
            for name, info in model.model_fields.items()
        )
        return cls(model=model, fields=fields)


def _describe_field(name: str, info: FieldInfo, catalog: RuleCatalog) -> PayloadField:
    alias = info.alias or name
    bound: list[BoundRule] = []
    for meta in info.metadata:
        if isinstance(meta, Rules):
            bound.extend(catalog.bind(ref, field=alias) for ref in meta.refs)

    field_type, nested = _resolve_type(info.annotation, catalog)
    return PayloadField(
        name=name,
        alias=alias,
        type=field_type,
        optional=not any(r.is_required for r in bound),
        rules=tuple(bound),
        schema=nested,
        description=info.description,
    )


def _strip_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
        return Any
    return annotation


def _resolve_type(
    annotation: Any, catalog: RuleCatalog
) -> tuple[FieldType, PayloadSchema | None]:
    annotation = _strip_optional(annotation)

    if get_origin(annotation) in (list, tuple):
        args = get_args(annotation)
        item = _strip_optional(args[0]) if args else Any
        if isinstance(item, type) and issubclass(item, Payload):
            return FieldType.LIST, PayloadSchema.from_model(item, catalog)
        return FieldType.LIST, None

    if not isinstance(annotation, type):
        return FieldType.ANY, None
    if issubclass(annotation, Payload):
        return FieldType.PAYLOAD, PayloadSchema.from_model(annotation, catalog)
    # bool before int, bool is an int subclass
    if issubclass(annotation, bool):
        return FieldType.BOOLEAN, None
    if issubclass(annotation, int):
        return FieldType.INTEGER, None
    if issubclass(annotation, (float, Decimal)):
        return FieldType.DECIMAL, None
    if issubclass(annotation, datetime):
        return FieldType.TIMESTAMP, None
    if issubclass(annotation, str):
        return FieldType.STRING, None
    return FieldType.ANY, None
