"""
Base types for constraint rules.

A rule is a pure callable ``(value, context) -> RuleOutcome``. Schemas
refer to rules by name through :class:`RuleRef`; the catalog turns a
reference into a :class:`BoundRule` once, when the schema is built.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ocpp_lib_python.registry import FeatureRegistry


@dataclass(frozen=True)
class RuleOutcome:
    """Outcome of evaluating one rule against one value."""

    valid: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def ok(cls) -> RuleOutcome:
        """Create a valid outcome."""
        return _VALID

    @classmethod
    def violated(cls, reason: str) -> RuleOutcome:
        """Create a violated outcome."""
        return cls(valid=False, reason=reason)


_VALID = RuleOutcome(valid=True)


@dataclass(frozen=True)
class RuleContext:
    """Read-only context handed to every rule.

    Attributes:
        registry: Feature registry used by dynamic enumerations
        field: Wire path of the field being checked
        payload: Payload instance that owns the field
    """

    registry: FeatureRegistry | None = None
    field: str = ""
    payload: Any = None


RuleCheck = Callable[[Any, RuleContext], RuleOutcome]
"""Signature of an evaluated rule."""

RuleFactory = Callable[..., RuleCheck]
"""Signature of a catalog entry: takes the reference arguments, returns a check."""


@dataclass(frozen=True)
class RuleRef:
    """Reference to a catalog rule plus its arguments."""

    name: str
    args: tuple[Any, ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}={' '.join(str(a) for a in self.args)}"


def rule(name: str, *args: Any) -> RuleRef:
    """Shorthand for building a :class:`RuleRef`.

    Example:
        >>> rule("max_length", 255)
        RuleRef(name='max_length', args=(255,))
    """
    return RuleRef(name=name, args=args)


def _convert_arg(token: str) -> Any:
    """Convert a tag argument token to int, float or leave it as a string."""
    for convert in (int, float):
        try:
            return convert(token)
        except ValueError:
            continue
    return token


def parse_tag(tag: str) -> tuple[RuleRef, ...]:
    """Parse a compact rule tag.

    Rules are comma separated; arguments follow ``=`` and are separated
    by whitespace.

    Example:
        >>> parse_tag("required,format=uri")
        (RuleRef(name='required', args=()), RuleRef(name='format', args=('uri',)))
        >>> parse_tag("one_of=Accepted Rejected")[0].args
        ('Accepted', 'Rejected')

    Args:
        tag: Tag string

    Returns:
        Tuple of rule references in declaration order
    """
    refs: list[RuleRef] = []
    for part in tag.split(","):
        part = part.strip()
        if not part:
            continue
        name, sep, raw_args = part.partition("=")
        args = tuple(_convert_arg(t) for t in raw_args.split()) if sep else ()
        refs.append(RuleRef(name=name.strip(), args=args))
    return tuple(refs)


class Rules:
    """Field metadata attaching constraint rules to a payload field.

    Used inside ``typing.Annotated``::

        location: Annotated[str | None, Rules("required,format=uri")] = None
        connector_id: Annotated[int | None, Rules(rule("gt", 0))] = None
    """

    __slots__ = ("refs",)

    def __init__(self, *items: str | RuleRef) -> None:
        refs: list[RuleRef] = []
        for item in items:
            if isinstance(item, RuleRef):
                refs.append(item)
            else:
                refs.extend(parse_tag(item))
        self.refs: tuple[RuleRef, ...] = tuple(refs)

    def __repr__(self) -> str:
        return f"Rules({','.join(str(r) for r in self.refs)!r})"


@dataclass(frozen=True)
class BoundRule:
    """A rule reference resolved against the catalog."""

    name: str
    args: tuple[Any, ...]
    check: RuleCheck

    def __call__(self, value: Any, context: RuleContext) -> RuleOutcome:
        return self.check(value, context)

    @property
    def is_required(self) -> bool:
        return self.name == REQUIRED


REQUIRED = "required"
