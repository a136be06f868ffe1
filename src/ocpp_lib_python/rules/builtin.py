"""
Built-in constraint rules.

Each function here is a rule factory: it takes the arguments of a rule
reference and returns the check that the validator evaluates.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from ocpp_lib_python.rules.base import RuleCheck, RuleContext, RuleOutcome

if TYPE_CHECKING:
    from ocpp_lib_python.registry import FeatureRegistry

EnumResolver = Callable[["FeatureRegistry"], Iterable[str]]
"""Computes the legal values of a dynamic enumeration from the live registry."""

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


def _plain(value: Any) -> Any:
    """Unwrap enum members to their values."""
    return value.value if isinstance(value, Enum) else value


def required() -> RuleCheck:
    """Value must be present; ``None`` and the empty string count as absent."""

    def check(value: Any, context: RuleContext) -> RuleOutcome:
        if value is None:
            return RuleOutcome.violated("field is required")
        if isinstance(value, str) and value == "":
            return RuleOutcome.violated("field is required and must not be empty")
        return RuleOutcome.ok()

    return check


def numeric_min(bound: int | float) -> RuleCheck:
    """Value must be greater than or equal to ``bound``."""

    def check(value: Any, context: RuleContext) -> RuleOutcome:
        if value < bound:
            return RuleOutcome.violated(f"must be >= {bound}, got {value}")
        return RuleOutcome.ok()

    return check


def numeric_gt(bound: int | float) -> RuleCheck:
    """Value must be strictly greater than ``bound``."""

    def check(value: Any, context: RuleContext) -> RuleOutcome:
        if value <= bound:
            return RuleOutcome.violated(f"must be > {bound}, got {value}")
        return RuleOutcome.ok()

    return check


def numeric_max(bound: int | float) -> RuleCheck:
    """Value must be less than or equal to ``bound``."""

    def check(value: Any, context: RuleContext) -> RuleOutcome:
        if value > bound:
            return RuleOutcome.violated(f"must be <= {bound}, got {value}")
        return RuleOutcome.ok()

    return check


def min_length(bound: int) -> RuleCheck:
    """String or collection must hold at least ``bound`` items."""

    def check(value: Any, context: RuleContext) -> RuleOutcome:
        if len(value) < bound:
            return RuleOutcome.violated(
                f"length must be >= {bound}, got {len(value)}"
            )
        return RuleOutcome.ok()

    return check


def max_length(bound: int) -> RuleCheck:
    """String or collection must hold at most ``bound`` items."""

    def check(value: Any, context: RuleContext) -> RuleOutcome:
        if len(value) > bound:
            return RuleOutcome.violated(
                f"length must be <= {bound}, got {len(value)}"
            )
        return RuleOutcome.ok()

    return check


def is_uri(value: Any) -> bool:
    """Check that a string is an absolute URI or an absolute path."""
    if not isinstance(value, str) or not value:
        return False
    if any(c.isspace() for c in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if parts.scheme:
        return bool(_SCHEME_RE.match(parts.scheme)) and bool(parts.netloc or parts.path)
    return value.startswith("/")


def is_date_time(value: Any) -> bool:
    """Check that a value is a datetime or an ISO 8601 date-time string."""
    if isinstance(value, datetime):
        return True
    if not isinstance(value, str) or "T" not in value:
        return False
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


FORMAT_CHECKERS: dict[str, Callable[[Any], bool]] = {
    "uri": is_uri,
    "date-time": is_date_time,
}


def string_format(kind: str) -> RuleCheck:
    """Value must pass the named format check.

    Raises:
        ValueError: If ``kind`` is not a known format
    """
    checker = FORMAT_CHECKERS.get(kind)
    if checker is None:
        raise ValueError(
            f"Unknown format {kind!r}, expected one of {sorted(FORMAT_CHECKERS)}"
        )

    def check(value: Any, context: RuleContext) -> RuleOutcome:
        if not checker(value):
            return RuleOutcome.violated(f"{value!r} is not a valid {kind}")
        return RuleOutcome.ok()

    return check


def one_of(*values: Any) -> RuleCheck:
    """Value must belong to a fixed, closed set."""
    if len(values) == 1 and isinstance(values[0], type) and issubclass(values[0], Enum):
        values = tuple(values[0])
    allowed = frozenset(_plain(v) for v in values)
    listing = ", ".join(sorted(str(v) for v in allowed))

    def check(value: Any, context: RuleContext) -> RuleOutcome:
        if _plain(value) not in allowed:
            return RuleOutcome.violated(f"{_plain(value)!r} is not one of [{listing}]")
        return RuleOutcome.ok()

    return check


def one_of_dynamic(resolver: EnumResolver) -> RuleCheck:
    """Value must belong to a set computed from the registry at check time.

    The resolver is called on every evaluation, so registry changes are
    visible without rebuilding schemas.
    """

    def check(value: Any, context: RuleContext) -> RuleOutcome:
        allowed = (
            frozenset(resolver(context.registry))
            if context.registry is not None
            else frozenset()
        )
        if _plain(value) not in allowed:
            listing = ", ".join(sorted(allowed))
            return RuleOutcome.violated(f"{_plain(value)!r} is not one of [{listing}]")
        return RuleOutcome.ok()

    return check


BUILTIN_RULES: dict[str, Callable[..., RuleCheck]] = {
    "required": required,
    "min": numeric_min,
    "gt": numeric_gt,
    "max": numeric_max,
    "min_length": min_length,
    "max_length": max_length,
    "format": string_format,
    "one_of": one_of,
    "one_of_dynamic": one_of_dynamic,
}
