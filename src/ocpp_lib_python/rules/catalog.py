"""
Rule catalog for named constraint rules.

Provides rule registration and binding of schema rule references.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any

from ocpp_lib_python.errors import (
    DuplicateRuleError,
    ErrorContext,
    InitializationError,
    UnregisteredRuleError,
)
from ocpp_lib_python.rules.base import BoundRule, RuleCheck, RuleFactory, RuleRef
from ocpp_lib_python.rules.builtin import (
    BUILTIN_RULES,
    EnumResolver,
    one_of,
    one_of_dynamic,
)
from ocpp_lib_python.telemetry import get_logger

logger = get_logger("ocpp_lib_python.rules")


class RuleCatalog:
    """Catalog of named rule factories.

    Populated once during initialization. Registering the same name twice
    fails instead of overwriting.

    Example:
        >>> catalog = build_rule_catalog()
        >>> catalog.register_enum("trigger_message_status", TriggerMessageStatus)
        >>> bound = catalog.bind(RuleRef("max_length", (255,)))
    """

    def __init__(self) -> None:
        """Initialize an empty catalog."""
        self._factories: dict[str, RuleFactory] = {}

    def register(self, name: str, factory: RuleFactory) -> RuleCatalog:
        """Register a rule factory.

        Args:
            name: Rule name referenced by schemas
            factory: Callable taking the reference arguments and returning a check

        Returns:
            Self for chaining

        Raises:
            DuplicateRuleError: If the name is already registered
        """
        if not name:
            raise ValueError("rule name must be non-empty")
        if name in self._factories:
            raise DuplicateRuleError(name)

        self._factories[name] = factory
        logger.debug("Constraint rule registered", rule=name)
        return self

    def register_check(self, name: str, check: RuleCheck) -> RuleCatalog:
        """Register a rule that takes no arguments."""

        def factory() -> RuleCheck:
            return check

        return self.register(name, factory)

    def register_enum(
        self, name: str, values: type[Enum] | Iterable[Any]
    ) -> RuleCatalog:
        """Register a closed enumeration as a named rule.

        Args:
            name: Rule name
            values: Enum class or iterable of legal values
        """
        members = tuple(values)
        return self.register_check(name, one_of(*members))

    def register_dynamic(self, name: str, resolver: EnumResolver) -> RuleCatalog:
        """Register a dynamic enumeration resolved from the registry.

        Args:
            name: Rule name
            resolver: Called with the registry at every evaluation
        """
        return self.register_check(name, one_of_dynamic(resolver))

    def has(self, name: str) -> bool:
        """Check if a rule name is registered."""
        return name in self._factories

    def names(self) -> list[str]:
        """Get registered rule names in registration order."""
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def bind(self, ref: RuleRef, field: str | None = None) -> BoundRule:
        """Resolve a rule reference into a bound rule.

        Args:
            ref: Rule reference from a schema
            field: Field the reference is attached to, for error context

        Returns:
            BoundRule ready for evaluation

        Raises:
            UnregisteredRuleError: If the rule name is unknown
            InitializationError: If the factory rejects the arguments
        """
        factory = self._factories.get(ref.name)
        if factory is None:
            raise UnregisteredRuleError(ref.name, field=field)

        try:
            check = factory(*ref.args)
        except (TypeError, ValueError) as e:
            raise InitializationError(
                f"Invalid arguments for rule {ref.name!r}: {e}",
                ErrorContext(
                    source="rules",
                    field_path=field,
                    details={"rule": ref.name, "args": list(ref.args)},
                ),
            ) from e

        return BoundRule(name=ref.name, args=ref.args, check=check)


def build_rule_catalog() -> RuleCatalog:
    """Create a catalog holding every built-in rule kind.

    Returns:
        New RuleCatalog
    """
    catalog = RuleCatalog()
    for name, factory in BUILTIN_RULES.items():
        catalog.register(name, factory)
    return catalog
