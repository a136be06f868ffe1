"""错误基类：提供分层错误体系和结构化错误上下文。

Base error classes for ocpp-lib-python.

Provides a layered error hierarchy:
- OcppLibError: Base class for all library errors
- InitializationError: Startup-time faults (registry and rule catalog setup)
- DuplicateActionError / DuplicateRuleError / UnregisteredRuleError /
  RegistrySealedError: specific initialization faults
- UnknownActionError: A peer referenced an action that is not implemented
- DecodeError: Raw payload could not be turned into a typed payload
- ValidationError: A typed payload violated one or more constraint rules
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ocpp_lib_python.validation import Violation


@dataclass
class ErrorContext:
    """Structured error context for diagnostics.

    Provides actionable information for debugging and error handling.
    """

    field_path: str | None = None
    """Path to the problematic field (e.g., 'meterValue[0].timestamp')"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    source: str | None = None
    """Error source (e.g., 'registry', 'rules', 'codec', 'validation')"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.field_path:
            parts.append(f"at '{self.field_path}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class OcppLibError(Exception):
    """Base class for all ocpp-lib-python errors.

    All errors from this library inherit from this class, making it easy
    to catch all library errors with a single except clause.

    Attributes:
        message: Human-readable error message
        context: Optional structured error context
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message."""
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def with_hint(self, hint: str) -> OcppLibError:
        """Add a hint to this error."""
        self.context.hint = hint
        return self


class InitializationError(OcppLibError):
    """Error raised while populating the rule catalog or feature registry.

    These are fatal to startup: the process bootstrap must not continue
    with a partially configured registry.
    """


class DuplicateActionError(InitializationError):
    """Two features claim the same action name."""

    def __init__(self, action: str, context: ErrorContext | None = None) -> None:
        ctx = context or ErrorContext(source="registry")
        ctx.details["action"] = action
        super().__init__(f"Feature already registered: {action}", ctx)
        self.action = action


class DuplicateRuleError(InitializationError):
    """A constraint rule name was registered twice."""

    def __init__(self, rule: str, context: ErrorContext | None = None) -> None:
        ctx = context or ErrorContext(source="rules")
        ctx.details["rule"] = rule
        super().__init__(f"Constraint rule already registered: {rule}", ctx)
        self.rule = rule


class UnregisteredRuleError(InitializationError):
    """A schema references a constraint rule name that was never registered."""

    def __init__(
        self,
        rule: str,
        context: ErrorContext | None = None,
        *,
        field: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="rules")
        ctx.details["rule"] = rule
        if field:
            ctx.field_path = field
        super().__init__(f"Unknown constraint rule: {rule}", ctx)
        self.rule = rule
        self.field = field


class RegistrySealedError(InitializationError):
    """The registry was modified after its population phase ended."""

    def __init__(self, action: str, context: ErrorContext | None = None) -> None:
        ctx = context or ErrorContext(
            source="registry",
            hint="create the registry with allow_late_registration=True",
        )
        ctx.details["action"] = action
        super().__init__(f"Registry is sealed, cannot modify {action}", ctx)
        self.action = action


class UnknownActionError(OcppLibError):
    """Lookup of an action name that no registered feature implements.

    Recoverable: the protocol layer usually answers with a
    ``NotImplemented`` call error instead of dropping the connection.
    """

    def __init__(self, action: str, context: ErrorContext | None = None) -> None:
        ctx = context or ErrorContext(source="registry")
        ctx.details["action"] = action
        super().__init__(f"Unknown action: {action}", ctx)
        self.action = action


class DecodeError(OcppLibError):
    """Raw payload data could not be decoded into the expected payload type.

    Decode failures never reach validation.

    Attributes:
        action: Action name the payload was tagged with
        errors: Underlying decoder error entries
        malformed: True when the input was not even well-formed JSON
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        action: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        malformed: bool = False,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="codec")
        if action:
            ctx.details["action"] = action
        super().__init__(message, ctx)
        self.action = action
        self.errors = errors or []
        self.malformed = malformed
        self.__cause__ = cause


class ValidationError(OcppLibError):
    """A payload violated one or more constraint rules.

    Attributes:
        violations: Ordered violations, in field declaration order
        action: Action name of the offending payload, if known
    """

    def __init__(
        self,
        message: str,
        violations: tuple[Violation, ...] | list[Violation],
        context: ErrorContext | None = None,
        *,
        action: str | None = None,
    ) -> None:
        violations = tuple(violations)
        ctx = context or ErrorContext(source="validation")
        if violations:
            ctx.field_path = violations[0].field
        if action:
            ctx.details["action"] = action
        super().__init__(message, ctx)
        self.violations = violations
        self.action = action
