"""错误分类模块：将库内错误和约束违规映射到 OCPP-J 标准错误码。

Error classification for the protocol layer.

Maps library exceptions and constraint violations onto the OCPP-J call
error codes so the caller can answer with a CALLERROR frame instead of
dropping the connection.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ocpp_lib_python.errors.standard_codes import StandardErrorCode
    from ocpp_lib_python.validation import Violation


class ErrorClass(str, Enum):
    """Standard error classification, one member per OCPP-J error code."""

    NOT_IMPLEMENTED = "NotImplemented"
    NOT_SUPPORTED = "NotSupported"
    INTERNAL_ERROR = "InternalError"
    PROTOCOL_ERROR = "ProtocolError"
    SECURITY_ERROR = "SecurityError"
    FORMATION_VIOLATION = "FormationViolation"
    PROPERTY_CONSTRAINT_VIOLATION = "PropertyConstraintViolation"
    OCCURENCE_CONSTRAINT_VIOLATION = "OccurenceConstraintViolation"
    TYPE_CONSTRAINT_VIOLATION = "TypeConstraintViolation"
    GENERIC_ERROR = "GenericError"

    @property
    def standard_code(self) -> StandardErrorCode:
        """Return the StandardErrorCode for this error class."""
        from ocpp_lib_python.errors.standard_codes import from_name

        return from_name(self.value)


# Decoder error types that mean the PDU structure itself is wrong
_FORMATION_ERROR_TYPES: frozenset[str] = frozenset({
    "json_invalid",
    "json_type",
    "model_type",
    "model_attributes_type",
    "extra_forbidden",
})

# Rules whose violation means a field is missing rather than wrong
_OCCURENCE_RULES: frozenset[str] = frozenset({"required"})


def classify_violation(violation: Violation) -> ErrorClass:
    """Classify a single constraint violation.

    Args:
        violation: The violation to classify

    Returns:
        OCCURENCE_CONSTRAINT_VIOLATION for missing fields,
        PROPERTY_CONSTRAINT_VIOLATION otherwise
    """
    if violation.rule in _OCCURENCE_RULES:
        return ErrorClass.OCCURENCE_CONSTRAINT_VIOLATION
    return ErrorClass.PROPERTY_CONSTRAINT_VIOLATION


def classify_decode_errors(errors: list[dict], malformed: bool = False) -> ErrorClass:
    """Classify decoder failures.

    Args:
        errors: Error entries reported by the decoder
        malformed: Whether the raw input was not well-formed JSON

    Returns:
        FORMATION_VIOLATION for structural faults, TYPE_CONSTRAINT_VIOLATION
        for values of the wrong type
    """
    if malformed:
        return ErrorClass.FORMATION_VIOLATION
    for error in errors:
        if error.get("type") in _FORMATION_ERROR_TYPES:
            return ErrorClass.FORMATION_VIOLATION
    return ErrorClass.TYPE_CONSTRAINT_VIOLATION


def classify_exception(exc: BaseException) -> ErrorClass:
    """Classify any exception raised while handling a message.

    Args:
        exc: The exception to classify

    Returns:
        ErrorClass to report to the peer
    """
    from ocpp_lib_python.errors.base import (
        DecodeError,
        UnknownActionError,
        ValidationError,
    )

    if isinstance(exc, UnknownActionError):
        return ErrorClass.NOT_IMPLEMENTED
    if isinstance(exc, DecodeError):
        return classify_decode_errors(exc.errors, malformed=exc.malformed)
    if isinstance(exc, ValidationError):
        if not exc.violations:
            return ErrorClass.PROTOCOL_ERROR
        classes = {classify_violation(v) for v in exc.violations}
        # A missing field takes precedence over a bad value
        if ErrorClass.OCCURENCE_CONSTRAINT_VIOLATION in classes:
            return ErrorClass.OCCURENCE_CONSTRAINT_VIOLATION
        return ErrorClass.PROPERTY_CONSTRAINT_VIOLATION
    return ErrorClass.INTERNAL_ERROR
