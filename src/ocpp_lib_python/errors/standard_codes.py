"""OCPP-J 标准错误码：CallError 消息中使用的错误码定义。

OCPP-J standard call error codes.

Defines the error codes a CALLERROR frame may carry, with a short
description of when each applies.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StandardErrorCode:
    """OCPP-J call error code.

    Each code has the exact wire string, a category and a description.
    """

    code: str
    """Wire value (e.g., 'NotImplemented')."""

    category: str
    """Error category: 'dispatch', 'payload', 'server' or 'unknown'."""

    description: str
    """Brief description of the error."""


NOT_IMPLEMENTED = StandardErrorCode(
    code="NotImplemented",
    category="dispatch",
    description="Requested action is not known by receiver.",
)
NOT_SUPPORTED = StandardErrorCode(
    code="NotSupported",
    category="dispatch",
    description="Requested action is recognized but not supported by the receiver.",
)
INTERNAL_ERROR = StandardErrorCode(
    code="InternalError",
    category="server",
    description="An internal error occurred and the receiver was not able to process the requested action successfully.",
)
PROTOCOL_ERROR = StandardErrorCode(
    code="ProtocolError",
    category="payload",
    description="Payload for action is incomplete.",
)
SECURITY_ERROR = StandardErrorCode(
    code="SecurityError",
    category="server",
    description="During the processing of action a security issue occurred preventing receiver from completing the action successfully.",
)
FORMATION_VIOLATION = StandardErrorCode(
    code="FormationViolation",
    category="payload",
    description="Payload for action is syntactically incorrect or not conform the PDU structure for action.",
)
PROPERTY_CONSTRAINT_VIOLATION = StandardErrorCode(
    code="PropertyConstraintViolation",
    category="payload",
    description="Payload is syntactically correct but at least one field contains an invalid value.",
)
OCCURENCE_CONSTRAINT_VIOLATION = StandardErrorCode(
    code="OccurenceConstraintViolation",
    category="payload",
    description="Payload for action is syntactically correct but at least one of the fields violates occurence constraints.",
)
TYPE_CONSTRAINT_VIOLATION = StandardErrorCode(
    code="TypeConstraintViolation",
    category="payload",
    description="Payload for action is syntactically correct but at least one of the fields violates data type constraints.",
)
GENERIC_ERROR = StandardErrorCode(
    code="GenericError",
    category="unknown",
    description="Any other error not covered by the previous ones.",
)

STANDARD_ERROR_CODES: dict[str, StandardErrorCode] = {
    sec.code: sec
    for sec in (
        NOT_IMPLEMENTED,
        NOT_SUPPORTED,
        INTERNAL_ERROR,
        PROTOCOL_ERROR,
        SECURITY_ERROR,
        FORMATION_VIOLATION,
        PROPERTY_CONSTRAINT_VIOLATION,
        OCCURENCE_CONSTRAINT_VIOLATION,
        TYPE_CONSTRAINT_VIOLATION,
        GENERIC_ERROR,
    )
}


def from_name(name: str) -> StandardErrorCode:
    """Get the StandardErrorCode by its wire value.

    Args:
        name: Error code string (e.g., 'FormationViolation').

    Returns:
        The StandardErrorCode instance.

    Raises:
        KeyError: If the name is not a valid OCPP-J error code.
    """
    code = STANDARD_ERROR_CODES.get(name)
    if code is None:
        raise KeyError(f"Unknown call error code: {name!r}")
    return code
