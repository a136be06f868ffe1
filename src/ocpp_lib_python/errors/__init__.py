"""错误体系：提供与 OCPP-J 错误码对齐的结构化错误类型。

Error hierarchy for ocpp-lib-python.

Provides structured error types aligned with OCPP-J call error codes.
"""

from ocpp_lib_python.errors.base import (
    DecodeError,
    DuplicateActionError,
    DuplicateRuleError,
    ErrorContext,
    InitializationError,
    OcppLibError,
    RegistrySealedError,
    UnknownActionError,
    UnregisteredRuleError,
    ValidationError,
)
from ocpp_lib_python.errors.classification import (
    ErrorClass,
    classify_decode_errors,
    classify_exception,
    classify_violation,
)
from ocpp_lib_python.errors.standard_codes import (
    STANDARD_ERROR_CODES,
    StandardErrorCode,
    from_name,
)

__all__ = [
    "DecodeError",
    "DuplicateActionError",
    "DuplicateRuleError",
    # Classification
    "ErrorClass",
    "ErrorContext",
    "InitializationError",
    # Base errors
    "OcppLibError",
    "RegistrySealedError",
    "STANDARD_ERROR_CODES",
    "StandardErrorCode",
    "UnknownActionError",
    "UnregisteredRuleError",
    "ValidationError",
    "classify_decode_errors",
    "classify_exception",
    "classify_violation",
    "from_name",
]
