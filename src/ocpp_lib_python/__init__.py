"""OCPP 消息定义与校验核心：功能注册表和声明式约束校验。

ocpp-lib-python: message definitions and validation for OCPP-style
Central System <-> Charge Point messaging.

Each feature binds an action name to one request and one confirmation
payload type. Payload fields declare their constraint rules, and the
validator checks them, including rules whose legal values come from the
live feature registry.
"""
from __future__ import annotations

from ocpp_lib_python.codec import PayloadCodec
from ocpp_lib_python.config import OcppLibConfig
from ocpp_lib_python.dispatch import CallError, MessageDispatcher, OutboundMessage
from ocpp_lib_python.errors import (
    DecodeError,
    DuplicateActionError,
    DuplicateRuleError,
    InitializationError,
    OcppLibError,
    RegistrySealedError,
    UnknownActionError,
    UnregisteredRuleError,
    ValidationError,
)
from ocpp_lib_python.feature import Feature, FeatureDescriptor, Initiator, MessageKind
from ocpp_lib_python.registry import FeatureRegistry, build_registry
from ocpp_lib_python.rules import RuleCatalog, RuleRef, Rules, build_rule_catalog, rule
from ocpp_lib_python.schema import FieldType, Payload, PayloadField, PayloadSchema
from ocpp_lib_python.validation import (
    PayloadValidator,
    ValidationResult,
    Violation,
    validate,
)

__version__ = "0.3.0"

__all__ = [
    # Dispatch
    "CallError",
    # Errors
    "DecodeError",
    "DuplicateActionError",
    "DuplicateRuleError",
    # Features
    "Feature",
    "FeatureDescriptor",
    "FeatureRegistry",
    "FieldType",
    "InitializationError",
    "Initiator",
    "MessageDispatcher",
    "MessageKind",
    # Config
    "OcppLibConfig",
    "OcppLibError",
    "OutboundMessage",
    # Schema
    "Payload",
    "PayloadCodec",
    "PayloadField",
    "PayloadSchema",
    "PayloadValidator",
    "RegistrySealedError",
    # Rules
    "RuleCatalog",
    "RuleRef",
    "Rules",
    "UnknownActionError",
    "UnregisteredRuleError",
    "ValidationError",
    # Validation
    "ValidationResult",
    "Violation",
    # Version
    "__version__",
    "build_registry",
    "build_rule_catalog",
    "rule",
    "validate",
]
