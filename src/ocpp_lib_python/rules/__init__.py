"""
Constraint rules - named, composable field-level validators.

This module handles:
- Rule outcome and context types
- Built-in rule kinds (required, bounds, length, format, enumerations)
- The rule catalog that schemas bind their references against
"""

from ocpp_lib_python.rules.base import (
    REQUIRED,
    BoundRule,
    RuleCheck,
    RuleContext,
    RuleFactory,
    RuleOutcome,
    RuleRef,
    Rules,
    parse_tag,
    rule,
)
from ocpp_lib_python.rules.builtin import (
    BUILTIN_RULES,
    FORMAT_CHECKERS,
    EnumResolver,
    is_date_time,
    is_uri,
    max_length,
    min_length,
    numeric_gt,
    numeric_max,
    numeric_min,
    one_of,
    one_of_dynamic,
    required,
    string_format,
)
from ocpp_lib_python.rules.catalog import RuleCatalog, build_rule_catalog

__all__ = [
    "BUILTIN_RULES",
    "BoundRule",
    "EnumResolver",
    "FORMAT_CHECKERS",
    "REQUIRED",
    # Catalog
    "RuleCatalog",
    "RuleCheck",
    "RuleContext",
    "RuleFactory",
    # Base types
    "RuleOutcome",
    "RuleRef",
    "Rules",
    "build_rule_catalog",
    "is_date_time",
    "is_uri",
    "max_length",
    "min_length",
    "numeric_gt",
    "numeric_max",
    "numeric_min",
    "one_of",
    "one_of_dynamic",
    "parse_tag",
    "required",
    "rule",
    "string_format",
]
