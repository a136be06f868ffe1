"""
OCPP 1.6 named constraint rules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ocpp_lib_python.v16.enums import (
    ChargePointErrorCode,
    ChargePointStatus,
    DiagnosticsStatus,
    FirmwareStatus,
    Location,
    Measurand,
    Phase,
    ReadingContext,
    RegistrationStatus,
    TriggerMessageStatus,
    UnitOfMeasure,
    ValueFormat,
)

if TYPE_CHECKING:
    from ocpp_lib_python.registry import FeatureRegistry
    from ocpp_lib_python.rules import RuleCatalog

ENUM_RULES = {
    "trigger_message_status": TriggerMessageStatus,
    "registration_status": RegistrationStatus,
    "diagnostics_status": DiagnosticsStatus,
    "firmware_status": FirmwareStatus,
    "charge_point_status": ChargePointStatus,
    "charge_point_error_code": ChargePointErrorCode,
    "reading_context": ReadingContext,
    "value_format": ValueFormat,
    "measurand": Measurand,
    "phase": Phase,
    "location": Location,
    "unit_of_measure": UnitOfMeasure,
}


def triggerable_actions(registry: FeatureRegistry) -> list[str]:
    """Registered actions a TriggerMessage request may ask for.

    These are the charge point initiated features flagged as triggerable.
    """
    return [
        d.action_name
        for d in registry.descriptors()
        if d.triggerable and d.initiator.from_charge_point
    ]


def register_rules(catalog: RuleCatalog) -> RuleCatalog:
    """Register every OCPP 1.6 rule into ``catalog``.

    Raises:
        DuplicateRuleError: If one of the names is already taken
    """
    for name, values in ENUM_RULES.items():
        catalog.register_enum(name, values)
    catalog.register_dynamic("message_trigger", triggerable_actions)
    return catalog
