"""
OCPP 1.6 feature catalog.

Payload models, enumerations and feature definitions, plus the bootstrap
functions that build a populated rule catalog and feature registry::

    registry = build_default_registry()
    registry.lookup("GetDiagnostics").request_type  # GetDiagnosticsRequest
"""

from __future__ import annotations

from ocpp_lib_python.config import OcppLibConfig
from ocpp_lib_python.feature import Feature
from ocpp_lib_python.registry import FeatureRegistry, build_registry
from ocpp_lib_python.rules import RuleCatalog, build_rule_catalog
from ocpp_lib_python.v16.boot_notification import (
    BOOT_NOTIFICATION,
    BOOT_NOTIFICATION_ACTION,
    BootNotificationConfirmation,
    BootNotificationRequest,
    new_boot_notification_confirmation,
    new_boot_notification_request,
)
from ocpp_lib_python.v16.diagnostics_status_notification import (
    DIAGNOSTICS_STATUS_NOTIFICATION,
    DIAGNOSTICS_STATUS_NOTIFICATION_ACTION,
    DiagnosticsStatusNotificationConfirmation,
    DiagnosticsStatusNotificationRequest,
    new_diagnostics_status_notification_confirmation,
    new_diagnostics_status_notification_request,
)
from ocpp_lib_python.v16.enums import (
    ChargePointErrorCode,
    ChargePointStatus,
    DiagnosticsStatus,
    FirmwareStatus,
    Location,
    Measurand,
    MessageTrigger,
    Phase,
    ReadingContext,
    RegistrationStatus,
    TriggerMessageStatus,
    UnitOfMeasure,
    ValueFormat,
)
from ocpp_lib_python.v16.firmware_status_notification import (
    FIRMWARE_STATUS_NOTIFICATION,
    FIRMWARE_STATUS_NOTIFICATION_ACTION,
    FirmwareStatusNotificationConfirmation,
    FirmwareStatusNotificationRequest,
    new_firmware_status_notification_confirmation,
    new_firmware_status_notification_request,
)
from ocpp_lib_python.v16.get_diagnostics import (
    GET_DIAGNOSTICS,
    GET_DIAGNOSTICS_ACTION,
    GetDiagnosticsConfirmation,
    GetDiagnosticsRequest,
    new_get_diagnostics_confirmation,
    new_get_diagnostics_request,
)
from ocpp_lib_python.v16.heartbeat import (
    HEARTBEAT,
    HEARTBEAT_ACTION,
    HeartbeatConfirmation,
    HeartbeatRequest,
    new_heartbeat_confirmation,
    new_heartbeat_request,
)
from ocpp_lib_python.v16.meter_values import (
    METER_VALUES,
    METER_VALUES_ACTION,
    MeterValue,
    MeterValuesConfirmation,
    MeterValuesRequest,
    SampledValue,
    new_meter_values_confirmation,
    new_meter_values_request,
)
from ocpp_lib_python.v16.rules import ENUM_RULES, register_rules, triggerable_actions
from ocpp_lib_python.v16.status_notification import (
    STATUS_NOTIFICATION,
    STATUS_NOTIFICATION_ACTION,
    StatusNotificationConfirmation,
    StatusNotificationRequest,
    new_status_notification_confirmation,
    new_status_notification_request,
)
from ocpp_lib_python.v16.trigger_message import (
    TRIGGER_MESSAGE,
    TRIGGER_MESSAGE_ACTION,
    TriggerMessageConfirmation,
    TriggerMessageRequest,
    new_trigger_message_confirmation,
    new_trigger_message_request,
)

FEATURES: tuple[Feature, ...] = (
    BOOT_NOTIFICATION,
    DIAGNOSTICS_STATUS_NOTIFICATION,
    FIRMWARE_STATUS_NOTIFICATION,
    GET_DIAGNOSTICS,
    HEARTBEAT,
    METER_VALUES,
    STATUS_NOTIFICATION,
    TRIGGER_MESSAGE,
)


def build_catalog() -> RuleCatalog:
    """Create a rule catalog with the built-in and OCPP 1.6 rules."""
    return register_rules(build_rule_catalog())


def build_default_registry(
    config: OcppLibConfig | None = None,
    *,
    catalog: RuleCatalog | None = None,
    seal: bool = True,
) -> FeatureRegistry:
    """Build a registry holding every OCPP 1.6 feature of this package.

    Args:
        config: Library config (default: read from the environment)
        catalog: Rule catalog (default: :func:`build_catalog`)
        seal: Seal the registry once populated

    Returns:
        Populated FeatureRegistry

    Raises:
        InitializationError: If the catalog or the features are inconsistent
    """
    config = config or OcppLibConfig.from_env()
    return build_registry(
        FEATURES,
        catalog or build_catalog(),
        seal=seal,
        allow_late_registration=config.allow_late_registration,
    )


__all__ = [
    "BOOT_NOTIFICATION",
    "BOOT_NOTIFICATION_ACTION",
    "BootNotificationConfirmation",
    "BootNotificationRequest",
    "ChargePointErrorCode",
    "ChargePointStatus",
    "DIAGNOSTICS_STATUS_NOTIFICATION",
    "DIAGNOSTICS_STATUS_NOTIFICATION_ACTION",
    "DiagnosticsStatus",
    "DiagnosticsStatusNotificationConfirmation",
    "DiagnosticsStatusNotificationRequest",
    "ENUM_RULES",
    "FEATURES",
    "FIRMWARE_STATUS_NOTIFICATION",
    "FIRMWARE_STATUS_NOTIFICATION_ACTION",
    "FirmwareStatus",
    "FirmwareStatusNotificationConfirmation",
    "FirmwareStatusNotificationRequest",
    "GET_DIAGNOSTICS",
    "GET_DIAGNOSTICS_ACTION",
    "GetDiagnosticsConfirmation",
    "GetDiagnosticsRequest",
    "HEARTBEAT",
    "HEARTBEAT_ACTION",
    "HeartbeatConfirmation",
    "HeartbeatRequest",
    "Location",
    "METER_VALUES",
    "METER_VALUES_ACTION",
    "Measurand",
    "MessageTrigger",
    "MeterValue",
    "MeterValuesConfirmation",
    "MeterValuesRequest",
    "Phase",
    "ReadingContext",
    "RegistrationStatus",
    "STATUS_NOTIFICATION",
    "STATUS_NOTIFICATION_ACTION",
    "SampledValue",
    "StatusNotificationConfirmation",
    "StatusNotificationRequest",
    "TRIGGER_MESSAGE",
    "TRIGGER_MESSAGE_ACTION",
    "TriggerMessageConfirmation",
    "TriggerMessageRequest",
    "TriggerMessageStatus",
    "UnitOfMeasure",
    "ValueFormat",
    "build_catalog",
    "build_default_registry",
    "new_boot_notification_confirmation",
    "new_boot_notification_request",
    "new_diagnostics_status_notification_confirmation",
    "new_diagnostics_status_notification_request",
    "new_firmware_status_notification_confirmation",
    "new_firmware_status_notification_request",
    "new_get_diagnostics_confirmation",
    "new_get_diagnostics_request",
    "new_heartbeat_confirmation",
    "new_heartbeat_request",
    "new_meter_values_confirmation",
    "new_meter_values_request",
    "new_status_notification_confirmation",
    "new_status_notification_request",
    "new_trigger_message_confirmation",
    "new_trigger_message_request",
    "register_rules",
    "triggerable_actions",
]
