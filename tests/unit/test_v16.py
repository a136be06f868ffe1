"""Tests for the OCPP 1.6 feature catalog."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ocpp_lib_python import (
    DuplicateRuleError,
    FeatureRegistry,
    Initiator,
    OcppLibConfig,
    PayloadValidator,
    RegistrySealedError,
)
from ocpp_lib_python.rules import RuleCatalog
from ocpp_lib_python.v16 import (
    ENUM_RULES,
    FEATURES,
    HEARTBEAT,
    ChargePointErrorCode,
    ChargePointStatus,
    DiagnosticsStatus,
    FirmwareStatus,
    MessageTrigger,
    RegistrationStatus,
    UnitOfMeasure,
    build_catalog,
    build_default_registry,
    new_boot_notification_confirmation,
    new_boot_notification_request,
    new_diagnostics_status_notification_confirmation,
    new_diagnostics_status_notification_request,
    new_firmware_status_notification_confirmation,
    new_firmware_status_notification_request,
    new_get_diagnostics_confirmation,
    new_get_diagnostics_request,
    new_heartbeat_confirmation,
    new_heartbeat_request,
    new_meter_values_confirmation,
    new_meter_values_request,
    new_status_notification_confirmation,
    new_status_notification_request,
    new_trigger_message_confirmation,
    new_trigger_message_request,
    register_rules,
    triggerable_actions,
)
from ocpp_lib_python.v16.meter_values import MeterValue, SampledValue

NOW = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)


class TestCatalog:
    """Tests for the OCPP 1.6 rule catalog."""

    def test_enum_rules_registered(self, catalog: RuleCatalog) -> None:
        for name in ENUM_RULES:
            assert name in catalog
        assert "message_trigger" in catalog

    def test_register_rules_twice_fails(self) -> None:
        with pytest.raises(DuplicateRuleError):
            register_rules(build_catalog())

    def test_celsius_spellings(self) -> None:
        """Both spellings of the temperature unit are accepted."""
        values = {u.value for u in UnitOfMeasure}
        assert {"Celcius", "Celsius"} <= values


class TestDefaultRegistry:
    """Tests for build_default_registry."""

    def test_all_features_registered(self, sealed_registry: FeatureRegistry) -> None:
        assert len(sealed_registry) == len(FEATURES) == 8
        assert sealed_registry.sealed

    def test_triggerable_actions(self, sealed_registry: FeatureRegistry) -> None:
        assert set(triggerable_actions(sealed_registry)) == {m.value for m in MessageTrigger}

    def test_initiators(self, sealed_registry: FeatureRegistry) -> None:
        assert sealed_registry.lookup("TriggerMessage").initiator is Initiator.CENTRAL_SYSTEM
        assert sealed_registry.lookup("Heartbeat").initiator is Initiator.CHARGE_POINT

    def test_late_registration_from_config(self, catalog: RuleCatalog) -> None:
        strict = build_default_registry(OcppLibConfig(), catalog=catalog)
        with pytest.raises(RegistrySealedError):
            strict.unregister("Heartbeat")

        relaxed = build_default_registry(
            OcppLibConfig(allow_late_registration=True), catalog=catalog
        )
        assert relaxed.unregister("Heartbeat")
        relaxed.register(HEARTBEAT.describe(catalog))
        assert "Heartbeat" in relaxed


class TestHelpers:
    """Tests for the new_* payload constructors."""

    @pytest.fixture
    def validator(self, sealed_registry: FeatureRegistry) -> PayloadValidator:
        return PayloadValidator(sealed_registry)

    def test_request_helpers_produce_valid_payloads(
        self, validator: PayloadValidator
    ) -> None:
        requests = [
            new_boot_notification_request("Model-X", "Vendor"),
            new_diagnostics_status_notification_request(DiagnosticsStatus.UPLOADED),
            new_firmware_status_notification_request(FirmwareStatus.INSTALLED),
            new_get_diagnostics_request("ftp://diag.example.com/"),
            new_heartbeat_request(),
            new_meter_values_request(
                1,
                [MeterValue(timestamp=NOW, sampled_value=[SampledValue(value="5")])],
            ),
            new_status_notification_request(
                1, ChargePointErrorCode.NO_ERROR, ChargePointStatus.AVAILABLE
            ),
            new_trigger_message_request(MessageTrigger.HEARTBEAT),
        ]
        for request in requests:
            result = validator.validate_request(request)
            assert result.valid, (type(request).__name__, result.errors)

    def test_confirmation_helpers_produce_valid_payloads(
        self, validator: PayloadValidator
    ) -> None:
        confirmations = [
            new_boot_notification_confirmation(NOW, 300, RegistrationStatus.ACCEPTED),
            new_diagnostics_status_notification_confirmation(),
            new_firmware_status_notification_confirmation(),
            new_get_diagnostics_confirmation(),
            new_get_diagnostics_confirmation("diag-2024.zip"),
            new_heartbeat_confirmation(NOW),
            new_meter_values_confirmation(),
            new_status_notification_confirmation(),
            new_trigger_message_confirmation("Accepted"),
        ]
        for conf in confirmations:
            result = validator.validate_confirmation(conf)
            assert result.valid, (type(conf).__name__, result.errors)

    def test_optional_fields_set_afterwards(self) -> None:
        request = new_get_diagnostics_request("ftp://diag.example.com/")
        assert request.retries is None
        request.retries = 3
        assert request.retries == 3

    def test_trigger_request_stores_wire_value(self) -> None:
        request = new_trigger_message_request(MessageTrigger.METER_VALUES, 2)
        assert request.requested_message == "MeterValues"
        assert request.connector_id == 2
