"""
Integration tests for the message dispatcher.

Exercises outbound preparation and inbound acceptance end to end, from
typed payloads to wire dictionaries and back, and the mapping of every
failure to an OCPP-J call error.
"""

from __future__ import annotations

import pytest

from ocpp_lib_python import (
    DecodeError,
    FeatureRegistry,
    MessageDispatcher,
    MessageKind,
    OcppLibConfig,
    PayloadCodec,
    UnknownActionError,
    ValidationError,
)
from ocpp_lib_python.v16 import (
    GetDiagnosticsConfirmation,
    GetDiagnosticsRequest,
    MeterValuesRequest,
    TriggerMessageConfirmation,
    new_get_diagnostics_request,
    new_trigger_message_request,
)


class TestOutbound:
    """Tests for preparing outbound messages."""

    def test_prepare_request(self, dispatcher: MessageDispatcher) -> None:
        request = new_get_diagnostics_request("ftp://diag.example.com/uploads")
        request.retries = 0
        out = dispatcher.prepare_request(request)
        assert out.action == "GetDiagnostics"
        assert out.kind is MessageKind.REQUEST
        assert out.payload == {"location": "ftp://diag.example.com/uploads", "retries": 0}

    def test_prepare_invalid_request(self, dispatcher: MessageDispatcher) -> None:
        with pytest.raises(ValidationError) as exc_info:
            dispatcher.prepare_request(GetDiagnosticsRequest(retries=-1))
        assert [v.rule for v in exc_info.value.violations] == ["required", "min"]
        assert exc_info.value.action == "GetDiagnostics"

    def test_prepare_confirmation(self, dispatcher: MessageDispatcher) -> None:
        out = dispatcher.prepare_confirmation(
            GetDiagnosticsConfirmation(file_name="diag.zip")
        )
        assert out.kind is MessageKind.CONFIRMATION
        assert out.payload == {"fileName": "diag.zip"}

    def test_prepare_trigger(self, dispatcher: MessageDispatcher) -> None:
        out = dispatcher.prepare_request(new_trigger_message_request("BootNotification"))
        assert out.payload == {"requestedMessage": "BootNotification"}


class TestInbound:
    """Tests for accepting inbound messages."""

    def test_accept_request(self, dispatcher: MessageDispatcher) -> None:
        payload = dispatcher.accept_request(
            "GetDiagnostics",
            '{"location": "ftp://diag.example.com/", "retryInterval": 30}',
        )
        assert isinstance(payload, GetDiagnosticsRequest)
        assert payload.retry_interval == 30

    def test_accept_confirmation(self, dispatcher: MessageDispatcher) -> None:
        payload = dispatcher.accept_confirmation("TriggerMessage", {"status": "Accepted"})
        assert isinstance(payload, TriggerMessageConfirmation)

    def test_accept_nested(self, dispatcher: MessageDispatcher) -> None:
        payload = dispatcher.accept_request(
            "MeterValues",
            {
                "connectorId": 1,
                "transactionId": 42,
                "meterValue": [
                    {
                        "timestamp": "2024-05-01T10:00:00Z",
                        "sampledValue": [
                            {"value": "1200", "measurand": "Power.Active.Import", "unit": "W"}
                        ],
                    }
                ],
            },
        )
        assert isinstance(payload, MeterValuesRequest)
        assert payload.transaction_id == 42

    def test_round_trip(self, dispatcher: MessageDispatcher) -> None:
        request = GetDiagnosticsRequest(
            location="ftp://diag.example.com/", retries=2, retry_interval=10
        )
        out = dispatcher.prepare_request(request)
        assert dispatcher.accept_request(out.action, out.payload) == request


class TestCallErrors:
    """Tests for mapping failures to call errors."""

    def _call_error(self, dispatcher: MessageDispatcher, action: str, raw: object):
        with pytest.raises(Exception) as exc_info:
            dispatcher.accept_request(action, raw)
        return exc_info.value, dispatcher.to_call_error(exc_info.value)

    def test_unknown_action(self, dispatcher: MessageDispatcher) -> None:
        exc, error = self._call_error(dispatcher, "Reset", {"type": "Hard"})
        assert isinstance(exc, UnknownActionError)
        assert error.code == "NotImplemented"
        assert error.details == {"action": "Reset"}

    def test_malformed_payload(self, dispatcher: MessageDispatcher) -> None:
        exc, error = self._call_error(dispatcher, "GetDiagnostics", "{broken")
        assert isinstance(exc, DecodeError)
        assert error.code == "FormationViolation"

    def test_wrong_type(self, dispatcher: MessageDispatcher) -> None:
        exc, error = self._call_error(
            dispatcher, "GetDiagnostics", {"location": "ftp://h/", "retries": "x"}
        )
        assert isinstance(exc, DecodeError)
        assert error.code == "TypeConstraintViolation"
        assert error.details["errors"][0]["loc"] == "retries"

    def test_missing_field(self, dispatcher: MessageDispatcher) -> None:
        exc, error = self._call_error(dispatcher, "GetDiagnostics", {"retries": 1})
        assert isinstance(exc, ValidationError)
        assert error.code == "OccurenceConstraintViolation"
        assert error.details["violations"] == [
            {"field": "location", "rule": "required", "reason": "field is required"}
        ]

    def test_bad_value(self, dispatcher: MessageDispatcher) -> None:
        with pytest.raises(ValidationError) as exc_info:
            dispatcher.accept_confirmation("TriggerMessage", {"status": "Maybe"})
        error = dispatcher.to_call_error(exc_info.value)
        assert error.code == "PropertyConstraintViolation"
        assert error.to_dict()["errorCode"] == "PropertyConstraintViolation"
        assert error.to_dict()["errorDetails"]["violations"][0]["field"] == "status"

    def test_internal_error(self, dispatcher: MessageDispatcher) -> None:
        error = dispatcher.to_call_error(RuntimeError("database password=hunter2"))
        assert error.code == "InternalError"
        assert "hunter2" not in error.description
        assert error.details == {}

    def test_strict_codec(self, dispatcher: MessageDispatcher) -> None:
        strict = MessageDispatcher(dispatcher.registry, PayloadCodec(strict=True))
        with pytest.raises(DecodeError) as exc_info:
            strict.accept_confirmation("TriggerMessage", {"status": "Accepted", "x": 1})
        assert strict.to_call_error(exc_info.value).code == "FormationViolation"


class TestDecodeConfig:
    """The strict decode setting reaches the dispatcher's codec."""

    RAW = '{"location": "ftp://diag.example.com/", "vendorData": 1}'

    def test_lenient_by_default(self, sealed_registry: FeatureRegistry) -> None:
        dispatcher = MessageDispatcher(sealed_registry, config=OcppLibConfig())
        assert not dispatcher.codec.strict
        request = dispatcher.accept_request("GetDiagnostics", self.RAW)
        assert request.location == "ftp://diag.example.com/"

    def test_strict_from_environment(
        self, sealed_registry: FeatureRegistry, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("OCPP_LIB_STRICT_DECODE", "1")
        dispatcher = MessageDispatcher(sealed_registry)
        assert dispatcher.codec.strict
        with pytest.raises(DecodeError) as exc_info:
            dispatcher.accept_request("GetDiagnostics", self.RAW)
        assert dispatcher.to_call_error(exc_info.value).code == "FormationViolation"

    def test_explicit_codec_wins(self, sealed_registry: FeatureRegistry) -> None:
        dispatcher = MessageDispatcher(
            sealed_registry,
            codec=PayloadCodec(),
            config=OcppLibConfig(strict_decode=True),
        )
        assert not dispatcher.codec.strict

    def test_string_retries_is_type_violation(self, dispatcher: MessageDispatcher) -> None:
        with pytest.raises(DecodeError) as exc_info:
            dispatcher.accept_request(
                "GetDiagnostics", '{"location": "ftp://diag.example.com/", "retries": "5"}'
            )
        assert dispatcher.to_call_error(exc_info.value).code == "TypeConstraintViolation"
