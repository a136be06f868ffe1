"""Tests for the payload codec."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from ocpp_lib_python import DecodeError, OcppLibConfig, PayloadCodec
from ocpp_lib_python.errors import ErrorClass, classify_exception
from ocpp_lib_python.v16 import (
    GetDiagnosticsRequest,
    HeartbeatConfirmation,
    MeterValuesRequest,
    TriggerMessageConfirmation,
)


class TestDecode:
    """Tests for PayloadCodec.decode."""

    def test_decode_mapping(self) -> None:
        codec = PayloadCodec()
        request = codec.decode(
            GetDiagnosticsRequest,
            {"location": "ftp://host/", "retries": 3, "retryInterval": 60},
        )
        assert isinstance(request, GetDiagnosticsRequest)
        assert request.retries == 3
        assert request.retry_interval == 60

    def test_decode_json_text(self) -> None:
        codec = PayloadCodec()
        conf = codec.decode(TriggerMessageConfirmation, '{"status": "Accepted"}')
        assert conf.status == "Accepted"

    def test_decode_bytes(self) -> None:
        codec = PayloadCodec()
        conf = codec.decode(
            HeartbeatConfirmation, b'{"currentTime": "2024-05-01T10:00:00Z"}'
        )
        assert conf.current_time == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    def test_missing_fields_decode(self) -> None:
        """Missing fields are left for validation to report."""
        request = PayloadCodec().decode(GetDiagnosticsRequest, {})
        assert request.location is None

    def test_out_of_vocabulary_value_decodes(self) -> None:
        conf = PayloadCodec().decode(TriggerMessageConfirmation, {"status": "Maybe"})
        assert conf.status == "Maybe"

    def test_nested_decode(self) -> None:
        request = PayloadCodec().decode(
            MeterValuesRequest,
            {
                "connectorId": 1,
                "meterValue": [
                    {
                        "timestamp": "2024-05-01T10:00:00Z",
                        "sampledValue": [{"value": "42", "unit": "Wh"}],
                    }
                ],
            },
        )
        assert request.meter_value is not None
        assert request.meter_value[0].sampled_value is not None
        assert request.meter_value[0].sampled_value[0].value == "42"

    def test_malformed_json(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            PayloadCodec().decode(GetDiagnosticsRequest, "{not json", action="GetDiagnostics")
        error = exc_info.value
        assert error.malformed
        assert error.action == "GetDiagnostics"
        assert classify_exception(error) is ErrorClass.FORMATION_VIOLATION

    def test_not_an_object(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            PayloadCodec().decode(GetDiagnosticsRequest, "[1, 2]")
        assert classify_exception(exc_info.value) is ErrorClass.FORMATION_VIOLATION

    def test_wrong_type(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            PayloadCodec().decode(GetDiagnosticsRequest, {"retries": "many"})
        error = exc_info.value
        assert not error.malformed
        assert error.errors[0]["loc"] == ("retries",)
        assert classify_exception(error) is ErrorClass.TYPE_CONSTRAINT_VIOLATION

    def test_unknown_keys_ignored_by_default(self) -> None:
        request = PayloadCodec().decode(
            GetDiagnosticsRequest, {"location": "ftp://host/", "vendorData": 1}
        )
        assert request.location == "ftp://host/"

    def test_unknown_keys_rejected_when_strict(self) -> None:
        codec = PayloadCodec(strict=True)
        assert codec.strict
        with pytest.raises(DecodeError) as exc_info:
            codec.decode(GetDiagnosticsRequest, {"location": "ftp://host/", "vendorData": 1})
        assert exc_info.value.errors[0]["type"] == "extra_forbidden"
        assert classify_exception(exc_info.value) is ErrorClass.FORMATION_VIOLATION

    def test_strict_accepts_field_names(self) -> None:
        codec = PayloadCodec(strict=True)
        request = codec.decode(GetDiagnosticsRequest, {"retry_interval": 5})
        assert request.retry_interval == 5

    def test_from_config(self) -> None:
        assert PayloadCodec.from_config(OcppLibConfig(strict_decode=True)).strict
        assert not PayloadCodec.from_config(OcppLibConfig()).strict


class TestDecodeTypes:
    """Wire values are never coerced across JSON types."""

    @pytest.mark.parametrize(
        "raw",
        [
            '{"location": "ftp://host/", "retries": "5"}',
            '{"location": "ftp://host/", "retries": true}',
            '{"location": "ftp://host/", "retries": 2.5}',
            '{"location": "ftp://host/", "retries": 2.0}',
            '{"location": "ftp://host/", "startTime": 0}',
            '{"location": 42}',
        ],
    )
    def test_wrong_json_type_rejected(self, raw: str) -> None:
        with pytest.raises(DecodeError) as exc_info:
            PayloadCodec().decode(GetDiagnosticsRequest, raw)
        assert classify_exception(exc_info.value) is ErrorClass.TYPE_CONSTRAINT_VIOLATION

    def test_mapping_checked_like_text(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            PayloadCodec().decode(
                GetDiagnosticsRequest, {"location": "ftp://host/", "retries": "5"}
            )
        assert exc_info.value.errors[0]["loc"] == ("retries",)
        assert classify_exception(exc_info.value) is ErrorClass.TYPE_CONSTRAINT_VIOLATION

    def test_timestamp_strings_accepted(self) -> None:
        request = PayloadCodec().decode(
            GetDiagnosticsRequest,
            {"location": "ftp://host/", "startTime": "2024-05-01T10:00:00Z"},
        )
        assert request.start_time == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    def test_mapping_with_datetime_values(self) -> None:
        start = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        request = PayloadCodec().decode(
            GetDiagnosticsRequest, {"location": "ftp://host/", "startTime": start}
        )
        assert request.start_time == start


class TestStopTimeAlias:
    """The diagnostics window end arrives as stopTime or endTime."""

    def test_end_time_accepted(self) -> None:
        request = PayloadCodec().decode(
            GetDiagnosticsRequest,
            '{"location": "ftp://host/", "endTime": "2024-05-01T10:00:00Z"}',
        )
        assert request.stop_time == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    def test_end_time_not_unknown_when_strict(self) -> None:
        request = PayloadCodec(strict=True).decode(
            GetDiagnosticsRequest,
            {"location": "ftp://host/", "endTime": "2024-05-01T10:00:00Z"},
        )
        assert request.stop_time is not None

    def test_encoded_as_stop_time(self) -> None:
        request = GetDiagnosticsRequest(
            location="ftp://host/",
            stop_time=datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc),
        )
        encoded = PayloadCodec().encode(request)
        assert "stopTime" in encoded
        assert "endTime" not in encoded


class TestEncode:
    """Tests for PayloadCodec.encode."""

    def test_wire_names_and_absent_fields(self) -> None:
        request = GetDiagnosticsRequest(location="ftp://host/", retry_interval=30)
        assert PayloadCodec().encode(request) == {
            "location": "ftp://host/",
            "retryInterval": 30,
        }

    def test_zero_is_kept(self) -> None:
        """Zero is a present value and is encoded."""
        request = GetDiagnosticsRequest(location="ftp://host/", retries=0)
        assert PayloadCodec().encode(request)["retries"] == 0

    def test_timestamps_as_iso(self) -> None:
        conf = HeartbeatConfirmation(
            current_time=datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        )
        encoded = PayloadCodec().encode(conf)
        assert encoded["currentTime"].startswith("2024-05-01T10:00:00")

    def test_encode_json(self) -> None:
        conf = TriggerMessageConfirmation(status="Accepted")
        assert json.loads(PayloadCodec().encode_json(conf)) == {"status": "Accepted"}
