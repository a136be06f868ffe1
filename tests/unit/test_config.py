"""Tests for runtime configuration."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from ocpp_lib_python import InitializationError, OcppLibConfig
from ocpp_lib_python.telemetry import LogLevel, OcppLibLogger, get_logger


class TestOcppLibConfig:
    """Tests for OcppLibConfig construction."""

    def test_defaults(self) -> None:
        config = OcppLibConfig()
        assert config.strict_decode is False
        assert config.log_level is LogLevel.WARNING
        assert config.log_format == "text"
        assert config.allow_late_registration is False

    def test_log_level_coerced(self) -> None:
        config = OcppLibConfig(log_level="debug")  # type: ignore[arg-type]
        assert config.log_level is LogLevel.DEBUG

    def test_invalid_log_level(self) -> None:
        with pytest.raises(InitializationError):
            OcppLibConfig(log_level="LOUD")  # type: ignore[arg-type]

    def test_invalid_log_format(self) -> None:
        with pytest.raises(InitializationError):
            OcppLibConfig(log_format="xml")

    def test_from_mapping_ignores_unknown_keys(self) -> None:
        config = OcppLibConfig.from_mapping(
            {"strict_decode": "yes", "unknown": 1, "log_format": "json"}
        )
        assert config.strict_decode is True
        assert config.log_format == "json"


class TestFromEnv:
    """Tests for environment and file loading."""

    def test_empty_environment(self) -> None:
        assert OcppLibConfig.from_env({}) == OcppLibConfig()

    def test_env_overrides(self) -> None:
        config = OcppLibConfig.from_env(
            {
                "OCPP_LIB_STRICT_DECODE": "true",
                "OCPP_LIB_LOG_LEVEL": "info",
                "OCPP_LIB_LOG_FORMAT": "JSON",
                "OCPP_LIB_ALLOW_LATE_REGISTRATION": "0",
            }
        )
        assert config.strict_decode is True
        assert config.log_level is LogLevel.INFO
        assert config.log_format == "json"
        assert config.allow_late_registration is False

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "ocpp.yaml"
        path.write_text(
            "strict_decode: true\nlog_level: ERROR\nallow_late_registration: true\n"
        )
        config = OcppLibConfig.from_env({"OCPP_LIB_CONFIG": str(path)})
        assert config.strict_decode is True
        assert config.log_level is LogLevel.ERROR
        assert config.allow_late_registration is True

    def test_env_wins_over_file(self, tmp_path: Path) -> None:
        path = tmp_path / "ocpp.yaml"
        path.write_text("log_level: ERROR\n")
        config = OcppLibConfig.from_env(
            {"OCPP_LIB_CONFIG": str(path), "OCPP_LIB_LOG_LEVEL": "DEBUG"}
        )
        assert config.log_level is LogLevel.DEBUG

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InitializationError):
            OcppLibConfig.from_file(tmp_path / "absent.yaml")

    def test_file_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(InitializationError):
            OcppLibConfig.from_file(path)

    def test_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OCPP_LIB_STRICT_DECODE", "1")
        monkeypatch.delenv("OCPP_LIB_CONFIG", raising=False)
        assert OcppLibConfig.from_env().strict_decode is True


class TestConfigureLogging:
    """Tests for applying logging settings."""

    def test_configure_json_logging(self) -> None:
        stream = io.StringIO()
        logger = get_logger("ocpp_lib_python.tests.config")
        try:
            OcppLibConfig(log_level=LogLevel.INFO, log_format="json").configure_logging(
                stream
            )
            logger.info("Feature registry sealed", features=8)
            record = json.loads(stream.getvalue().strip().splitlines()[-1])
            assert record["message"] == "Feature registry sealed"
            assert record["features"] == 8
            assert record["level"] == "INFO"
        finally:
            OcppLibLogger.configure(level=LogLevel.WARNING, format="text")
