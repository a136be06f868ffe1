"""
Runtime configuration.

Settings come from keyword arguments, an optional YAML file and
``OCPP_LIB_*`` environment variables, in increasing order of precedence:

- OCPP_LIB_CONFIG: path to a YAML file with the keys below
- OCPP_LIB_STRICT_DECODE: reject unknown payload keys ("1", "true", "yes")
- OCPP_LIB_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
- OCPP_LIB_LOG_FORMAT: "json" or "text"
- OCPP_LIB_ALLOW_LATE_REGISTRATION: permit registry writes after sealing
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from ocpp_lib_python.errors import ErrorContext, InitializationError
from ocpp_lib_python.telemetry import LogLevel, OcppLibLogger

_TRUE_VALUES = ("1", "true", "yes", "on")

_ENV_KEYS: dict[str, str] = {
    "strict_decode": "OCPP_LIB_STRICT_DECODE",
    "log_level": "OCPP_LIB_LOG_LEVEL",
    "log_format": "OCPP_LIB_LOG_FORMAT",
    "allow_late_registration": "OCPP_LIB_ALLOW_LATE_REGISTRATION",
}

_LOG_FORMATS = ("json", "text")


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class OcppLibConfig:
    """Library settings.

    Attributes:
        strict_decode: Reject payload keys that are not declared fields
        log_level: Minimum level emitted by library loggers
        log_format: 'json' or 'text'
        allow_late_registration: Permit registry writes after sealing
    """

    strict_decode: bool = False
    log_level: LogLevel = LogLevel.WARNING
    log_format: str = "text"
    allow_late_registration: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.log_level, LogLevel):
            try:
                level = LogLevel(str(self.log_level).upper())
            except ValueError as e:
                raise InitializationError(
                    f"Invalid log level: {self.log_level!r}",
                    ErrorContext(source="config", field_path="log_level"),
                ) from e
            object.__setattr__(self, "log_level", level)
        if self.log_format not in _LOG_FORMATS:
            raise InitializationError(
                f"Invalid log format: {self.log_format!r}, expected one of {_LOG_FORMATS}",
                ErrorContext(source="config", field_path="log_format"),
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> OcppLibConfig:
        """Create a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {k: v for k, v in data.items() if k in known}
        for key in ("strict_decode", "allow_late_registration"):
            if key in values:
                values[key] = _as_bool(values[key])
        return cls(**values)

    @classmethod
    def from_file(cls, path: str | Path) -> OcppLibConfig:
        """Load a config from a YAML file.

        Raises:
            InitializationError: If the file is missing or not a YAML mapping
        """
        path = Path(path)
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise InitializationError(
                f"Cannot load config file: {e}",
                ErrorContext(source="config", details={"path": str(path)}),
            ) from e
        if not isinstance(data, dict):
            raise InitializationError(
                "Config file must contain a mapping",
                ErrorContext(source="config", details={"path": str(path)}),
            )
        return cls.from_mapping(data)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> OcppLibConfig:
        """Build a config from the environment.

        Args:
            environ: Environment mapping (default: os.environ)

        Returns:
            OcppLibConfig with file values overridden by variables
        """
        env = os.environ if environ is None else environ

        config_path = env.get("OCPP_LIB_CONFIG")
        base = cls.from_file(config_path) if config_path else cls()

        overrides: dict[str, Any] = {}
        for key, var in _ENV_KEYS.items():
            value = env.get(var)
            if value is None or value == "":
                continue
            if key in ("strict_decode", "allow_late_registration"):
                overrides[key] = _as_bool(value)
            elif key == "log_format":
                overrides[key] = value.strip().lower()
            else:
                overrides[key] = value.strip()

        return replace(base, **overrides) if overrides else base

    def configure_logging(self, stream: Any = None) -> None:
        """Apply the logging settings to every library logger."""
        OcppLibLogger.configure(level=self.log_level, format=self.log_format, stream=stream)
