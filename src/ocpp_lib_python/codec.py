"""
Default payload codec.

Turns raw decoded JSON (or JSON text) into typed payloads and typed
payloads back into wire dictionaries. Decoding only checks structure and
types; constraint rules are left to validation.

Types are checked the way JSON declares them: a string is never read as a
number, a boolean or float never as an integer, and timestamps must be
ISO 8601 strings.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

import pydantic
from pydantic_core import PydanticSerializationError, to_json

from ocpp_lib_python.errors import DecodeError
from ocpp_lib_python.schema import Payload

if TYPE_CHECKING:
    from ocpp_lib_python.config import OcppLibConfig

P = TypeVar("P", bound=Payload)


class PayloadCodec:
    """Codec between wire data and payload models.

    Example:
        >>> codec = PayloadCodec()
        >>> request = codec.decode(GetDiagnosticsRequest, '{"location": "ftp://host/"}')
        >>> codec.encode(request)
        {'location': 'ftp://host/'}
    """

    def __init__(self, strict: bool = False) -> None:
        """Initialize the codec.

        Args:
            strict: Reject keys that are not fields of the payload type
        """
        self._strict = strict

    @classmethod
    def from_config(cls, config: OcppLibConfig) -> PayloadCodec:
        """Create a codec honoring ``config.strict_decode``."""
        return cls(strict=config.strict_decode)

    @property
    def strict(self) -> bool:
        return self._strict

    def decode(
        self,
        model: type[P],
        raw: Mapping[str, Any] | str | bytes | bytearray,
        *,
        action: str | None = None,
    ) -> P:
        """Decode raw data into a payload.

        Args:
            model: Payload type to decode into
            raw: Decoded JSON object, or JSON text
            action: Action name, for error context

        Returns:
            Payload instance

        Raises:
            DecodeError: If the data is malformed or has the wrong types
        """
        text: str | bytes | bytearray | None = None
        if isinstance(raw, (str, bytes, bytearray)):
            text = raw
            try:
                data: Any = json.loads(raw)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise DecodeError(
                    f"Malformed JSON payload for {model.__name__}: {e}",
                    action=action,
                    malformed=True,
                    cause=e,
                ) from e
        else:
            data = raw

        if not isinstance(data, Mapping):
            raise DecodeError(
                f"{model.__name__} payload must be a JSON object, got {type(data).__name__}",
                action=action,
                errors=[{"type": "model_type", "loc": (), "msg": "expected an object"}],
            )

        if self._strict:
            unknown = sorted(set(data) - model.wire_names())
            if unknown:
                raise DecodeError(
                    f"Unknown fields for {model.__name__}: {', '.join(unknown)}",
                    action=action,
                    errors=[
                        {"type": "extra_forbidden", "loc": (k,), "msg": "unknown field"}
                        for k in unknown
                    ],
                )

        if text is None:
            try:
                text = to_json(dict(data))
            except PydanticSerializationError as e:
                raise DecodeError(
                    f"{model.__name__} payload is not JSON data: {e}",
                    action=action,
                    malformed=True,
                    cause=e,
                ) from e

        try:
            return model.model_validate_json(text, strict=True)
        except pydantic.ValidationError as e:
            errors = e.errors(include_url=False, include_context=False)
            raise DecodeError(
                f"Cannot decode {model.__name__}: {_summarize(errors)}",
                action=action,
                errors=errors,
                cause=e,
            ) from e

    def encode(self, payload: Payload) -> dict[str, Any]:
        """Encode a payload as a JSON-ready dictionary with wire names.

        Absent optional fields are omitted.
        """
        return payload.model_dump(mode="json", by_alias=True, exclude_none=True)

    def encode_json(self, payload: Payload) -> str:
        """Encode a payload as compact JSON text."""
        return json.dumps(self.encode(payload), separators=(",", ":"))


def _summarize(errors: list[Any]) -> str:
    parts = []
    for error in errors:
        loc = ".".join(str(p) for p in error.get("loc", ()))
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return "; ".join(parts)
