"""
GetDiagnostics (Central System -> Charge Point).

The Central System asks a Charge Point to upload diagnostic information to
``location``, optionally restricted to a time window. The Charge Point
answers with the name of the file it will upload, or with no file name if
no diagnostics are available. A single file is uploaded; its format is not
prescribed.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, ClassVar

from pydantic import AliasChoices, Field

from ocpp_lib_python.feature import Feature, Initiator
from ocpp_lib_python.rules import Rules
from ocpp_lib_python.schema import Payload

GET_DIAGNOSTICS_ACTION = "GetDiagnostics"


class GetDiagnosticsRequest(Payload):
    """GetDiagnostics request payload.

    ``retries`` and ``retry_interval`` are optional: ``None`` leaves the
    choice to the Charge Point, while ``0`` retries means "do not retry".
    The window end is sent as ``stopTime``; ``endTime`` is accepted on input
    from peers that use that name.
    """

    action: ClassVar[str] = GET_DIAGNOSTICS_ACTION

    location: Annotated[str | None, Rules("required,format=uri")] = None
    retries: Annotated[int | None, Rules("min=0")] = None
    retry_interval: Annotated[int | None, Rules("min=0")] = None
    start_time: datetime | None = None
    stop_time: Annotated[
        datetime | None,
        Field(
            alias="stopTime",
            validation_alias=AliasChoices("stopTime", "endTime", "stop_time"),
        ),
    ] = None


class GetDiagnosticsConfirmation(Payload):
    """GetDiagnostics confirmation payload."""

    action: ClassVar[str] = GET_DIAGNOSTICS_ACTION

    file_name: Annotated[str | None, Rules("max_length=255")] = None


GET_DIAGNOSTICS = Feature(
    action=GET_DIAGNOSTICS_ACTION,
    request=GetDiagnosticsRequest,
    confirmation=GetDiagnosticsConfirmation,
    initiator=Initiator.CENTRAL_SYSTEM,
    description="Request diagnostic information upload",
)


def new_get_diagnostics_request(location: str) -> GetDiagnosticsRequest:
    """Create a GetDiagnostics request with its required upload location."""
    return GetDiagnosticsRequest(location=location)


def new_get_diagnostics_confirmation(
    file_name: str | None = None,
) -> GetDiagnosticsConfirmation:
    """Create a GetDiagnostics confirmation; omit the file name if none is available."""
    return GetDiagnosticsConfirmation(file_name=file_name)
