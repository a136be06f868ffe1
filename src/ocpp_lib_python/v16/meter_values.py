"""
MeterValues (Charge Point -> Central System).

Carries one or more timestamped meter readings, each holding one or more
sampled values.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, ClassVar

from ocpp_lib_python.feature import Feature, Initiator
from ocpp_lib_python.rules import Rules
from ocpp_lib_python.schema import Payload

METER_VALUES_ACTION = "MeterValues"


class SampledValue(Payload):
    """A single measured value.

    Optional descriptors default on the receiving side: context
    Sample.Periodic, format Raw, measurand Energy.Active.Import.Register,
    location Outlet, unit Wh.
    """

    value: Annotated[str | None, Rules("required")] = None
    context: Annotated[str | None, Rules("reading_context")] = None
    format: Annotated[str | None, Rules("value_format")] = None
    measurand: Annotated[str | None, Rules("measurand")] = None
    phase: Annotated[str | None, Rules("phase")] = None
    location: Annotated[str | None, Rules("location")] = None
    unit: Annotated[str | None, Rules("unit_of_measure")] = None


class MeterValue(Payload):
    """Sampled values taken at the same point in time."""

    timestamp: Annotated[datetime | None, Rules("required")] = None
    sampled_value: Annotated[
        list[SampledValue] | None, Rules("required,min_length=1")
    ] = None


class MeterValuesRequest(Payload):
    """Meter readings for one connector."""

    action: ClassVar[str] = METER_VALUES_ACTION

    connector_id: Annotated[int | None, Rules("required,min=0")] = None
    transaction_id: int | None = None
    meter_value: Annotated[
        list[MeterValue] | None, Rules("required,min_length=1")
    ] = None


class MeterValuesConfirmation(Payload):
    """Empty acknowledgement."""

    action: ClassVar[str] = METER_VALUES_ACTION


METER_VALUES = Feature(
    action=METER_VALUES_ACTION,
    request=MeterValuesRequest,
    confirmation=MeterValuesConfirmation,
    initiator=Initiator.CHARGE_POINT,
    triggerable=True,
    description="Report meter readings",
)


def new_meter_values_request(
    connector_id: int, meter_value: list[MeterValue]
) -> MeterValuesRequest:
    """Create a MeterValues request; the transaction id may be set afterwards."""
    return MeterValuesRequest(connector_id=connector_id, meter_value=meter_value)


def new_meter_values_confirmation() -> MeterValuesConfirmation:
    return MeterValuesConfirmation()
