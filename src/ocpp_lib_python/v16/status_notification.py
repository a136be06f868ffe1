"""
StatusNotification (Charge Point -> Central System).

Connector id 0 refers to the charge point main controller.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, ClassVar

from ocpp_lib_python.feature import Feature, Initiator
from ocpp_lib_python.rules import Rules
from ocpp_lib_python.schema import Payload
from ocpp_lib_python.v16.enums import ChargePointErrorCode, ChargePointStatus

STATUS_NOTIFICATION_ACTION = "StatusNotification"


class StatusNotificationRequest(Payload):
    """Status change of a connector or of the whole charge point."""

    action: ClassVar[str] = STATUS_NOTIFICATION_ACTION

    connector_id: Annotated[int | None, Rules("required,min=0")] = None
    error_code: Annotated[str | None, Rules("required,charge_point_error_code")] = None
    info: Annotated[str | None, Rules("max_length=50")] = None
    status: Annotated[str | None, Rules("required,charge_point_status")] = None
    timestamp: datetime | None = None
    vendor_id: Annotated[str | None, Rules("max_length=255")] = None
    vendor_error_code: Annotated[str | None, Rules("max_length=50")] = None


class StatusNotificationConfirmation(Payload):
    """Empty acknowledgement."""

    action: ClassVar[str] = STATUS_NOTIFICATION_ACTION


STATUS_NOTIFICATION = Feature(
    action=STATUS_NOTIFICATION_ACTION,
    request=StatusNotificationRequest,
    confirmation=StatusNotificationConfirmation,
    initiator=Initiator.CHARGE_POINT,
    triggerable=True,
    description="Report a connector status change",
)


def new_status_notification_request(
    connector_id: int,
    error_code: ChargePointErrorCode | str,
    status: ChargePointStatus | str,
) -> StatusNotificationRequest:
    """Create a StatusNotification request; optional fields may be set afterwards."""
    return StatusNotificationRequest(
        connector_id=connector_id, error_code=error_code, status=status
    )


def new_status_notification_confirmation() -> StatusNotificationConfirmation:
    return StatusNotificationConfirmation()
