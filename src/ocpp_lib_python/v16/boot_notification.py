"""
BootNotification (Charge Point -> Central System).
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, ClassVar

from ocpp_lib_python.feature import Feature, Initiator
from ocpp_lib_python.rules import Rules
from ocpp_lib_python.schema import Payload
from ocpp_lib_python.v16.enums import RegistrationStatus

BOOT_NOTIFICATION_ACTION = "BootNotification"


class BootNotificationRequest(Payload):
    """Charge point identity sent after (re)boot."""

    action: ClassVar[str] = BOOT_NOTIFICATION_ACTION

    charge_box_serial_number: Annotated[str | None, Rules("max_length=25")] = None
    charge_point_model: Annotated[str | None, Rules("required,max_length=20")] = None
    charge_point_serial_number: Annotated[str | None, Rules("max_length=25")] = None
    charge_point_vendor: Annotated[str | None, Rules("required,max_length=20")] = None
    firmware_version: Annotated[str | None, Rules("max_length=50")] = None
    iccid: Annotated[str | None, Rules("max_length=20")] = None
    imsi: Annotated[str | None, Rules("max_length=20")] = None
    meter_serial_number: Annotated[str | None, Rules("max_length=25")] = None
    meter_type: Annotated[str | None, Rules("max_length=25")] = None


class BootNotificationConfirmation(Payload):
    """Registration result and heartbeat interval."""

    action: ClassVar[str] = BOOT_NOTIFICATION_ACTION

    current_time: Annotated[datetime | None, Rules("required")] = None
    interval: Annotated[int | None, Rules("required,min=0")] = None
    status: Annotated[str | None, Rules("required,registration_status")] = None


BOOT_NOTIFICATION = Feature(
    action=BOOT_NOTIFICATION_ACTION,
    request=BootNotificationRequest,
    confirmation=BootNotificationConfirmation,
    initiator=Initiator.CHARGE_POINT,
    triggerable=True,
    description="Announce the charge point to the central system",
)


def new_boot_notification_request(
    charge_point_model: str, charge_point_vendor: str
) -> BootNotificationRequest:
    """Create a BootNotification request; optional fields may be set afterwards."""
    return BootNotificationRequest(
        charge_point_model=charge_point_model,
        charge_point_vendor=charge_point_vendor,
    )


def new_boot_notification_confirmation(
    current_time: datetime,
    interval: int,
    status: RegistrationStatus | str,
) -> BootNotificationConfirmation:
    """Create a BootNotification confirmation."""
    return BootNotificationConfirmation(
        current_time=current_time, interval=interval, status=status
    )
