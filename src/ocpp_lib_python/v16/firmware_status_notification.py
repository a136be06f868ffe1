"""
FirmwareStatusNotification (Charge Point -> Central System).

Reports the progress of a firmware download and installation.
"""

from __future__ import annotations

from typing import Annotated, ClassVar

from ocpp_lib_python.feature import Feature, Initiator
from ocpp_lib_python.rules import Rules
from ocpp_lib_python.schema import Payload
from ocpp_lib_python.v16.enums import FirmwareStatus

FIRMWARE_STATUS_NOTIFICATION_ACTION = "FirmwareStatusNotification"


class FirmwareStatusNotificationRequest(Payload):
    action: ClassVar[str] = FIRMWARE_STATUS_NOTIFICATION_ACTION

    status: Annotated[str | None, Rules("required,firmware_status")] = None


class FirmwareStatusNotificationConfirmation(Payload):
    action: ClassVar[str] = FIRMWARE_STATUS_NOTIFICATION_ACTION


FIRMWARE_STATUS_NOTIFICATION = Feature(
    action=FIRMWARE_STATUS_NOTIFICATION_ACTION,
    request=FirmwareStatusNotificationRequest,
    confirmation=FirmwareStatusNotificationConfirmation,
    initiator=Initiator.CHARGE_POINT,
    triggerable=True,
    description="Report firmware update progress",
)


def new_firmware_status_notification_request(
    status: FirmwareStatus | str,
) -> FirmwareStatusNotificationRequest:
    return FirmwareStatusNotificationRequest(status=status)


def new_firmware_status_notification_confirmation() -> (
    FirmwareStatusNotificationConfirmation
):
    return FirmwareStatusNotificationConfirmation()
