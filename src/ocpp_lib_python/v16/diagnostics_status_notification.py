"""
DiagnosticsStatusNotification (Charge Point -> Central System).

Reports the progress of an upload started by GetDiagnostics.
"""

from __future__ import annotations

from typing import Annotated, ClassVar

from ocpp_lib_python.feature import Feature, Initiator
from ocpp_lib_python.rules import Rules
from ocpp_lib_python.schema import Payload
from ocpp_lib_python.v16.enums import DiagnosticsStatus

DIAGNOSTICS_STATUS_NOTIFICATION_ACTION = "DiagnosticsStatusNotification"


class DiagnosticsStatusNotificationRequest(Payload):
    action: ClassVar[str] = DIAGNOSTICS_STATUS_NOTIFICATION_ACTION

    status: Annotated[str | None, Rules("required,diagnostics_status")] = None


class DiagnosticsStatusNotificationConfirmation(Payload):
    action: ClassVar[str] = DIAGNOSTICS_STATUS_NOTIFICATION_ACTION


DIAGNOSTICS_STATUS_NOTIFICATION = Feature(
    action=DIAGNOSTICS_STATUS_NOTIFICATION_ACTION,
    request=DiagnosticsStatusNotificationRequest,
    confirmation=DiagnosticsStatusNotificationConfirmation,
    initiator=Initiator.CHARGE_POINT,
    triggerable=True,
    description="Report diagnostics upload progress",
)


def new_diagnostics_status_notification_request(
    status: DiagnosticsStatus | str,
) -> DiagnosticsStatusNotificationRequest:
    return DiagnosticsStatusNotificationRequest(status=status)


def new_diagnostics_status_notification_confirmation() -> (
    DiagnosticsStatusNotificationConfirmation
):
    return DiagnosticsStatusNotificationConfirmation()
