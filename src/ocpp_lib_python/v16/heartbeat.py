"""
Heartbeat (Charge Point -> Central System).
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, ClassVar

from ocpp_lib_python.feature import Feature, Initiator
from ocpp_lib_python.rules import Rules
from ocpp_lib_python.schema import Payload

HEARTBEAT_ACTION = "Heartbeat"


class HeartbeatRequest(Payload):
    """Empty heartbeat payload."""

    action: ClassVar[str] = HEARTBEAT_ACTION


class HeartbeatConfirmation(Payload):
    """Central system time, used by charge points to sync their clock."""

    action: ClassVar[str] = HEARTBEAT_ACTION

    current_time: Annotated[datetime | None, Rules("required")] = None


HEARTBEAT = Feature(
    action=HEARTBEAT_ACTION,
    request=HeartbeatRequest,
    confirmation=HeartbeatConfirmation,
    initiator=Initiator.CHARGE_POINT,
    triggerable=True,
    description="Keep-alive and clock synchronisation",
)


def new_heartbeat_request() -> HeartbeatRequest:
    return HeartbeatRequest()


def new_heartbeat_confirmation(current_time: datetime) -> HeartbeatConfirmation:
    return HeartbeatConfirmation(current_time=current_time)
