"""
TriggerMessage (Central System -> Charge Point).

The Central System asks the Charge Point to send one of its own
notifications. The Charge Point first answers with a TriggerMessage
confirmation (Accepted or Rejected, or NotImplemented for a message it
does not know) and only then sends the requested message.
"""

from __future__ import annotations

from typing import Annotated, ClassVar

from ocpp_lib_python.feature import Feature, Initiator
from ocpp_lib_python.rules import Rules
from ocpp_lib_python.schema import Payload
from ocpp_lib_python.v16.enums import MessageTrigger, TriggerMessageStatus

TRIGGER_MESSAGE_ACTION = "TriggerMessage"


class TriggerMessageRequest(Payload):
    """TriggerMessage request payload.

    ``requested_message`` must name a triggerable feature that is
    registered at validation time.
    """

    action: ClassVar[str] = TRIGGER_MESSAGE_ACTION

    requested_message: Annotated[str | None, Rules("required,message_trigger")] = None
    connector_id: Annotated[int | None, Rules("gt=0")] = None


class TriggerMessageConfirmation(Payload):
    """TriggerMessage confirmation payload."""

    action: ClassVar[str] = TRIGGER_MESSAGE_ACTION

    status: Annotated[str | None, Rules("required,trigger_message_status")] = None


TRIGGER_MESSAGE = Feature(
    action=TRIGGER_MESSAGE_ACTION,
    request=TriggerMessageRequest,
    confirmation=TriggerMessageConfirmation,
    initiator=Initiator.CENTRAL_SYSTEM,
    description="Ask the charge point to send a notification",
)


def new_trigger_message_request(
    requested_message: MessageTrigger | str,
    connector_id: int | None = None,
) -> TriggerMessageRequest:
    """Create a TriggerMessage request; the connector id may be set afterwards."""
    return TriggerMessageRequest(
        requested_message=requested_message, connector_id=connector_id
    )


def new_trigger_message_confirmation(
    status: TriggerMessageStatus | str,
) -> TriggerMessageConfirmation:
    """Create a TriggerMessage confirmation."""
    return TriggerMessageConfirmation(status=status)
