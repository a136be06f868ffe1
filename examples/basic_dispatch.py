#!/usr/bin/env python3
"""
Basic dispatch example.

This example shows a Central System preparing a GetDiagnostics request,
accepting the Charge Point's answer, and answering bad inbound messages
with OCPP-J call errors.

Usage:
    export OCPP_LIB_LOG_LEVEL=DEBUG   # optional
    python examples/basic_dispatch.py
"""

import json

from ocpp_lib_python import MessageDispatcher, OcppLibConfig, OcppLibError
from ocpp_lib_python.v16 import (
    MessageTrigger,
    build_default_registry,
    new_get_diagnostics_request,
    new_trigger_message_request,
)


def main() -> None:
    """Run basic dispatch example."""
    config = OcppLibConfig.from_env()
    config.configure_logging()

    # Populate and seal the registry once at startup
    registry = build_default_registry(config)
    dispatcher = MessageDispatcher(registry)
    print(f"Registered actions: {sorted(registry.all_action_names())}")
    print()

    # Outbound: validate and encode a request
    request = new_get_diagnostics_request("ftp://diag.example.com/uploads")
    request.retries = 0
    out = dispatcher.prepare_request(request)
    print(f"-> {out.action}: {json.dumps(out.payload)}")

    # Inbound: decode and validate the confirmation
    conf = dispatcher.accept_confirmation(out.action, '{"fileName": "diag-cp001.zip"}')
    print(f"<- {out.action}: file_name={conf.file_name}")
    print()

    trigger = new_trigger_message_request(MessageTrigger.STATUS_NOTIFICATION, 1)
    out = dispatcher.prepare_request(trigger)
    print(f"-> {out.action}: {json.dumps(out.payload)}")
    print()

    # Failures become call errors instead of dropped connections
    inbound = [
        ("Reset", {"type": "Hard"}),
        ("TriggerMessage", {"requestedMessage": "GetDiagnostics"}),
        ("GetDiagnostics", {"retries": 1}),
        ("GetDiagnostics", "{not json"),
    ]
    for action, raw in inbound:
        try:
            dispatcher.accept_request(action, raw)
        except OcppLibError as e:
            error = dispatcher.to_call_error(e)
            print(f"{action}: {json.dumps(error.to_dict())}")


if __name__ == "__main__":
    main()
