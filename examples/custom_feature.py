#!/usr/bin/env python3
"""
Custom feature example.

This example adds a vendor-specific feature with its own constraint rule
next to the OCPP 1.6 catalog, and shows that a TriggerMessage for it
becomes valid once it is registered as triggerable.

Usage:
    python examples/custom_feature.py
"""

from typing import Annotated, ClassVar

from ocpp_lib_python import (
    Feature,
    Initiator,
    OcppLibConfig,
    Payload,
    PayloadValidator,
    Rules,
    build_registry,
)
from ocpp_lib_python.rules import RuleContext, RuleOutcome
from ocpp_lib_python.v16 import FEATURES, TriggerMessageRequest, build_catalog


class CableCheckRequest(Payload):
    """Vendor notification reporting a cable insulation check."""

    action: ClassVar[str] = "CableCheck"

    connector_id: Annotated[int | None, Rules("required,gt=0")] = None
    resistance_kohm: Annotated[float | None, Rules("required,insulation_ok")] = None


class CableCheckConfirmation(Payload):
    action: ClassVar[str] = "CableCheck"


def insulation_ok(value: float, context: RuleContext) -> RuleOutcome:
    """Insulation resistance must be at least 100 kOhm."""
    if value < 100:
        return RuleOutcome.violated(f"insulation resistance too low: {value} kOhm")
    return RuleOutcome.ok()


CABLE_CHECK = Feature(
    action="CableCheck",
    request=CableCheckRequest,
    confirmation=CableCheckConfirmation,
    initiator=Initiator.CHARGE_POINT,
    triggerable=True,
    description="Report a cable insulation check",
)


def main() -> None:
    """Run custom feature example."""
    config = OcppLibConfig.from_env()

    # Rules first, then every feature, in one initialization step
    catalog = build_catalog().register_check("insulation_ok", insulation_ok)
    registry = build_registry(
        [*FEATURES, CABLE_CHECK],
        catalog,
        allow_late_registration=config.allow_late_registration,
    )
    validator = PayloadValidator(registry)

    for request in (
        CableCheckRequest(connector_id=1, resistance_kohm=550.0),
        CableCheckRequest(connector_id=0, resistance_kohm=12.5),
        TriggerMessageRequest(requested_message="CableCheck"),
    ):
        result = validator.validate_request(request)
        status = "valid" if result.valid else "; ".join(result.errors)
        print(f"{type(request).__name__}: {status}")


if __name__ == "__main__":
    main()
