"""
Integration tests for concurrent validation.

Tests behavior of a sealed registry under parallel readers.
"""

from concurrent.futures import ThreadPoolExecutor

from ocpp_lib_python import (
    FeatureRegistry,
    MessageDispatcher,
    OcppLibConfig,
    PayloadValidator,
)
from ocpp_lib_python.rules import RuleCatalog
from ocpp_lib_python.v16 import (
    BOOT_NOTIFICATION,
    GetDiagnosticsRequest,
    TriggerMessageRequest,
    build_default_registry,
)


class TestConcurrency:
    """Tests for concurrent validation against one registry."""

    def test_parallel_validation(self, sealed_registry: FeatureRegistry) -> None:
        """Parallel validations see the same results as sequential ones."""
        validator = PayloadValidator(sealed_registry)
        payloads = [
            GetDiagnosticsRequest(location="ftp://host/", retries=i % 3 - 1)
            for i in range(200)
        ]
        expected = [validator.validate_request(p) for p in payloads]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(validator.validate_request, payloads))

        assert results == expected
        invalid = [r for r in results if not r.valid]
        assert len(invalid) == sum(1 for p in payloads if p.retries == -1)

    def test_parallel_dispatch(self, dispatcher: MessageDispatcher) -> None:
        raw = {"requestedMessage": "StatusNotification", "connectorId": 1}

        def accept(_: int) -> TriggerMessageRequest:
            payload = dispatcher.accept_request("TriggerMessage", raw)
            assert isinstance(payload, TriggerMessageRequest)
            return payload

        with ThreadPoolExecutor(max_workers=8) as pool:
            payloads = list(pool.map(accept, range(100)))

        assert all(p.connector_id == 1 for p in payloads)

    def test_reads_during_late_registration(self, catalog: RuleCatalog) -> None:
        """Readers see a complete snapshot while a single writer changes the registry."""
        registry = build_default_registry(
            OcppLibConfig(allow_late_registration=True), catalog=catalog
        )
        descriptor = BOOT_NOTIFICATION.describe(catalog)

        def toggle() -> None:
            for _ in range(50):
                registry.unregister("BootNotification")
                registry.register(descriptor)

        def read(_: int) -> int:
            return len(registry.all_action_names())

        with ThreadPoolExecutor(max_workers=4) as pool:
            writer = pool.submit(toggle)
            sizes = list(pool.map(read, range(500)))
            writer.result()

        assert set(sizes) <= {7, 8}
        assert "BootNotification" in registry
