#!/usr/bin/env python3
"""
Validation performance benchmarks.

Measures the cost of decoding and validating payloads.
"""

import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any

from ocpp_lib_python import MessageDispatcher, OcppLibConfig, PayloadCodec, PayloadValidator
from ocpp_lib_python.v16 import (
    GetDiagnosticsRequest,
    MeterValue,
    MeterValuesRequest,
    SampledValue,
    TriggerMessageRequest,
    build_default_registry,
)

REGISTRY = build_default_registry(OcppLibConfig())
VALIDATOR = PayloadValidator(REGISTRY)
NOW = datetime.now(timezone.utc)


def _measure(name: str, iterations: int, op: Callable[[], Any]) -> dict[str, Any]:
    start = time.perf_counter()
    for _ in range(iterations):
        op()
    elapsed = time.perf_counter() - start

    return {
        "name": name,
        "iterations": iterations,
        "elapsed_seconds": elapsed,
        "throughput_ops": iterations / elapsed,
        "latency_us": (elapsed / iterations) * 1_000_000,
    }


def benchmark_flat_payload(iterations: int = 20000) -> dict[str, Any]:
    """Benchmark validation of a flat valid payload."""
    request = GetDiagnosticsRequest(location="ftp://host/diag", retries=3)
    return _measure(
        "GetDiagnostics (valid)", iterations, lambda: VALIDATOR.validate_request(request)
    )


def benchmark_flat_payload_invalid(iterations: int = 20000) -> dict[str, Any]:
    """Benchmark validation collecting several violations."""
    request = GetDiagnosticsRequest(location="", retries=-1, retry_interval=-1)
    return _measure(
        "GetDiagnostics (3 violations)",
        iterations,
        lambda: VALIDATOR.validate_request(request),
    )


def benchmark_dynamic_enumeration(iterations: int = 20000) -> dict[str, Any]:
    """Benchmark a rule resolved against the registry on every check."""
    request = TriggerMessageRequest(requested_message="MeterValues", connector_id=1)
    return _measure(
        "TriggerMessage (dynamic enum)",
        iterations,
        lambda: VALIDATOR.validate_request(request),
    )


def benchmark_nested_payload(iterations: int = 5000) -> dict[str, Any]:
    """Benchmark a MeterValues request with 4 x 6 sampled values."""
    request = MeterValuesRequest(
        connector_id=1,
        meter_value=[
            MeterValue(
                timestamp=NOW,
                sampled_value=[
                    SampledValue(value=str(i), measurand="Voltage", unit="V", phase="L1")
                    for i in range(6)
                ],
            )
            for _ in range(4)
        ],
    )
    return _measure(
        "MeterValues (24 sampled values)",
        iterations,
        lambda: VALIDATOR.validate_request(request),
    )


def benchmark_accept(iterations: int = 10000) -> dict[str, Any]:
    """Benchmark inbound decode plus validation."""
    dispatcher = MessageDispatcher(REGISTRY, PayloadCodec())
    raw = '{"location": "ftp://host/diag", "retries": 3, "retryInterval": 60}'
    return _measure(
        "accept_request (JSON text)",
        iterations,
        lambda: dispatcher.accept_request("GetDiagnostics", raw),
    )


def benchmark_parallel_validation(
    workers: int = 8, iterations: int = 20000
) -> dict[str, Any]:
    """Benchmark validation from several threads against one registry."""
    request = TriggerMessageRequest(requested_message="Heartbeat")

    start = time.perf_counter()
    with ThreadPoolExecutor(max_workers=workers) as pool:
        list(pool.map(lambda _: VALIDATOR.validate_request(request), range(iterations)))
    elapsed = time.perf_counter() - start

    return {
        "name": f"Parallel ({workers} threads)",
        "iterations": iterations,
        "elapsed_seconds": elapsed,
        "throughput_ops": iterations / elapsed,
        "latency_us": (elapsed / iterations) * 1_000_000,
    }


def run_benchmarks() -> None:
    """Run all benchmarks and print results."""
    print("=" * 60)
    print("Validation Benchmarks")
    print("=" * 60)
    print()

    benchmarks = [
        benchmark_flat_payload,
        benchmark_flat_payload_invalid,
        benchmark_dynamic_enumeration,
        benchmark_nested_payload,
        benchmark_accept,
    ]

    for bench in benchmarks:
        result = bench()
        print(f"{result['name']}:")
        print(f"  Throughput: {result['throughput_ops']:.0f} ops/sec")
        print(f"  Latency: {result['latency_us']:.2f} µs/op")
        print()

    print("Concurrent Validation:")
    for workers in [2, 4, 8]:
        result = benchmark_parallel_validation(workers=workers)
        print(f"  {workers} threads: {result['throughput_ops']:.0f} ops/sec")


if __name__ == "__main__":
    run_benchmarks()
