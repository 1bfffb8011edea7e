"""Endpoint middleware — logging and Prometheus instrumentation."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from prometheus_client import CollectorRegistry, Histogram

from addsvc.endpoints.result import Failer

Endpoint = Callable[[Any], Awaitable[Any]]
Middleware = Callable[[Endpoint], Endpoint]


def new_duration_histogram(registry: CollectorRegistry) -> Histogram:
    """Create the request duration histogram on *registry*."""
    return Histogram(
        "addsvc_request_duration_seconds",
        "Request duration in seconds.",
        labelnames=("method", "success"),
        registry=registry,
    )


def _failure(result: Any) -> Exception | None:
    if isinstance(result, Failer):
        return result.failed()
    return None


def logging_middleware(log: structlog.stdlib.BoundLogger, method: str) -> Middleware:
    """Log every call with its outcome and duration in milliseconds."""

    def middleware(next_endpoint: Endpoint) -> Endpoint:
        async def endpoint(request: Any) -> Any:
            start = time.perf_counter()
            try:
                result = await next_endpoint(request)
            except Exception as exc:
                took_ms = round((time.perf_counter() - start) * 1000, 1)
                log.warning("endpoint.call", method=method, transport_error=str(exc), took_ms=took_ms)
                raise
            took_ms = round((time.perf_counter() - start) * 1000, 1)
            err = _failure(result)
            if err is not None:
                log.info("endpoint.call", method=method, error=str(err), took_ms=took_ms)
            else:
                log.info("endpoint.call", method=method, took_ms=took_ms)
            return result

        return endpoint

    return middleware


def instrumenting_middleware(duration: Histogram, method: str) -> Middleware:
    """Observe call latency, labelled by method and whether the call succeeded."""

    def middleware(next_endpoint: Endpoint) -> Endpoint:
        async def endpoint(request: Any) -> Any:
            start = time.perf_counter()
            success = False
            try:
                result = await next_endpoint(request)
                success = _failure(result) is None
                return result
            finally:
                duration.labels(method=method, success=str(success).lower()).observe(
                    time.perf_counter() - start
                )

        return endpoint

    return middleware
