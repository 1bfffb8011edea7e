"""Endpoint layer — adapts the service into request -> result callables."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from prometheus_client import CollectorRegistry

from addsvc.endpoints.middleware import (
    Endpoint,
    Middleware,
    instrumenting_middleware,
    logging_middleware,
    new_duration_histogram,
)
from addsvc.endpoints.result import Failer, Failure, Result, Success
from addsvc.endpoints.schemas import ConcatRequest, ConcatResponse, SumRequest, SumResponse
from addsvc.services import ServiceError
from addsvc.services.add_service import AddService

__all__ = [
    "ConcatRequest",
    "ConcatResponse",
    "Endpoint",
    "Endpoints",
    "Failer",
    "Failure",
    "Middleware",
    "Result",
    "Success",
    "SumRequest",
    "SumResponse",
    "make_concat_endpoint",
    "make_server_endpoints",
    "make_sum_endpoint",
]


@dataclass(frozen=True)
class Endpoints:
    """The pair of endpoints a transport serves, or a client exposes."""

    sum_endpoint: Endpoint
    concat_endpoint: Endpoint

    async def sum(self, a: int, b: int) -> int:
        """Call the sum endpoint, raising the business error on failure."""
        result = await self.sum_endpoint(SumRequest(a=a, b=b))
        if result.failed() is not None:
            raise result.failed()
        return result.value.v

    async def concat(self, a: str, b: str) -> str:
        """Call the concat endpoint, raising the business error on failure."""
        result = await self.concat_endpoint(ConcatRequest(a=a, b=b))
        if result.failed() is not None:
            raise result.failed()
        return result.value.v


def make_sum_endpoint(service: AddService) -> Endpoint:
    async def endpoint(request: SumRequest) -> Result[SumResponse]:
        try:
            v = await service.sum(request.a, request.b)
        except ServiceError as exc:
            return Failure(exc)
        return Success(SumResponse(v=v))

    return endpoint


def make_concat_endpoint(service: AddService) -> Endpoint:
    async def endpoint(request: ConcatRequest) -> Result[ConcatResponse]:
        try:
            v = await service.concat(request.a, request.b)
        except ServiceError as exc:
            return Failure(exc)
        return Success(ConcatResponse(v=v))

    return endpoint


def make_server_endpoints(
    service: AddService,
    *,
    registry: CollectorRegistry,
    log: structlog.stdlib.BoundLogger | None = None,
) -> Endpoints:
    """Wire the service into endpoints wrapped with logging and instrumentation.

    The duration histogram is registered on *registry*, the same registry the
    ``/metrics`` route exposes.
    """
    log = log or structlog.get_logger("addsvc.endpoints")
    duration = new_duration_histogram(registry)

    def wrap(endpoint: Endpoint, method: str) -> Endpoint:
        endpoint = instrumenting_middleware(duration, method)(endpoint)
        return logging_middleware(log, method)(endpoint)

    return Endpoints(
        sum_endpoint=wrap(make_sum_endpoint(service), "Sum"),
        concat_endpoint=wrap(make_concat_endpoint(service), "Concat"),
    )
