"""Async HTTP client that exposes a remote instance as :class:`Endpoints`."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import structlog

from addsvc.endpoints import (
    ConcatRequest,
    ConcatResponse,
    Endpoint,
    Endpoints,
    Success,
    SumRequest,
    SumResponse,
)
from addsvc.transport.codec import (
    decode_concat_response,
    decode_sum_response,
    encode_generic_request,
)

log = structlog.get_logger("addsvc.client")


class HTTPClient:
    """Thin async wrapper around an addsvc instance's HTTP API.

    Non-200 responses raise :class:`addsvc.transport.errors.RemoteError`
    carrying the remote message; the concrete business error is not
    reconstructed.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HTTPClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── endpoints ──────────────────────────────────────────────────────────

    async def sum_endpoint(self, request: SumRequest) -> Success[SumResponse]:
        return Success(await self._post("/sum", request, decode_sum_response))

    async def concat_endpoint(self, request: ConcatRequest) -> Success[ConcatResponse]:
        return Success(await self._post("/concat", request, decode_concat_response))

    def endpoints(self) -> Endpoints:
        """Return the remote instance as an :class:`Endpoints` pair."""
        sum_endpoint: Endpoint = self.sum_endpoint
        concat_endpoint: Endpoint = self.concat_endpoint
        return Endpoints(sum_endpoint=sum_endpoint, concat_endpoint=concat_endpoint)

    # ── internal ───────────────────────────────────────────────────────────

    async def _post(
        self,
        path: str,
        request: Any,
        decode: Callable[[httpx.Response], Any],
    ) -> Any:
        response = await self._client.post(path, content=encode_generic_request(request))
        log.debug("client.response", path=path, status=response.status_code)
        return decode(response)
