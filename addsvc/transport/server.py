"""Per-route HTTP server: decode → endpoint → encode, with one error path."""

from __future__ import annotations

import re
import uuid
from collections.abc import Callable, Sequence
from typing import Any

import structlog
from starlette.requests import Request
from starlette.responses import Response

from addsvc.endpoints import Endpoint
from addsvc.transport.codec import encode_error
from addsvc.transport.errors import HTTP_BAD_REQUEST, Domain, TransportError, err2code

# A before-hook returns values to bind into the log context for this request.
BeforeHook = Callable[[Request], dict[str, Any]]
Decoder = Callable[[bytes], Any]
Encoder = Callable[[Any], Response]
ErrorEncoder = Callable[[Exception], Response]

_TRACEPARENT_RE = re.compile(r"^[0-9a-f]{2}-([0-9a-f]{32})-([0-9a-f]{16})-[0-9a-f]{2}$")


def trace_from_http_request(operation: str) -> BeforeHook:
    """Return a hook that extracts trace context for *operation*.

    The trace id comes from a W3C ``traceparent`` header, then from
    ``X-Request-ID``, and is generated when neither is present. Each request
    gets a fresh span id; the incoming span, if any, becomes its parent.
    """

    def hook(request: Request) -> dict[str, Any]:
        trace_id = ""
        parent_span_id = None
        match = _TRACEPARENT_RE.match(request.headers.get("traceparent", "").strip().lower())
        if match:
            trace_id, parent_span_id = match.group(1), match.group(2)
        if not trace_id:
            trace_id = request.headers.get("x-request-id", "") or uuid.uuid4().hex
        return {
            "operation": operation,
            "trace_id": trace_id,
            "span_id": uuid.uuid4().hex[:16],
            "parent_span_id": parent_span_id,
        }

    return hook


class EndpointServer:
    """Serves one endpoint over HTTP.

    Every failure of the transport itself (bad body, endpoint raising,
    encoder raising) is wrapped in a :class:`TransportError`, logged, and
    handed to the error encoder. Business failures returned by the endpoint
    are the response encoder's concern.
    """

    def __init__(
        self,
        endpoint: Endpoint,
        decoder: Decoder,
        encoder: Encoder,
        *,
        before: Sequence[BeforeHook] = (),
        error_encoder: ErrorEncoder = encode_error,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._decode = decoder
        self._encode = encoder
        self._before = tuple(before)
        self._error_encoder = error_encoder
        self._log = log or structlog.get_logger("addsvc.transport")

    async def handle(self, request: Request) -> Response:
        context: dict[str, Any] = {}
        for hook in self._before:
            context.update(hook(request))
        tokens = structlog.contextvars.bind_contextvars(**context)
        try:
            return await self._serve(request)
        except TransportError as exc:
            self._log_error(exc)
            return self._error_encoder(exc)
        finally:
            structlog.contextvars.reset_contextvars(**tokens)

    async def _serve(self, request: Request) -> Response:
        body = await request.body()
        try:
            decoded = self._decode(body)
        except TransportError:
            raise
        except Exception as exc:
            raise TransportError(Domain.DECODE, exc) from exc

        try:
            response = await self._endpoint(decoded)
        except Exception as exc:
            raise TransportError(Domain.DO, exc) from exc

        try:
            return self._encode(response)
        except Exception as exc:
            raise TransportError(Domain.ENCODE, exc) from exc

    def _log_error(self, exc: TransportError) -> None:
        code = err2code(exc)
        if code == HTTP_BAD_REQUEST:
            self._log.warning("transport.error", domain=exc.domain.value, status=code, err=str(exc))
        else:
            self._log.error(
                "transport.error",
                domain=exc.domain.value,
                status=code,
                err=str(exc),
                exc_info=exc,
            )
