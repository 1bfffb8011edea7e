"""HTTP handler composition — mounts endpoints on their paths."""

from __future__ import annotations

import structlog
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from addsvc import __version__
from addsvc.core.config import ServerConfig
from addsvc.endpoints import Endpoints
from addsvc.transport.codec import (
    decode_concat_request,
    decode_sum_request,
    encode_error,
    encode_generic_response,
)
from addsvc.transport.server import EndpointServer, trace_from_http_request


def create_app(
    endpoints: Endpoints,
    config: ServerConfig | None = None,
    *,
    log: structlog.stdlib.BoundLogger | None = None,
) -> FastAPI:
    """Build an app serving *endpoints* on ``/sum`` and ``/concat``.

    ``/metrics`` exposes ``config.registry`` unless metrics are disabled.
    """
    config = config or ServerConfig()
    log = log or structlog.get_logger("addsvc.transport")

    app = FastAPI(title="addsvc", version=__version__, docs_url=None, redoc_url=None)

    routes = (
        ("/sum", "Sum", endpoints.sum_endpoint, decode_sum_request),
        ("/concat", "Concat", endpoints.concat_endpoint, decode_concat_request),
    )
    for path, operation, endpoint, decoder in routes:
        server = EndpointServer(
            endpoint,
            decoder,
            encode_generic_response,
            before=[trace_from_http_request(operation)],
            error_encoder=encode_error,
            log=log,
        )
        app.add_api_route(
            path, server.handle, methods=["POST"], name=operation.lower(), include_in_schema=False
        )

    if config.metrics_enabled:
        registry = config.registry

        async def metrics() -> Response:
            return Response(generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

        app.add_api_route("/metrics", metrics, methods=["GET"], include_in_schema=False)

    @app.get("/health", tags=["ops"])
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return app
