"""JSON codecs for the HTTP transport.

Server side: request decoders, the generic response encoder and the error
encoder. Client side: the generic request encoder and response decoders.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

import httpx
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from addsvc.endpoints import ConcatRequest, ConcatResponse, Failer, Success, SumRequest, SumResponse
from addsvc.transport.errors import (
    HTTP_OK,
    DecodeError,
    Domain,
    ErrorWrapper,
    RemoteError,
    TransportError,
    err2code,
)

M = TypeVar("M", bound=BaseModel)


def _describe(exc: ValidationError) -> str:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(messages)


def _decode(model: type[M], body: bytes | str) -> M:
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        raise TransportError(Domain.DECODE, DecodeError(_describe(exc))) from exc


# ── server side ────────────────────────────────────────────────────────────


def decode_sum_request(body: bytes) -> SumRequest:
    """Decode a JSON sum request body. Failures are tagged ``Domain.DECODE``."""
    return _decode(SumRequest, body)


def decode_concat_request(body: bytes) -> ConcatRequest:
    """Decode a JSON concat request body. Failures are tagged ``Domain.DECODE``."""
    return _decode(ConcatRequest, body)


def encode_error(err: Exception) -> JSONResponse:
    """Write *err* as ``{"error": ...}`` with the status chosen by :func:`err2code`."""
    return JSONResponse(
        status_code=err2code(err),
        content=ErrorWrapper(error=str(err)).model_dump(),
    )


def encode_generic_response(response: Any) -> JSONResponse:
    """Encode any endpoint response as JSON.

    A response that reports a failure goes to :func:`encode_error` instead;
    the success body is never built for it.
    """
    if isinstance(response, Failer):
        err = response.failed()
        if err is not None:
            return encode_error(err)
    if isinstance(response, Success):
        response = response.value
    return JSONResponse(status_code=HTTP_OK, content=jsonable_encoder(response))


# ── client side ────────────────────────────────────────────────────────────


def encode_generic_request(request: Any) -> bytes:
    """JSON-encode any request for use as an HTTP body."""
    return json.dumps(jsonable_encoder(request), separators=(",", ":")).encode()


def decode_error(response: httpx.Response) -> RemoteError:
    """Rebuild the error carried by a non-200 response body."""
    wrapper = _decode(ErrorWrapper, response.content)
    return RemoteError(wrapper.error)


def decode_sum_response(response: httpx.Response) -> SumResponse:
    """Decode a sum response; any non-200 status raises the remote error."""
    if response.status_code != HTTP_OK:
        raise decode_error(response)
    return _decode(SumResponse, response.content)


def decode_concat_response(response: httpx.Response) -> ConcatResponse:
    """Decode a concat response; any non-200 status raises the remote error."""
    if response.status_code != HTTP_OK:
        raise decode_error(response)
    return _decode(ConcatResponse, response.content)
