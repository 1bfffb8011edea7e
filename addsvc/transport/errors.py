"""Transport error types and the error → HTTP status classifier."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from addsvc.services import IntOverflowError, MaxSizeExceededError, TwoZeroesError

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_INTERNAL_SERVER_ERROR = 500

# Business rule violations that are the caller's fault.
_CLIENT_ERRORS: tuple[type[Exception], ...] = (
    TwoZeroesError,
    MaxSizeExceededError,
    IntOverflowError,
)


class Domain(Enum):
    """Transport phase in which a wrapped error originated."""

    DECODE = "decode"
    ENCODE = "encode"
    DO = "do"


class TransportError(Exception):
    """An error raised while serving a request, tagged with its phase."""

    def __init__(self, domain: Domain, err: Exception) -> None:
        self.domain = domain
        self.err = err
        super().__init__(str(err))

    def unwrap(self) -> Exception:
        return self.err


class DecodeError(ValueError):
    """A body could not be parsed into the expected shape."""


class RemoteError(Exception):
    """Error reported by a remote instance; only the message survives the wire."""


class ErrorWrapper(BaseModel):
    error: str


def err2code(err: Exception) -> int:
    """Map *err* to an HTTP status code.

    Known business errors and decode failures are 400. An error raised while
    invoking the endpoint is unwrapped and classified again. Anything else
    is 500.
    """
    if isinstance(err, _CLIENT_ERRORS):
        return HTTP_BAD_REQUEST
    if isinstance(err, TransportError):
        if err.domain is Domain.DECODE:
            return HTTP_BAD_REQUEST
        if err.domain is Domain.DO:
            return err2code(err.unwrap())
    return HTTP_INTERNAL_SERVER_ERROR
