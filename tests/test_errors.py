"""Tests for err2code — business errors, wrapped transport errors, fallbacks."""

from __future__ import annotations

import pytest

from addsvc.services import IntOverflowError, MaxSizeExceededError, ServiceError, TwoZeroesError
from addsvc.transport.errors import (
    DecodeError,
    Domain,
    RemoteError,
    TransportError,
    err2code,
)


class TestBusinessErrors:
    @pytest.mark.parametrize("err", [TwoZeroesError(), MaxSizeExceededError(), IntOverflowError()])
    def test_known_business_errors_are_client_errors(self, err):
        assert err2code(err) == 400

    def test_unlisted_service_error_is_server_error(self):
        assert err2code(ServiceError("something else")) == 500

    def test_messages(self):
        assert str(TwoZeroesError()) == "both arguments cannot be zero"
        assert str(IntOverflowError()) == "integer overflow"
        assert str(MaxSizeExceededError()) == "result exceeds maximum size"


class TestTransportErrors:
    def test_decode_domain_is_client_error(self):
        assert err2code(TransportError(Domain.DECODE, DecodeError("bad body"))) == 400

    def test_do_domain_unwraps_business_error(self):
        assert err2code(TransportError(Domain.DO, TwoZeroesError())) == 400

    def test_do_domain_unwraps_unknown_error(self):
        assert err2code(TransportError(Domain.DO, RuntimeError("boom"))) == 500

    def test_encode_domain_is_server_error(self):
        assert err2code(TransportError(Domain.ENCODE, TypeError("not serializable"))) == 500

    def test_unwrap_returns_cause(self):
        cause = IntOverflowError()
        wrapped = TransportError(Domain.DO, cause)
        assert wrapped.unwrap() is cause
        assert str(wrapped) == "integer overflow"


class TestFallback:
    def test_unknown_error_is_server_error(self):
        assert err2code(ValueError("nope")) == 500

    def test_remote_error_identity_is_not_preserved(self):
        # A remote business error arrives as a plain message
        assert err2code(RemoteError("both arguments cannot be zero")) == 500
