"""Tests for AddService and the endpoints built on top of it."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from prometheus_client import CollectorRegistry

from addsvc.endpoints import (
    ConcatRequest,
    ConcatResponse,
    Endpoints,
    Failure,
    Success,
    SumRequest,
    SumResponse,
    make_concat_endpoint,
    make_server_endpoints,
    make_sum_endpoint,
)
from addsvc.services import IntOverflowError, MaxSizeExceededError, TwoZeroesError
from addsvc.services.add_service import INT_MAX, INT_MIN, MAX_CONCAT_LENGTH, AddService


class TestAddService:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("a,b", [(2, 3), (-4, 4), (0, 7), (INT_MAX - 1, 1), (INT_MIN, 0)])
    async def test_sum(self, a, b):
        assert await AddService().sum(a, b) == a + b

    @pytest.mark.asyncio
    async def test_sum_two_zeroes(self):
        with pytest.raises(TwoZeroesError):
            await AddService().sum(0, 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("a,b", [(INT_MAX, 1), (INT_MIN, -1), (2**40, 1)])
    async def test_sum_overflow(self, a, b):
        with pytest.raises(IntOverflowError):
            await AddService().sum(a, b)

    @pytest.mark.asyncio
    async def test_sum_only_checks_carry_past_bounds(self):
        # A zero addend never overflows, even for an operand outside int32
        assert await AddService().sum(2**40, 0) == 2**40

    @pytest.mark.asyncio
    async def test_concat(self):
        assert await AddService().concat("foo", "bar") == "foobar"

    @pytest.mark.asyncio
    async def test_concat_at_limit(self):
        a = "x" * (MAX_CONCAT_LENGTH - 1)
        assert await AddService().concat(a, "y") == a + "y"

    @pytest.mark.asyncio
    async def test_concat_too_long(self):
        with pytest.raises(MaxSizeExceededError):
            await AddService().concat("x" * MAX_CONCAT_LENGTH, "y")

    @pytest.mark.asyncio
    async def test_concat_counts_utf8_bytes(self):
        # five two-byte characters fill the limit exactly
        assert await AddService().concat("\u00e9" * 5, "") == "\u00e9" * 5
        with pytest.raises(MaxSizeExceededError):
            await AddService().concat("\u00e9" * 5, "x")


class TestEndpoints:
    @pytest.mark.asyncio
    async def test_sum_endpoint_success(self):
        result = await make_sum_endpoint(AddService())(SumRequest(a=2, b=3))
        assert result == Success(SumResponse(v=5))
        assert result.failed() is None

    @pytest.mark.asyncio
    async def test_sum_endpoint_business_failure(self):
        result = await make_sum_endpoint(AddService())(SumRequest(a=0, b=0))
        assert isinstance(result, Failure)
        assert isinstance(result.failed(), TwoZeroesError)

    @pytest.mark.asyncio
    async def test_concat_endpoint_success(self):
        result = await make_concat_endpoint(AddService())(ConcatRequest(a="foo", b="bar"))
        assert result == Success(ConcatResponse(v="foobar"))

    @pytest.mark.asyncio
    async def test_unexpected_service_error_propagates(self):
        svc = AsyncMock()
        svc.sum = AsyncMock(side_effect=RuntimeError("db down"))
        with pytest.raises(RuntimeError):
            await make_sum_endpoint(svc)(SumRequest(a=1, b=2))

    @pytest.mark.asyncio
    async def test_endpoints_helpers_unwrap(self):
        endpoints = make_server_endpoints(AddService(), registry=CollectorRegistry())
        assert await endpoints.sum(2, 3) == 5
        assert await endpoints.concat("a", "b") == "ab"

    @pytest.mark.asyncio
    async def test_endpoints_helpers_raise_failure(self):
        endpoints = Endpoints(
            sum_endpoint=make_sum_endpoint(AddService()),
            concat_endpoint=make_concat_endpoint(AddService()),
        )
        with pytest.raises(TwoZeroesError):
            await endpoints.sum(0, 0)
        with pytest.raises(MaxSizeExceededError):
            await endpoints.concat("x" * 8, "y" * 8)
