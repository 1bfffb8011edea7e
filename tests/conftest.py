"""Shared fixtures for addsvc tests — no network, apps served over ASGITransport."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from prometheus_client import CollectorRegistry

from addsvc.core.config import ServerConfig
from addsvc.endpoints import make_server_endpoints
from addsvc.services.add_service import AddService
from addsvc.transport.handler import create_app


@pytest.fixture
def config():
    return ServerConfig(registry=CollectorRegistry())


@pytest.fixture
def app(config):
    endpoints = make_server_endpoints(AddService(), registry=config.registry)
    return create_app(endpoints, config)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
