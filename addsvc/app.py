"""Composition root — wires config, logging, service, endpoints and transport."""

from __future__ import annotations

import structlog
from fastapi import FastAPI

from addsvc.core.config import ServerConfig
from addsvc.core.logging import setup_logging
from addsvc.endpoints import make_server_endpoints
from addsvc.services.add_service import AddService
from addsvc.transport.handler import create_app

log = structlog.get_logger("addsvc")


def build_app(config: ServerConfig | None = None) -> FastAPI:
    """Build the production app. Usable as ``uvicorn addsvc.app:build_app --factory``."""
    config = config or ServerConfig.from_env()
    setup_logging(config.log_level, config.log_format)

    endpoints = make_server_endpoints(AddService(), registry=config.registry)
    app = create_app(endpoints, config)
    log.info("app.ready", metrics_enabled=config.metrics_enabled)
    return app
