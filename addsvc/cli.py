"""CLI entry point: addsvc.

Subcommands:
    addsvc serve                          # Serve /sum, /concat and /metrics
    addsvc sum 2 3 --url http://host:8081 # Call a remote instance
    addsvc concat foo bar --url ...
"""

from __future__ import annotations

import asyncio
import dataclasses
import os

import click
import httpx

from addsvc.core.config import ServerConfig
from addsvc.core.logging import setup_logging
from addsvc.transport.client import HTTPClient
from addsvc.transport.errors import RemoteError, TransportError

_DEFAULT_URL = "http://localhost:8081"


@click.group()
def main() -> None:
    """addsvc — sum and concat over JSON/HTTP."""
    # stdout carries command results only
    setup_logging(
        os.environ.get("ADDSVC_LOG_LEVEL", "WARNING"),
        os.environ.get("ADDSVC_LOG_FORMAT", "console"),
        stream="stderr",
    )


@main.command()
@click.option("--host", default=None, help="Bind address (default: ADDSVC_HOST or 0.0.0.0)")
@click.option(
    "--port",
    default=None,
    type=click.IntRange(1, 65535),
    help="Bind port (default: ADDSVC_PORT or 8081)",
)
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP server."""
    import uvicorn

    from addsvc.app import build_app

    config = ServerConfig.from_env()
    overrides = {k: v for k, v in (("host", host), ("port", port)) if v is not None}
    config = dataclasses.replace(config, **overrides)
    uvicorn.run(build_app(config), host=config.host, port=config.port, log_config=None)


def _call(url: str, method: str, a: object, b: object) -> object:
    async def run() -> object:
        async with HTTPClient(url) as client:
            endpoints = client.endpoints()
            return await getattr(endpoints, method)(a, b)

    try:
        return asyncio.run(run())
    except (RemoteError, TransportError, httpx.HTTPError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@main.command("sum", context_settings={"ignore_unknown_options": True})
@click.argument("a", type=int)
@click.argument("b", type=int)
@click.option(
    "--url",
    default=_DEFAULT_URL,
    envvar="ADDSVC_URL",
    show_default=True,
    help="Base URL of the addsvc instance (env: ADDSVC_URL)",
)
def sum_cmd(a: int, b: int, url: str) -> None:
    """Sum two integers on a remote instance."""
    click.echo(_call(url, "sum", a, b))


@main.command("concat", context_settings={"ignore_unknown_options": True})
@click.argument("a")
@click.argument("b")
@click.option(
    "--url",
    default=_DEFAULT_URL,
    envvar="ADDSVC_URL",
    show_default=True,
    help="Base URL of the addsvc instance (env: ADDSVC_URL)",
)
def concat_cmd(a: str, b: str, url: str) -> None:
    """Concatenate two strings on a remote instance."""
    click.echo(_call(url, "concat", a, b))
