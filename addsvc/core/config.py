"""Server configuration, read from ``ADDSVC_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from prometheus_client import CollectorRegistry

_TRUTHY = {"1", "true", "yes", "on"}


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"ADDSVC_PORT must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"ADDSVC_PORT out of range: {port}")
    return port


@dataclass(frozen=True)
class ServerConfig:
    """Everything :func:`addsvc.transport.handler.create_app` needs besides endpoints.

    ``registry`` is per-config so two apps in one process (tests, proxies)
    never register the same collector twice.
    """

    host: str = "0.0.0.0"
    port: int = 8081
    log_level: str = "INFO"
    log_format: str = "console"
    metrics_enabled: bool = True
    registry: CollectorRegistry = field(default_factory=CollectorRegistry, compare=False)

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Build a config from the environment, falling back to defaults.

        Reads ``ADDSVC_HOST``, ``ADDSVC_PORT``, ``ADDSVC_LOG_LEVEL``,
        ``ADDSVC_LOG_FORMAT`` (console | json) and ``ADDSVC_METRICS_ENABLED``.
        """
        return cls(
            host=os.environ.get("ADDSVC_HOST", cls.host),
            port=_parse_port(os.environ.get("ADDSVC_PORT", str(cls.port))),
            log_level=os.environ.get("ADDSVC_LOG_LEVEL", cls.log_level).upper(),
            log_format=os.environ.get("ADDSVC_LOG_FORMAT", cls.log_format).lower(),
            metrics_enabled=os.environ.get("ADDSVC_METRICS_ENABLED", "true").lower() in _TRUTHY,
        )
