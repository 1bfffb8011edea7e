"""Structured logging — structlog rendered through stdlib handlers."""

from __future__ import annotations

import logging
import logging.config

import structlog

# Third-party loggers that are too chatty at INFO.
_QUIET = {"uvicorn.access": "WARNING", "uvicorn.error": "INFO", "httpx": "WARNING"}


def _processors() -> list[structlog.types.Processor]:
    # Trace context bound by the transport's before-hooks comes in via contextvars.
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt.lower() == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(level: str = "INFO", fmt: str = "console", stream: str = "stdout") -> None:
    """Route structlog and stdlib records through one handler on *stream*.

    *fmt* is ``console`` or ``json``; both values normally come from
    :class:`addsvc.core.config.ServerConfig`. *stream* is ``stdout`` or
    ``stderr``; the CLI logs to stderr so command results own stdout.
    """
    log_level = level.upper()
    shared = _processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    loggers = {name: {"level": lvl} for name, lvl in _QUIET.items()}
    loggers["addsvc"] = {"level": log_level}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(fmt),
                    ],
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": f"ext://sys.{stream}",
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["default"], "level": log_level},
            "loggers": loggers,
        }
    )
