"""structlog setup for the CabShare service.

Production emits one JSON object per line; DEBUG switches to the coloured
console renderer. Both chains stamp the request id and service context and
mask provider API keys before anything is rendered.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from .settings import settings
from .utils import request_id_ctx

SERVICE_NAME = "cabshare"
SERVICE_VERSION = "0.1.0"

# Maps keys travel as ?key=...; httpx errors echo the full URL
_SECRET_PARAM = re.compile(r"(\bkey=)[^&\s'\"]+", re.IGNORECASE)
_BEARER = re.compile(r"(Bearer\s+)\S+")


def add_request_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    request_id = request_id_ctx.get("")
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("environment", settings.SENTRY_ENVIRONMENT)
    event_dict.setdefault("version", SERVICE_VERSION)
    return event_dict


def redact_secrets(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    for field, value in event_dict.items():
        if isinstance(value, str):
            masked = _SECRET_PARAM.sub(r"\1***", value)
            event_dict[field] = _BEARER.sub(r"\1***", masked)
    return event_dict


def _pre_chain(json_logs: bool) -> list[Processor]:
    """Processors shared by structlog events and plain ``logging`` records."""
    return [
        structlog.contextvars.merge_contextvars,
        add_request_id,
        add_service_context,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso" if json_logs else "%H:%M:%S"),
    ]


def build_formatter(json_logs: bool) -> structlog.stdlib.ProcessorFormatter:
    """Formatter for the root handler: every record is redacted, then rendered."""
    if json_logs:
        tail: list[Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            redact_secrets,
            structlog.processors.JSONRenderer(),
        ]
    else:
        tail = [redact_secrets, structlog.dev.ConsoleRenderer()]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(json_logs),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *tail],
    )


def configure_structlog(json_logs: bool = False) -> None:
    """Route structlog and stdlib logging through one stdout handler.

    ``json_logs`` forces JSON even in DEBUG; outside DEBUG JSON is always used.
    Engine modules log with ``logging.getLogger(__name__)``; their records get
    the same context, redaction and renderer as structlog events.
    """
    json_logs = json_logs or not settings.DEBUG

    structlog.configure(
        processors=[
            *_pre_chain(json_logs),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(json_logs))
    logging.basicConfig(
        handlers=[handler],
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        force=True,
    )
    # httpx logs every provider request URL at INFO
    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


__all__ = [
    "SERVICE_NAME",
    "SERVICE_VERSION",
    "build_formatter",
    "configure_structlog",
    "get_logger",
    "redact_secrets",
]
