"""
structlog setup for the memberql service.

Every event goes through the stdlib logging tree so uvicorn, SQLAlchemy and
our own loggers share one handler. Events emitted while an HTTP request is in
flight carry that request's id and, for GraphQL calls, the operation name.
"""

import base64
import logging
import secrets
import sys
import time
from contextvars import ContextVar
from typing import Any

import structlog

# Snapshot of the fields tagged onto every event for the current request
_request_fields: ContextVar[dict[str, str]] = ContextVar("memberql_request_fields", default={})

REQUEST_ID_KEY = "request_id"
OPERATION_KEY = "graphql_operation"


def add_request_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor copying the request fields onto the event.

    Keys already bound on the event win over the request snapshot.
    """
    for key, value in _request_fields.get().items():
        event_dict.setdefault(key, value)
    return event_dict


def resolve_level(debug: bool, log_level: str | None = None) -> int:
    """Map a level name to its numeric value, falling back on the debug flag."""
    if not log_level:
        return logging.DEBUG if debug else logging.INFO
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def build_processors(debug: bool) -> list[Any]:
    renderer: Any = (
        structlog.dev.ConsoleRenderer(colors=True) if debug else structlog.processors.JSONRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_request_context,
        structlog.processors.TimeStamper(fmt="ISO", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def configure_logging(debug: bool = False, log_level: str | None = None) -> None:
    """Route stdlib logging to stdout and install the structlog pipeline.

    Debug mode renders colored console lines; otherwise one JSON object per
    line. Safe to call more than once: the root handler is replaced each time.
    """
    logging.basicConfig(
        level=resolve_level(debug, log_level),
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )
    structlog.configure(
        processors=build_processors(debug),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Return a 14-character URL-safe id: 8 bytes of microsecond clock, 2 random."""
    raw = int(time.time() * 1_000_000).to_bytes(8, "big") + secrets.token_bytes(2)
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def set_request_context(request_id: str | None = None, operation: str | None = None) -> str:
    """Tag subsequent events in this context with a request id and operation.

    A fresh id is generated when none is given. Passing no operation keeps
    whatever operation was already recorded. Returns the id in effect.
    """
    fields = dict(_request_fields.get())
    fields[REQUEST_ID_KEY] = request_id or generate_request_id()
    if operation is not None:
        fields[OPERATION_KEY] = operation
    _request_fields.set(fields)
    return fields[REQUEST_ID_KEY]


def clear_request_context() -> None:
    _request_fields.set({})


def get_request_id() -> str | None:
    return _request_fields.get().get(REQUEST_ID_KEY)
