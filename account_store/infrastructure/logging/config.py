"""structlog setup for the account store.

Every line carries the service name and environment, the account operation
being served (bound by ``AccountService`` through ``account_operation``),
and the active OpenTelemetry trace ids when a caller runs inside a span.
Credentials are redacted before rendering.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, cast
from uuid import UUID

import structlog
from opentelemetry import trace
from structlog.typing import Processor

from account_store.infrastructure.config import Settings
from account_store.utils.sanitizer import sanitize_dict


@contextmanager
def account_operation(operation: str, account_id: str | UUID | None = None) -> Iterator[None]:
    """Bind the account operation (and target id, if any) to every log line in scope.

    Context variables are task-local, so concurrent service calls never see
    each other's bindings.
    """
    bindings: dict[str, Any] = {"account_operation": operation}
    if account_id is not None:
        bindings["account_id"] = str(account_id)
    with structlog.contextvars.bound_contextvars(**bindings):
        yield


def add_service_context(settings: Settings) -> Processor:
    """Build a processor stamping the service name and environment on each event."""

    def processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", settings.app_name)
        event_dict.setdefault("env", settings.app_env)
        return event_dict

    return processor


def sanitize_sensitive_data(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Redact passwords, password hashes and connection strings from an event.

    A create payload or settings object logged by mistake must never leak
    the credential or the database URL.
    """
    return sanitize_dict(event_dict, recursive=True)


def add_trace_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Attach trace_id, span_id and trace_flags of the caller's active span."""
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")
        event_dict["trace_flags"] = format(span_context.trace_flags, "02x")
    return event_dict


def build_processors(settings: Settings) -> list[Processor]:
    """Processor chain: context, level, time, trace ids, redaction, then a renderer.

    Development gets the colored console renderer; every other environment
    emits one JSON object per line.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service_context(settings),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_trace_context,
        sanitize_sensitive_data,
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return processors


def configure_logging(settings: Settings) -> None:
    """Route structlog through stdlib logging at ``settings.log_level``."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=cast("Any", build_processors(settings)),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
