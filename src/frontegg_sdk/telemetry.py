"""Structured logging and tracing for the Frontegg SDK.

Spans are opened through the OpenTelemetry API only, so they cost nothing
unless the host application installs a tracer provider. Log events pass
through a redaction step that drops credential and token values.
"""

from __future__ import annotations

import functools
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from collections.abc import Generator, MutableMapping

    from .config import TelemetryConfig

P = ParamSpec("P")
T = TypeVar("T")

SDK_NAME = "frontegg-sdk"
SDK_VERSION = "0.1.0"

REDACTED = "[redacted]"
SENSITIVE_KEYS = frozenset(
    {"client_secret", "secret", "token", "access_token", "refresh_token", "authorization"}
)

_tracer: trace.Tracer | None = None
_logger: structlog.BoundLogger | None = None


def get_tracer() -> trace.Tracer:
    """Get the SDK tracer, creating it from the global provider on first use."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(SDK_NAME, SDK_VERSION)
    return _tracer


def get_logger() -> structlog.BoundLogger:
    """Get the SDK logger."""
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(SDK_NAME)
    return _logger


def redact_secrets(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """structlog processor replacing credential and token values."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def configure_telemetry(config: TelemetryConfig) -> None:
    """Apply a telemetry configuration process-wide.

    With telemetry disabled, spans go to a no-op tracer and logging is left
    as the host configured it.

    Args:
        config: Telemetry configuration.
    """
    global _tracer, _logger

    if not config.enabled:
        _tracer = trace.NoOpTracer()
        return

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            redact_secrets,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _log_level_to_int(config.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _tracer = trace.get_tracer(config.service_name, SDK_VERSION)
    _logger = structlog.get_logger(config.service_name)


def _log_level_to_int(level: str) -> int:
    """Map a level name to its numeric value; unknown names mean INFO."""
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


@contextmanager
def trace_operation(
    name: str,
    *,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """Run a block inside a ``frontegg.<name>`` span.

    Attributes whose value is None are not set. An exception escaping the
    block marks the span as failed and is re-raised.

    Args:
        name: Operation name.
        attributes: Optional span attributes.

    Yields:
        The active span.
    """
    with get_tracer().start_as_current_span(f"frontegg.{name}") as span:
        span.set_attribute("frontegg.sdk.version", SDK_VERSION)
        for key, value in (attributes or {}).items():
            if value is not None:
                span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, type(e).__name__))
            span.record_exception(e)
            raise


def traced(
    name: str | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorate a function so each call runs inside :func:`trace_operation`."""

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        operation = name or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            with trace_operation(operation):
                return func(*args, **kwargs)

        return wrapper

    return decorator
