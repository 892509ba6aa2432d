"""Structured logging with structlog, request_id context and the HTTP trace log.

Two outputs live here:
- Application events, rendered by structlog (JSON or console).
- The HTTP trace log, an append-only JSONL file with one line per proxied
  sales-data request (success or failure).
"""

import json
import logging
from collections.abc import MutableMapping
from contextvars import ContextVar
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import structlog

from sales_dashboard.core.config import get_settings

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def add_request_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Add request_id from context to log events."""
    request_id = request_id_ctx.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_app_name(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Tag events with the configured application name."""
    event_dict.setdefault("app", get_settings().app_name)
    return event_dict


def configure_logging() -> None:
    """Configure structlog for the application."""
    settings = get_settings()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_request_id,
        add_app_name,
    ]

    if settings.log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=settings.is_development)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=not settings.is_testing,
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module).

    Returns:
        Configured structlog logger with request_id binding.
    """
    logger: structlog.typing.FilteringBoundLogger = structlog.get_logger(name)
    return logger


# =============================================================================
# HTTP Trace Log
# =============================================================================


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO 8601 string with millisecond precision."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TraceLog:
    """Append-only JSONL trace of proxied requests.

    Each call to `append` writes exactly one JSON object followed by a newline.
    The parent directory is created on first write.

    Attributes:
        path: Location of the JSONL file.
        enabled: When False, `append` is a no-op.
    """

    def __init__(self, path: str | Path, enabled: bool = True) -> None:
        self.path = Path(path)
        self.enabled = enabled

    def append(self, entry: dict[str, Any]) -> None:
        """Append one entry as a JSON line.

        Args:
            entry: JSON-serializable mapping.
        """
        if not self.enabled:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(entry, default=str, ensure_ascii=False)
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
        structlog.get_logger(__name__).debug("trace.entry_written", path=str(self.path), **entry)

    def record_success(
        self, method: str, source: str, status: int, duration_ms: int
    ) -> dict[str, Any]:
        """Write a success line and return the entry written."""
        entry = {
            "ts": utc_timestamp(),
            "method": method,
            "source": source,
            "status": status,
            "duration_ms": duration_ms,
        }
        self.append(entry)
        return entry

    def record_failure(self, error: str) -> dict[str, Any]:
        """Write a failure line and return the entry written."""
        entry = {"ts": utc_timestamp(), "error": error or "Unknown proxy error"}
        self.append(entry)
        return entry


def get_trace_log() -> TraceLog:
    """Build the trace log from current settings."""
    settings = get_settings()
    return TraceLog(settings.trace_log_path, enabled=settings.trace_log_enabled)
