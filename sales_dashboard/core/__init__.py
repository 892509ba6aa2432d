"""Core infrastructure: config, logging, middleware, exceptions."""

from sales_dashboard.core.config import Settings, get_settings
from sales_dashboard.core.logging import TraceLog, get_logger, get_trace_log, request_id_ctx

__all__ = [
    "Settings",
    "TraceLog",
    "get_logger",
    "get_settings",
    "get_trace_log",
    "request_id_ctx",
]
