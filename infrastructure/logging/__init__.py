"""Structured logging for the i18n API, built on structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger bound to the calling module
    - bind_request_context(): Context manager for request-scoped logging
    - get_correlation_id(): Correlation id of the request being served
    - RequestContextMiddleware: binds request context for HTTP requests
"""

from infrastructure.logging.setup import (
    build_processors,
    configure_logging,
    get_module_logger,
)
from infrastructure.logging.context import (
    accept_correlation_id,
    bind_request_context,
    get_correlation_id,
)
from infrastructure.logging.formatters import (
    add_app_info,
    summarize_containers,
    truncate_large_values,
)
from infrastructure.logging.middleware import RequestContextMiddleware

__all__ = [
    "build_processors",
    "configure_logging",
    "get_module_logger",
    "accept_correlation_id",
    "bind_request_context",
    "get_correlation_id",
    "add_app_info",
    "summarize_containers",
    "truncate_large_values",
    "RequestContextMiddleware",
]
