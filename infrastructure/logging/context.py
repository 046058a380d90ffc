"""Request-scoped logging context.

Everything bound here is merged into every log entry emitted while the
request is being served, including entries from the service and store
layers running in worker threads (``asyncio.to_thread`` copies the
current context).

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(correlation_id="req-123", request_path="/api/i18n/languages"):
        logger.info("languages_listed")
"""

import re
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog

# Incoming ids are echoed back in a header, accept only short opaque tokens
_CORRELATION_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,128}")


def new_correlation_id() -> str:
    return uuid.uuid4().hex


def accept_correlation_id(candidate: Optional[str]) -> str:
    """Return ``candidate`` if it is a usable id, else a freshly generated one."""
    if candidate and _CORRELATION_ID_PATTERN.fullmatch(candidate):
        return candidate
    return new_correlation_id()


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    request_path: Optional[str] = None,
    request_method: Optional[str] = None,
    **extra_context: Any,
) -> Iterator[str]:
    """Bind request metadata to structlog's context variables.

    Yields the correlation id in effect, generated when none is given.
    Values set to None are not bound.
    """
    fields = {
        "correlation_id": accept_correlation_id(correlation_id),
        "request_path": request_path,
        "request_method": request_method,
        **extra_context,
    }
    fields = {key: value for key, value in fields.items() if value is not None}

    tokens = structlog.contextvars.bind_contextvars(**fields)
    try:
        yield fields["correlation_id"]
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def get_correlation_id() -> Optional[str]:
    return structlog.contextvars.get_contextvars().get("correlation_id")
