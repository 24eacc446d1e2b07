"""Request IDs shared by every log line of one manual time set.

A host write can fan out into a forwarded controller set and a SetTime
call. Each entry point opens a request scope; the ID lives in a
contextvar so both clocks and the adapters log it without passing it
around.

Usage:
    with request_scope() as request_id:
        host_clock.write(target_us)

    # structlog configuration
    processors = [..., correlation_id_processor, ...]
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

_request_id: ContextVar[str] = ContextVar("time_request_id", default="")


def generate_correlation_id() -> str:
    """Return a fresh UUID4 request ID."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Current request ID, empty outside any request scope."""
    return _request_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Replace the request ID for the current context."""
    _request_id.set(correlation_id)


@contextmanager
def request_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a request ID for the duration of one time set.

    Args:
        correlation_id: ID to use; a new one is generated when omitted.

    Yields:
        The active request ID.
    """
    token = _request_id.set(correlation_id or generate_correlation_id())
    try:
        yield _request_id.get()
    finally:
        _request_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add the active request ID as correlation_id, if one is set."""
    request_id = _request_id.get()
    if request_id:
        event_dict.setdefault("correlation_id", request_id)
    return event_dict
