"""Observability infrastructure: structured logging and correlation IDs.

Usage:
    from time_manager.infrastructure.observability import (
        configure_structlog,
        request_scope,
    )

    configure_structlog(environment="production")
    with request_scope():
        ...
"""

from time_manager.infrastructure.observability.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    request_scope,
    set_correlation_id,
)
from time_manager.infrastructure.observability.logging import configure_structlog

__all__: list[str] = [
    "configure_structlog",
    "correlation_id_processor",
    "generate_correlation_id",
    "get_correlation_id",
    "request_scope",
    "set_correlation_id",
]
