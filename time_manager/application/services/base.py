"""Base service logging mixin.

Provides the LoggingMixin class for standardized structured logging
across the clock services.

Usage:
    from time_manager.application.services.base import LoggingMixin

    class MyClock(LoggingMixin):
        def __init__(self, system_clock: SystemClockProtocol) -> None:
            self._system_clock = system_clock
            self._init_logger()

        def write(self, target_us: int) -> None:
            log = self._log_operation("write", target_us=target_us)
            log.info("time_set_requested")
"""

import structlog

from time_manager.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Mixin providing structured logging for services.

    The logger is bound with:
    - service: The class name of the service
    - component: The component type (default: "time")

    Each operation gets:
    - operation: The name of the operation being performed
    - correlation_id: From context for tracing
    - Any additional context passed to _log_operation()

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "time") -> None:
        """Initialize the logger with service name binding.

        Should be called in __init__ after setting up dependencies.

        Args:
            component: The component type for log categorization.
        """
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create operation-scoped logger with correlation ID.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind to the logger.

        Returns:
            BoundLogger with operation and correlation context.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
