"""Logging mixin shared by application services.

Usage:
    class MyService(LoggingMixin):
        def __init__(self, repo: SomeRepositoryProtocol) -> None:
            self._repo = repo
            self._init_logger()

        async def do_something(self, item_id: UUID) -> None:
            log = self._log_operation("do_something", item_id=str(item_id))
            log.info("something_started")
            ...
            log.info("something_completed")

Correlation IDs are attached at render time by the observability
processors, so services only bind what they know.
"""

import structlog


class LoggingMixin:
    """Mixin providing a per-service structlog logger.

    The logger is bound with ``service`` (the class name) and ``component``.
    Each operation logger adds ``operation`` plus any extra context.

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "verification") -> None:
        """Bind the service logger. Call at the end of ``__init__``."""
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create an operation-scoped logger.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind.

        Returns:
            BoundLogger with the operation and context bound.
        """
        return self._log.bind(operation=operation, **context)
