"""
Core correlation management.

The CorrelationManager runs a unit of work inside its own correlation context,
so that every log entry and outgoing call made by that work shares one
correlation id. It is also the default ActivityFactory.
"""

import logging
import threading
from typing import Any, Awaitable, Callable, Optional, Tuple, TypeVar

from ...exceptions import MissingConfigurationError, tag_exception
from ..config.models import CorrelationManagerOptions
from .accessor import CorrelationContextAccessor
from .activity import Activity, RootActivity
from .context import CorrelationContext, ExceptionContext, OnError
from .diagnostics import DiagnosticListener
from .factory import CorrelationContextFactory
from .ids import CorrelationIdFactory, GuidCorrelationIdFactory

T = TypeVar("T")

logger = logging.getLogger(__name__)


class CorrelationManager:
    """
    Runs work under a fresh, supplied, or inherited correlation id.

    The effective id is resolved as: the explicit ``correlation_id`` argument,
    else the id of the ambient context (continuing an existing correlation),
    else a new id from the id factory.

    Errors raised by the work are tagged with the correlation id (once, by the
    innermost correlated frame) and passed to ``on_error`` if given. The error
    is swallowed only when the handler marks it handled; otherwise the
    original exception is re-raised unchanged. The activity is always stopped,
    restoring the parent context, including on cancellation.
    """

    def __init__(
        self,
        context_factory: CorrelationContextFactory,
        id_factory: CorrelationIdFactory,
        accessor: CorrelationContextAccessor,
        logger: Optional[logging.Logger] = None,
        diagnostic_listener: Optional[DiagnosticListener] = None,
        options: Optional[CorrelationManagerOptions] = None,
    ):
        if context_factory is None:
            raise MissingConfigurationError("context_factory", "CorrelationManager")
        if id_factory is None:
            raise MissingConfigurationError("id_factory", "CorrelationManager")
        if accessor is None:
            raise MissingConfigurationError("accessor", "CorrelationManager")

        self._context_factory = context_factory
        self._id_factory = id_factory
        self._accessor = accessor
        self._logger = logger or logging.getLogger(__name__)
        self._diagnostic_listener = diagnostic_listener
        self._options = options or CorrelationManagerOptions()

    @property
    def accessor(self) -> CorrelationContextAccessor:
        return self._accessor

    @property
    def options(self) -> CorrelationManagerOptions:
        return self._options

    def create_activity(self) -> Activity:
        """Create a new activity that can be started and stopped manually."""
        return RootActivity(
            self._context_factory, self._logger, self._diagnostic_listener, self._options
        )

    def correlate(
        self,
        work: Callable[[], T],
        correlation_id: Optional[str] = None,
        on_error: Optional[OnError] = None,
    ) -> Optional[T]:
        """Execute ``work`` with its own correlation context and return its result."""
        if not callable(work):
            raise TypeError("work must be callable")

        activity = self.create_activity()
        effective_id, context = self._start_activity(correlation_id, activity)
        try:
            return work()
        except Exception as exc:
            handled, result = self._handle_exception(on_error, effective_id, context, exc)
            if handled:
                return result
            raise
        finally:
            activity.stop()

    async def correlate_async(
        self,
        work: Callable[[], Awaitable[T]],
        correlation_id: Optional[str] = None,
        on_error: Optional[OnError] = None,
    ) -> Optional[T]:
        """Await ``work()`` with its own correlation context and return its result."""
        if not callable(work):
            raise TypeError("work must be callable")

        activity = self.create_activity()
        effective_id, context = self._start_activity(correlation_id, activity)
        try:
            return await work()
        except Exception as exc:
            handled, result = self._handle_exception(on_error, effective_id, context, exc)
            if handled:
                return result
            raise
        finally:
            activity.stop()

    def _resolve_correlation_id(self, correlation_id: Optional[str]) -> str:
        if correlation_id is not None:
            return correlation_id
        ambient_id = self._accessor.correlation_id
        if ambient_id is not None:
            return ambient_id
        return self._id_factory.create()

    def _start_activity(
        self, correlation_id: Optional[str], activity: Activity
    ) -> Tuple[str, Optional[CorrelationContext]]:
        effective_id = self._resolve_correlation_id(correlation_id)
        return effective_id, activity.start(effective_id)

    def _handle_exception(
        self,
        on_error: Optional[OnError],
        correlation_id: str,
        context: Optional[CorrelationContext],
        exc: Exception,
    ) -> Tuple[bool, Any]:
        # The context is about to be torn down; keep the id on the exception
        # for callers further up. Inner frames win.
        tag_exception(exc, correlation_id)

        if on_error is None:
            return False, None

        error_context = ExceptionContext(context, exc)
        on_error(error_context)
        if error_context.is_error_handled:
            logger.debug(
                f"Error handled inside correlation scope (correlation_id={correlation_id}, "
                f"exception_type={type(exc).__name__})"
            )
            return True, error_context.result

        return False, None


def create_correlation_manager(
    options: Optional[CorrelationManagerOptions] = None,
    logger: Optional[logging.Logger] = None,
    id_factory: Optional[CorrelationIdFactory] = None,
    diagnostic_listener: Optional[DiagnosticListener] = None,
    accessor: Optional[CorrelationContextAccessor] = None,
) -> CorrelationManager:
    """Wire a CorrelationManager with default collaborators."""
    accessor = accessor or CorrelationContextAccessor()
    return CorrelationManager(
        CorrelationContextFactory(accessor),
        id_factory or GuidCorrelationIdFactory(),
        accessor,
        logger=logger,
        diagnostic_listener=diagnostic_listener,
        options=options,
    )


_default_manager: Optional[CorrelationManager] = None
_default_manager_lock = threading.Lock()


def get_correlation_manager() -> CorrelationManager:
    """Get the process-wide default correlation manager."""
    global _default_manager
    if _default_manager is None:
        with _default_manager_lock:
            if _default_manager is None:
                _default_manager = create_correlation_manager()
    return _default_manager


def set_correlation_manager(manager: Optional[CorrelationManager]) -> None:
    """Replace (or reset, with None) the process-wide default manager."""
    global _default_manager
    with _default_manager_lock:
        _default_manager = manager
