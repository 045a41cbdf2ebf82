"""
Activities: start/stop brackets binding a correlation context to a logging
scope and to diagnostics events.
"""

import logging
from typing import Optional, Protocol, runtime_checkable

from ...constants import ACTIVITY_START_EVENT, ACTIVITY_STOP_EVENT
from ...exceptions import ActivityStateError, MissingConfigurationError
from ...logging.scope import LogScope, begin_scope
from ..config.models import CorrelationManagerOptions
from .context import CorrelationContext
from .diagnostics import DiagnosticListener
from .factory import CorrelationContextFactory

_CREATED = "created"
_STARTED = "started"
_STOPPED = "stopped"


@runtime_checkable
class Activity(Protocol):
    """One start/stop bracket for a correlated operation."""

    def start(self, correlation_id: str) -> Optional[CorrelationContext]:
        ...

    def stop(self) -> None:
        ...


@runtime_checkable
class ActivityFactory(Protocol):
    """Creates activities; lets hosts substitute their own implementation."""

    def create_activity(self) -> Activity:
        ...


class RootActivity:
    """
    The default activity.

    ``start`` creates and publishes the correlation context, opens a logging
    scope and writes a diagnostics start event. When neither logging nor
    diagnostics is enabled it does nothing and returns None. ``stop`` undoes
    whatever ``start`` did, once.
    """

    def __init__(
        self,
        context_factory: CorrelationContextFactory,
        logger: logging.Logger,
        diagnostic_listener: Optional[DiagnosticListener] = None,
        options: Optional[CorrelationManagerOptions] = None,
    ):
        if context_factory is None:
            raise MissingConfigurationError("context_factory", "RootActivity")
        if logger is None:
            raise MissingConfigurationError("logger", "RootActivity")

        self._context_factory = context_factory
        self._logger = logger
        self._diagnostic_listener = diagnostic_listener
        self._options = options or CorrelationManagerOptions()

        self._state = _CREATED
        self._context: Optional[CorrelationContext] = None
        self._log_scope: Optional[LogScope] = None
        self._diagnostics_started = False

    @property
    def state(self) -> str:
        return self._state

    @property
    def correlation_context(self) -> Optional[CorrelationContext]:
        return self._context

    def start(self, correlation_id: str) -> Optional[CorrelationContext]:
        if correlation_id is None:
            raise ValueError("correlation_id must not be None")
        if self._state != _CREATED:
            raise ActivityStateError(type(self).__name__)
        self._state = _STARTED

        diagnostics_enabled = (
            self._diagnostic_listener is not None
            and self._diagnostic_listener.is_enabled(ACTIVITY_START_EVENT)
        )
        logging_enabled = self._logger.isEnabledFor(logging.CRITICAL)
        if not diagnostics_enabled and not logging_enabled:
            return None

        self._context = self._context_factory.create(correlation_id)

        try:
            if diagnostics_enabled:
                self._diagnostic_listener.write(
                    ACTIVITY_START_EVENT,
                    {"correlation_id": correlation_id, "correlation_context": self._context},
                )
                self._diagnostics_started = True

            if logging_enabled:
                self._log_scope = begin_scope(
                    self._logger, **{self._options.logging_scope_key: correlation_id}
                )
        except BaseException:
            self.stop()
            raise

        return self._context

    def stop(self) -> None:
        if self._state != _STARTED:
            return
        self._state = _STOPPED

        try:
            if self._diagnostics_started:
                self._diagnostic_listener.write(
                    ACTIVITY_STOP_EVENT,
                    {
                        "correlation_id": self._context.correlation_id,
                        "correlation_context": self._context,
                    },
                )
        finally:
            if self._log_scope is not None:
                self._log_scope.close()
                self._log_scope = None

            if self._context is not None:
                self._context_factory.dispose()
