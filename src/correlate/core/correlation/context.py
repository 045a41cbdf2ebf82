"""
Correlation context and error context value types.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(eq=False)
class CorrelationContext:
    """
    Carrier for the correlation id of one logical operation.

    Identity matters: a nested scope that reuses its parent's id still gets a
    distinct instance, so equality is by reference.
    """

    correlation_id: Optional[str] = None

    def same_as(self, other: Optional["CorrelationContext"]) -> bool:
        """Compare by correlation id rather than identity."""
        return other is not None and other.correlation_id == self.correlation_id


class ErrorContext(Generic[T]):
    """
    Gives an error handler access to the exception raised inside a correlated
    operation, before its correlation context is torn down.

    Setting ``result`` marks the error handled and makes the manager return that
    value instead of re-raising. Setting ``is_error_handled`` alone swallows the
    error and the manager returns None.
    """

    def __init__(self, correlation_context: Optional[CorrelationContext], exception: Exception):
        self._correlation_context = correlation_context
        self._exception = exception
        self._result: Optional[T] = None
        self.is_error_handled = False

    @property
    def correlation_context(self) -> Optional[CorrelationContext]:
        """The context active when the error occurred (None on the disabled path)."""
        return self._correlation_context

    @property
    def exception(self) -> Exception:
        return self._exception

    @property
    def result(self) -> Optional[T]:
        return self._result

    @result.setter
    def result(self, value: Optional[T]) -> None:
        self.is_error_handled = True
        self._result = value


class ExceptionContext(ErrorContext[T]):
    """Older name for ErrorContext, with the matching ``is_exception_handled`` flag."""

    @property
    def is_exception_handled(self) -> bool:
        return self.is_error_handled

    @is_exception_handled.setter
    def is_exception_handled(self, value: bool) -> None:
        self.is_error_handled = value


OnError = Callable[[ErrorContext], None]
