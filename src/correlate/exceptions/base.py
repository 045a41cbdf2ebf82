"""
Base exception classes for Correlate.

Provides the foundational CorrelateError class that all other exceptions inherit
from, plus helpers to read the correlation id attached to arbitrary exceptions.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ..constants import EXCEPTION_CORRELATION_ID_ATTR


@dataclass
class ErrorDetails:
    """Additional details for Correlate exceptions."""

    help_text: Optional[str] = None
    error_code: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    user_action: Optional[str] = None
    technical_details: Optional[str] = None
    correlation_id: Optional[str] = None


class CorrelateError(Exception):
    """Base exception for all Correlate errors.

    Attributes:
        message: The error message
        help_text: Optional actionable guidance for the user
        error_code: Optional error code for programmatic handling
        correlation_id: Correlation id of the operation that raised, if known
        context: Additional context information
        user_action: Suggested user action to resolve the issue
        technical_details: Technical information for debugging
    """

    def __init__(self, message: str, details: Optional[ErrorDetails] = None):
        self.message = message

        details = details or ErrorDetails()
        self.help_text = details.help_text
        self.error_code = details.error_code
        self.context = dict(details.context)
        self.user_action = details.user_action
        self.technical_details = details.technical_details
        self.correlation_id = details.correlation_id

        self.timestamp = datetime.now()
        super().__init__(message)

    def __str__(self) -> str:
        result = self.message

        if self.help_text:
            result += f"\n\nHelp: {self.help_text}"

        if self.user_action:
            result += f"\n\nAction: {self.user_action}"

        if self.context:
            context_items = [
                f"{k}: {v}" for k, v in self.context.items() if v is not None
            ]
            if context_items:
                result += f"\n\nContext: {', '.join(context_items)}"

        if self.correlation_id:
            result += f"\n\nCorrelation ID: {self.correlation_id}"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "correlation_id": self.correlation_id,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
            "help_text": self.help_text,
            "user_action": self.user_action,
            "technical_details": self.technical_details,
        }

    def add_context(self, **kwargs) -> "CorrelateError":
        """Add additional context to the exception."""
        self.context.update(kwargs)
        return self


class ActivityStateError(CorrelateError):
    """Raised when an activity is started more than once."""

    def __init__(self, activity: str):
        details = ErrorDetails(
            error_code="ACTIVITY_STATE",
            help_text="Create a new activity for each correlated operation",
            context={"activity": activity},
        )
        super().__init__(f"Activity '{activity}' has already been started", details)


def get_exception_correlation_id(exc: BaseException) -> Optional[str]:
    """Return the correlation id an exception was tagged with, if any."""
    correlation_id = getattr(exc, EXCEPTION_CORRELATION_ID_ATTR, None)
    if correlation_id is None and isinstance(exc, CorrelateError):
        return exc.correlation_id
    return correlation_id


def tag_exception(exc: BaseException, correlation_id: str) -> bool:
    """Attach ``correlation_id`` to ``exc`` unless it already carries one.

    The id is stored under a dedicated attribute so that an exception type's
    own ``correlation_id`` field is left alone. CorrelateError instances also
    get it as ``correlation_id`` and in their context.

    Returns True when the exception was tagged by this call.
    """
    if get_exception_correlation_id(exc) is not None:
        return False

    try:
        setattr(exc, EXCEPTION_CORRELATION_ID_ATTR, correlation_id)
    except AttributeError:
        # Read-only attribute on a foreign exception type
        return False

    if isinstance(exc, CorrelateError):
        exc.correlation_id = correlation_id
        exc.add_context(correlation_id=correlation_id)
    return True
