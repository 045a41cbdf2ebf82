"""
Incoming HTTP correlation, independent of any web framework.

A framework integration wraps its request in an HttpListenerContext and calls
DefaultHttpListener.handle_begin_request before the request is processed and
handle_end_request once it is done. See ``correlate.http.wsgi`` for a WSGI
integration.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from ..core.config.models import HttpListenerOptions
from ..core.correlation.activity import Activity, ActivityFactory
from ..core.correlation.context import CorrelationContext
from ..core.correlation.ids import CorrelationIdFactory
from ..exceptions import MissingConfigurationError
from .headers import CorrelationHttpHeaders

logger = logging.getLogger(__name__)

REQUEST_ACTIVITY_KEY = "correlate.http.request_activity"


@runtime_checkable
class HttpListenerContext(Protocol):
    """What the listener needs from a framework's request/response pair."""

    items: Dict[str, Any]

    def on_starting_response(self, callback: Callable[[], None]) -> None:
        """Register a callback to run just before response headers are sent."""
        ...

    def try_get_request_header(self, name: str) -> Optional[List[str]]:
        """Return the values of a request header, or None when absent."""
        ...

    def try_add_response_header(self, name: str, values: List[str]) -> bool:
        """Add a response header unless already present. Return True if added."""
        ...


class HttpRequestActivity:
    """Activity for one HTTP request, wrapping the activity doing the work."""

    def __init__(self, activity: Activity, response_header: Optional[str] = None):
        self._activity = activity
        self.response_header = response_header
        self.correlation_id: Optional[str] = None
        self._stopped = False

    def start(self, correlation_id: str) -> Optional[CorrelationContext]:
        self.correlation_id = correlation_id
        return self._activity.start(correlation_id)

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        self._activity.stop()


class DefaultHttpListener:
    """
    Starts an activity per incoming request.

    The correlation id is read from the first accepted request header that has
    values (multiple values are joined with ``,``) or created by the id
    factory. When ``include_in_response`` is set the id is echoed in a
    response header with the same name as the request header that was matched,
    unless the application already set it.
    """

    def __init__(
        self,
        id_factory: CorrelationIdFactory,
        activity_factory: ActivityFactory,
        options: Optional[HttpListenerOptions] = None,
    ):
        if id_factory is None:
            raise MissingConfigurationError("id_factory", "DefaultHttpListener")
        if activity_factory is None:
            raise MissingConfigurationError("activity_factory", "DefaultHttpListener")

        self._id_factory = id_factory
        self._activity_factory = activity_factory
        self._options = options or HttpListenerOptions()

    def handle_begin_request(self, context: HttpListenerContext) -> None:
        if context is None:
            raise ValueError("context must not be None")

        header_name, header_values, correlation_id = self._get_or_create_correlation_id(context)

        activity = HttpRequestActivity(self._activity_factory.create_activity(), header_name)
        activity.start(correlation_id)
        context.items[REQUEST_ACTIVITY_KEY] = activity

        if header_name is None:
            return

        def add_response_header() -> None:
            if context.try_add_response_header(header_name, header_values):
                logger.debug(
                    f"Setting response header '{header_name}' to correlation id '{correlation_id}'"
                )

        context.on_starting_response(add_response_header)

    def handle_end_request(self, context: HttpListenerContext) -> None:
        if context is None:
            raise ValueError("context must not be None")

        activity = context.items.get(REQUEST_ACTIVITY_KEY)
        if isinstance(activity, Activity):
            activity.stop()

    def _get_or_create_correlation_id(
        self, context: HttpListenerContext
    ) -> Tuple[Optional[str], Optional[List[str]], str]:
        header_name, header_values = self._find_request_header(
            context, self._options.accepted_headers
        )
        if header_values:
            correlation_id = ",".join(header_values)
            logger.debug(
                f"Request header '{header_name}' found with correlation id '{correlation_id}'"
            )
        else:
            correlation_id = self._id_factory.create()
            header_values = [correlation_id]

        if not self._options.include_in_response:
            return None, None, correlation_id
        return header_name, header_values, correlation_id

    @staticmethod
    def _find_request_header(
        context: HttpListenerContext, accepted_headers: List[str]
    ) -> Tuple[str, Optional[List[str]]]:
        if not accepted_headers:
            return CorrelationHttpHeaders.CORRELATION_ID, None

        header_name: Optional[str] = None
        header_values: Optional[List[str]] = None
        for name in accepted_headers:
            values = context.try_get_request_header(name)
            if values is None:
                continue

            header_name = name
            header_values = values
            if values:
                break

        return header_name or accepted_headers[0], header_values
