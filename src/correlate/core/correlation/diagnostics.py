"""
Minimal diagnostics listener for observing correlated activities.

Observers subscribe with a callable ``(event_name, payload)``. The listener is
considered enabled while at least one observer is subscribed; activities skip
event construction entirely when it is not.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from ...constants import DIAGNOSTIC_LISTENER_NAME

logger = logging.getLogger(__name__)

Observer = Callable[[str, Dict[str, Any]], None]


class Subscription:
    """Handle returned by ``DiagnosticListener.subscribe``."""

    def __init__(self, listener: "DiagnosticListener", observer: Observer):
        self._listener = listener
        self._observer = observer
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        """Remove the observer. Safe to call more than once."""
        if self._active:
            self._active = False
            self._listener._remove(self._observer)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.unsubscribe()


class DiagnosticListener:
    """
    Publishes named events to subscribed observers.

    The lock only guards the observer list; events are delivered to a snapshot
    taken outside of it, so observers may subscribe or unsubscribe while an
    event is being written.
    """

    def __init__(self, name: str = DIAGNOSTIC_LISTENER_NAME):
        self.name = name
        self._observers: List[Observer] = []
        self._lock = threading.RLock()

    def subscribe(self, observer: Observer) -> Subscription:
        if not callable(observer):
            raise TypeError("observer must be callable")
        with self._lock:
            self._observers.append(observer)
        logger.debug(f"Diagnostics observer subscribed (listener={self.name})")
        return Subscription(self, observer)

    def _remove(self, observer: Observer) -> None:
        with self._lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                pass

    def is_enabled(self, event_name: Optional[str] = None) -> bool:
        with self._lock:
            return bool(self._observers)

    def write(self, event_name: str, payload: Dict[str, Any]) -> None:
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            observer(event_name, payload)
