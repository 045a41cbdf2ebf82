"""
Correlation id generation strategies.

Two strategies are provided:

- GuidCorrelationIdFactory: a random UUID4 string, the default.
- RequestIdentifierCorrelationIdFactory: a short base32 id shaped like a web
  host's per-request trace identifier, or the host's own identifier when one
  is supplied.
"""

import itertools
import threading
import time
import uuid
from typing import Callable, Optional, Protocol, runtime_checkable

from ...constants import REQUEST_ID_ENCODE_CHARS, REQUEST_ID_LENGTH


@runtime_checkable
class CorrelationIdFactory(Protocol):
    """Produces a new correlation id. Must not raise or block."""

    def create(self) -> str:
        ...


class GuidCorrelationIdFactory:
    """Produces a correlation id by generating a new UUID4."""

    def create(self) -> str:
        return str(uuid.uuid4())


def encode_request_id(value: int) -> str:
    """Encode a 64-bit integer as a 13 character base32 string."""
    chars = []
    for shift in range((REQUEST_ID_LENGTH - 1) * 5, -5, -5):
        chars.append(REQUEST_ID_ENCODE_CHARS[(value >> shift) & 31])
    return "".join(chars)


class RequestIdentifierCorrelationIdFactory:
    """
    Produces ids in the style of a web host's request trace identifier.

    Ids come from a process-wide counter seeded with the current time, encoded
    as 13 base32 characters (e.g. ``0HLEACIU86PT7``). When ``trace_identifier``
    is given and returns a non-empty value, that value is used instead.
    """

    _lock = threading.Lock()
    _counter = itertools.count(time.time_ns() // 100)

    def __init__(self, trace_identifier: Optional[Callable[[], Optional[str]]] = None):
        self._trace_identifier = trace_identifier

    @classmethod
    def next_request_id(cls) -> str:
        with cls._lock:
            value = next(cls._counter)
        return encode_request_id(value & 0xFFFFFFFFFFFFFFFF)

    def create(self) -> str:
        if self._trace_identifier is not None:
            trace_id = self._trace_identifier()
            if trace_id:
                return trace_id
        return self.next_request_id()
