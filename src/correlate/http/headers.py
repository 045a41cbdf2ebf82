"""
Correlation HTTP header names and lookup helpers.
"""

from typing import Any, Mapping, Optional, Sequence, Tuple

from ..constants import CORRELATION_ID_HEADER, REQUEST_ID_HEADER


class CorrelationHttpHeaders:
    """Well-known HTTP headers that carry a correlation id."""

    CORRELATION_ID = CORRELATION_ID_HEADER
    REQUEST_ID = REQUEST_ID_HEADER


_MISSING = object()


def _lookup(headers: Mapping[str, Any], name: str) -> Any:
    value = headers.get(name, _MISSING)
    if value is not _MISSING:
        return value
    # Plain dicts are case sensitive, HTTP header names are not
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return _MISSING


def get_correlation_id_header(
    headers: Mapping[str, Any], accepted_headers: Sequence[str]
) -> Tuple[str, Optional[str]]:
    """
    Find the correlation id in a header mapping.

    Accepted headers are tried in order and the first one present with a
    non-blank value wins. Multi-valued headers (lists/tuples) use their last
    value.

    Returns:
        ``(header_name, value)``. When no accepted header has a value, the name
        is the last accepted header that was present (or the first accepted
        header if none was) and the value is None or blank. An empty
        ``accepted_headers`` gives ``("X-Correlation-ID", None)``.
    """
    if accepted_headers is None:
        raise ValueError("accepted_headers must not be None")
    if not accepted_headers:
        return CorrelationHttpHeaders.CORRELATION_ID, None

    header_name: Optional[str] = None
    correlation_id: Optional[str] = None
    for name in accepted_headers:
        value = _lookup(headers, name)
        if value is _MISSING:
            continue

        header_name = name
        if isinstance(value, (list, tuple)):
            correlation_id = value[-1] if value else None
        else:
            correlation_id = str(value) if value is not None else None

        if correlation_id is not None and correlation_id.strip():
            break

    return header_name or accepted_headers[0], correlation_id
