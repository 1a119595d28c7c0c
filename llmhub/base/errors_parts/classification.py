"""
Error classification helpers mapping statuses and exceptions to ErrorCode.

Adapters call :func:`classify_status` for non-success HTTP responses and
:func:`classify_exception` for transport failures raised by ``httpx``.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple, Type

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def classify_status(status: Optional[int]) -> ErrorCode:
    """Map an HTTP status code to an :class:`ErrorCode`.

    Unlisted 5xx statuses count as server errors; anything else is unknown.
    """
    if status is None:
        return ErrorCode.UNKNOWN
    fallback = ErrorCode.SERVER_ERROR if 500 <= status < 600 else ErrorCode.UNKNOWN
    return _HTTP_STATUS_MAP.get(status, fallback)


# Checked in order; the first matching type wins.
_EXCEPTION_CODES: Tuple[Tuple[Tuple[Type[BaseException], ...], ErrorCode], ...] = (
    ((httpx.TimeoutException, TimeoutError), ErrorCode.TIMEOUT),
    ((httpx.ConnectError,), ErrorCode.UNAVAILABLE),
    ((httpx.TransportError,), ErrorCode.TRANSIENT),
)


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into an :class:`ErrorCode`.

    A :class:`ProviderError` keeps its own code and ``httpx.HTTPStatusError``
    goes through :func:`classify_status`. Transport failures map to
    ``TIMEOUT``, ``UNAVAILABLE`` (connect) or ``TRANSIENT``.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, httpx.HTTPStatusError):
        return classify_status(exc.response.status_code)
    for types, code in _EXCEPTION_CODES:
        if isinstance(exc, types):
            return code
    return ErrorCode.UNKNOWN


__all__ = [
    "classify_status",
    "classify_exception",
    "_HTTP_STATUS_MAP",
]
