"""Error handling utilities for gateway responses and transport failures."""

import json
import socket
from typing import Any

import httpx

from unloq_client_core.errors.exceptions import (
    InternalError,
    InvalidResponseError,
    InvalidUrlError,
    RequestTimeoutError,
    TransportError,
)
from unloq_client_core.errors.models import ErrorPayload

# Resolver messages seen when the socket error itself is not chained
_NAME_RESOLUTION_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "getaddrinfo failed",
    "no address associated with hostname",
)


def unwrap_envelope(body: bytes) -> dict[str, Any]:
    """Decode a buffered response body into the value the transport resolves with.

    ``{"result": {...}}`` resolves with the ``result`` key renamed to ``data``.
    ``{"error": {...}}`` raises the matching ``ServerError``. Any other JSON
    object passes through unchanged.

    Args:
        body: Raw response body

    Returns:
        Decoded response object

    Raises:
        InvalidResponseError: If the body is not JSON or not a JSON object
        ServerError: If the body carries a structured error payload
    """
    try:
        decoded = json.loads(body)
    except ValueError as e:
        raise InvalidResponseError(
            message=str(e),
            data=body.decode("utf-8", errors="replace"),
        ) from e

    if not isinstance(decoded, dict):
        raise InvalidResponseError(data=decoded)

    result = decoded.get("result")
    if isinstance(result, dict):
        unwrapped = {k: v for k, v in decoded.items() if k != "result"}
        unwrapped["data"] = result
        return unwrapped

    problem = ErrorPayload.from_envelope(decoded)
    if problem is not None:
        raise problem.to_exception()

    return decoded


def classify_transport_error(exc: Exception, gateway: str | None = None) -> TransportError:
    """Map an httpx failure to a transport error.

    Args:
        exc: Exception raised while sending the request or reading the body
        gateway: Gateway base URL, used in the invalid URL message

    Returns:
        TransportError subclass with the original exception chained as cause
    """
    if isinstance(exc, httpx.TimeoutException):
        error: TransportError = RequestTimeoutError()
    elif _is_invalid_url(exc):
        error = InvalidUrlError(message=f"Invalid Hostname or URL: {gateway}")
    else:
        # Underlying detail is kept on __cause__, not in the message
        error = InternalError()

    error.__cause__ = exc
    return error


def _is_invalid_url(exc: Exception) -> bool:
    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return True
    if not isinstance(exc, httpx.ConnectError):
        return False

    current: BaseException | None = exc
    seen = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return True
        text = str(current).lower()
        if any(marker in text for marker in _NAME_RESOLUTION_MARKERS):
            return True
        current = current.__cause__ or current.__context__

    return False
