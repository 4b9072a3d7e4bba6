"""Structured exceptions for gateway transport errors."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes callers can branch on."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    AUTH_INVALID = "AUTH_INVALID"
    TIMEOUT = "TIMEOUT"
    INVALID_URL = "INVALID_URL"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    ABORTED = "ABORTED"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    SERVER_ERROR = "SERVER_ERROR"
    DENIED = "DENIED"


class TransportError(Exception):
    """Base exception for transport errors.

    Attributes:
        code: An ``ErrorCode`` member, or the raw code string sent by the server.
        status: Optional status reported by the server error payload.
        data: Optional detail (raw body, parsed value, ...).
    """

    default_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        code: "ErrorCode | str | None" = None,
        status: int | None = None,
        data: Any = None,
    ):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.code = code if code is not None else self.default_code
        self.status = status
        self.data = data


class ConfigurationError(TransportError):
    """Credential or transport set up incorrectly."""

    default_code = ErrorCode.CONFIGURATION_ERROR
    default_message = "Invalid transport configuration"


class AuthInvalidError(TransportError):
    """Credential reported itself as invalid."""

    default_code = ErrorCode.AUTH_INVALID
    default_message = "Authentication method is not valid."


class RequestTimeoutError(TransportError):
    default_code = ErrorCode.TIMEOUT
    default_message = "Request timed out"


class InvalidUrlError(TransportError):
    default_code = ErrorCode.INVALID_URL
    default_message = "Invalid Hostname or URL"


class InternalError(TransportError):
    default_code = ErrorCode.INTERNAL_ERROR
    default_message = "The UNLOQ servers are currently unavailable."


class AbortedError(TransportError):
    default_code = ErrorCode.ABORTED
    default_message = "Request aborted"


class InvalidResponseError(TransportError):
    """Response body was not JSON, or not a JSON object."""

    default_code = ErrorCode.INVALID_RESPONSE
    default_message = "Invalid server response."


class ServerError(TransportError):
    """Structured error payload returned by the gateway."""

    default_code = ErrorCode.SERVER_ERROR


class DeniedError(ServerError):
    """The gateway reported ``APPROVAL.DENIED``."""

    default_code = ErrorCode.DENIED
