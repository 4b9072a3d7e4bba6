"""Error taxonomy and response envelope handling for the gateway transport."""

from unloq_client_core.errors.exceptions import (
    AbortedError,
    AuthInvalidError,
    ConfigurationError,
    DeniedError,
    ErrorCode,
    InternalError,
    InvalidResponseError,
    InvalidUrlError,
    RequestTimeoutError,
    ServerError,
    TransportError,
)
from unloq_client_core.errors.handler import classify_transport_error, unwrap_envelope
from unloq_client_core.errors.models import DENIED_SERVER_CODE, ErrorPayload

__all__ = [
    "DENIED_SERVER_CODE",
    "AbortedError",
    "AuthInvalidError",
    "ConfigurationError",
    "DeniedError",
    "ErrorCode",
    "ErrorPayload",
    "InternalError",
    "InvalidResponseError",
    "InvalidUrlError",
    "RequestTimeoutError",
    "ServerError",
    "TransportError",
    "classify_transport_error",
    "unwrap_envelope",
]
