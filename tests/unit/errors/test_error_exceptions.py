"""Tests for structured transport exceptions."""

import pytest

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


@pytest.mark.unit
def test_transport_error_instantiation():
    """Test TransportError can be instantiated with all attributes."""
    error = TransportError(message="Test error", code="CUSTOM", status=401, data={"raw": 1})

    assert str(error) == "Test error"
    assert error.message == "Test error"
    assert error.code == "CUSTOM"
    assert error.status == 401
    assert error.data == {"raw": 1}


@pytest.mark.unit
def test_exception_inheritance():
    """Test exception inheritance chain."""
    for exc_class in (
        ConfigurationError,
        AuthInvalidError,
        RequestTimeoutError,
        InvalidUrlError,
        InternalError,
        AbortedError,
        InvalidResponseError,
        ServerError,
    ):
        assert issubclass(exc_class, TransportError)

    assert issubclass(DeniedError, ServerError)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("exc_class", "code"),
    [
        (ConfigurationError, ErrorCode.CONFIGURATION_ERROR),
        (AuthInvalidError, ErrorCode.AUTH_INVALID),
        (RequestTimeoutError, ErrorCode.TIMEOUT),
        (InvalidUrlError, ErrorCode.INVALID_URL),
        (InternalError, ErrorCode.INTERNAL_ERROR),
        (AbortedError, ErrorCode.ABORTED),
        (InvalidResponseError, ErrorCode.INVALID_RESPONSE),
        (ServerError, ErrorCode.SERVER_ERROR),
        (DeniedError, ErrorCode.DENIED),
    ],
)
def test_default_codes(exc_class, code):
    """Test each exception carries its stable code by default."""
    error = exc_class()

    assert error.code == code
    assert error.status is None
    assert error.data is None


@pytest.mark.unit
def test_error_code_compares_as_string():
    """Test ErrorCode members compare equal to their wire strings."""
    assert ErrorCode.DENIED == "DENIED"
    assert AbortedError().code == "ABORTED"


@pytest.mark.unit
def test_default_messages():
    """Test default messages are safe for display."""
    assert str(AuthInvalidError()) == "Authentication method is not valid."
    assert str(InternalError()) == "The UNLOQ servers are currently unavailable."
    assert str(ServerError()) == "An error occurred"


@pytest.mark.unit
def test_server_error_keeps_server_code():
    """Test a server-supplied code overrides the default."""
    error = ServerError(message="Nope", code="USER.NOT_FOUND", status=404)

    assert error.code == "USER.NOT_FOUND"
    assert error.status == 404
