"""Tests for gateway error payload models."""

import pytest

from unloq_client_core.errors.exceptions import DeniedError, ErrorCode, ServerError
from unloq_client_core.errors.models import DENIED_SERVER_CODE, ErrorPayload


@pytest.mark.unit
def test_parse_error_envelope():
    """Test parsing a structured error envelope."""
    payload = ErrorPayload.from_envelope({"error": {"message": "bad", "code": "USER.BLOCKED", "status": 403}})

    assert payload is not None
    assert payload.message == "bad"
    assert payload.code == "USER.BLOCKED"
    assert payload.status == 403
    assert payload.extensions is None


@pytest.mark.unit
def test_parse_error_envelope_with_extensions():
    """Test extra members of the error object are kept as extensions."""
    payload = ErrorPayload.from_envelope({"error": {"message": "bad", "request_id": "abc-123"}})

    assert payload is not None
    assert payload.extensions == {"request_id": "abc-123"}


@pytest.mark.unit
@pytest.mark.parametrize(
    "envelope",
    [
        {"result": {"x": 1}},
        {"error": "just a string"},
        {"error": None},
        [1, 2, 3],
        None,
    ],
)
def test_non_error_envelopes(envelope):
    """Test envelopes without an error object yield None."""
    assert ErrorPayload.from_envelope(envelope) is None


@pytest.mark.unit
def test_to_exception_defaults():
    """Test missing message and code fall back to defaults."""
    error = ErrorPayload().to_exception()

    assert type(error) is ServerError
    assert error.code == ErrorCode.SERVER_ERROR
    assert str(error) == "An error occurred"
    assert error.status is None


@pytest.mark.unit
def test_to_exception_denied():
    """Test APPROVAL.DENIED is specialised to DeniedError."""
    error = ErrorPayload(message="bad", code=DENIED_SERVER_CODE).to_exception()

    assert isinstance(error, DeniedError)
    assert error.code == ErrorCode.DENIED
    assert str(error) == "bad"


@pytest.mark.unit
def test_to_exception_carries_status_and_code():
    """Test server code and status are preserved."""
    error = ErrorPayload(message="Locked", code="USER.LOCKED", status=423).to_exception()

    assert error.code == "USER.LOCKED"
    assert error.status == 423
