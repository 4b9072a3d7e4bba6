"""Gateway error payload models."""

from dataclasses import dataclass
from typing import Any

from unloq_client_core.errors.exceptions import DeniedError, ErrorCode, ServerError

DENIED_SERVER_CODE = "APPROVAL.DENIED"


@dataclass
class ErrorPayload:
    """The ``error`` object of a gateway response envelope.

    Envelope shape: ``{"error": {"message": ..., "code": ..., "status": ...}}``
    """

    message: str | None = None  # Human-readable explanation
    code: str | None = None  # Server error code, e.g. "APPROVAL.DENIED"
    status: int | None = None  # Optional status reported by the server

    # Extension members (additional fields from the gateway)
    extensions: dict[str, Any] | None = None

    @classmethod
    def from_envelope(cls, envelope: Any) -> "ErrorPayload | None":
        """Extract the error payload from a decoded response envelope.

        Args:
            envelope: Decoded JSON response body

        Returns:
            ErrorPayload object or None if the envelope carries no error object
        """
        if not isinstance(envelope, dict):
            return None

        error = envelope.get("error")
        if not isinstance(error, dict):
            return None

        standard_fields = {"message", "code", "status"}
        extensions = {k: v for k, v in error.items() if k not in standard_fields}

        return cls(
            message=error.get("message"),
            code=error.get("code"),
            status=error.get("status"),
            extensions=extensions if extensions else None,
        )

    def to_exception(self) -> ServerError:
        """Convert the payload to the exception the transport rejects with."""
        exc_class: type[ServerError] = ServerError
        code: ErrorCode | str = self.code or ErrorCode.SERVER_ERROR
        if self.code == DENIED_SERVER_CODE:
            exc_class = DeniedError
            code = ErrorCode.DENIED

        return exc_class(
            message=self.message,
            code=code,
            status=self.status,
            data=self.extensions,
        )
