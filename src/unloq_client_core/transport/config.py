"""Transport constants and connection pool configuration."""

from dataclasses import dataclass

import httpx

CLIENT_NAME = "python-unloq"

# Milliseconds
DEFAULT_TIMEOUT_MS = 2000
MAX_TIMEOUT_MS = 2 * 60 * 1000

EVENT_RESPONSE_TYPE = "event"
RESPONSE_TYPE_HEADER = "x-response-type"


@dataclass(frozen=True)
class ConnectionPoolConfig:
    """Connection limits for the HTTP client a transport sends through.

    ``None`` means no limit. The defaults leave the pool unbounded.

    Example:
        ```python
        pool = ConnectionPoolConfig(max_connections=50, max_keepalive_connections=10)
        transport = RequestTransport(credential, pool=pool)
        ```
    """

    max_connections: int | None = None
    max_keepalive_connections: int | None = None
    keepalive_expiry: float | None = 5.0

    def to_limits(self) -> httpx.Limits:
        return httpx.Limits(
            max_connections=self.max_connections,
            max_keepalive_connections=self.max_keepalive_connections,
            keepalive_expiry=self.keepalive_expiry,
        )


def timeout_from_ms(value: float | None) -> httpx.Timeout:
    """Convert a millisecond timeout to an httpx timeout; None disables it."""
    if value is None:
        return httpx.Timeout(None)
    return httpx.Timeout(value / 1000)
