"""Transport layer for authenticated gateway calls.

Modules:
    config: Client constants, timeouts and connection pool limits
    events: Incremental parser for evented (newline-framed JSON) responses
    handle: Result handle with cancellation and event subscription
    request: The single-use ``RequestTransport``

Example:
    ```python
    from unloq_client_core.transport import ConnectionPoolConfig, RequestTransport

    transport = RequestTransport(credential, pool=ConnectionPoolConfig(max_connections=20))
    response = await transport.set_endpoint("/authenticate").post({"email": email})
    ```
"""

from unloq_client_core.transport.config import (
    CLIENT_NAME,
    DEFAULT_TIMEOUT_MS,
    MAX_TIMEOUT_MS,
    ConnectionPoolConfig,
)
from unloq_client_core.transport.events import EventChunkParser, EventFrame
from unloq_client_core.transport.handle import RequestHandle
from unloq_client_core.transport.request import RequestTransport

__all__ = [
    "CLIENT_NAME",
    "DEFAULT_TIMEOUT_MS",
    "MAX_TIMEOUT_MS",
    "ConnectionPoolConfig",
    "EventChunkParser",
    "EventFrame",
    "RequestHandle",
    "RequestTransport",
]
