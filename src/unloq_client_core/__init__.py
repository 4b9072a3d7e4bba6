"""UNLOQ Client Core - authenticated transport for the UNLOQ gateway.

This library provides:
- A single-use, authenticated request transport over httpx
- Evented responses (newline-framed JSON events) with per-event callbacks
- A stable error taxonomy callers branch on via ``.code``
- Multi-source credential resolution (value → env → .env → default)

Example:
    ```python
    from unloq_client_core import GatewayClient, ErrorCode, TransportError

    async with GatewayClient.from_env() as client:
        try:
            response = await client.transport("authenticate").post({"email": email})
        except TransportError as e:
            if e.code == ErrorCode.DENIED:
                ...
    ```
"""

from unloq_client_core.auth import CredentialResolver, GatewayCredential
from unloq_client_core.client import GatewayClient
from unloq_client_core.errors import ErrorCode, TransportError
from unloq_client_core.transport import ConnectionPoolConfig, RequestHandle, RequestTransport

__version__ = "0.1.0"

__all__ = [
    "ConnectionPoolConfig",
    "CredentialResolver",
    "ErrorCode",
    "GatewayClient",
    "GatewayCredential",
    "RequestHandle",
    "RequestTransport",
    "TransportError",
    "__version__",
]
