"""Gateway client sharing one connection pool across transports."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from unloq_client_core.auth.credentials import Credential, CredentialResolver
from unloq_client_core.transport.config import DEFAULT_TIMEOUT_MS, ConnectionPoolConfig
from unloq_client_core.transport.request import RequestTransport

logger = logging.getLogger(__name__)


class GatewayClient:
    """Factory for ``RequestTransport`` objects bound to one credential.

    All transports created by a client send through the same
    ``httpx.AsyncClient``, sized by ``pool``.

    Example:
        ```python
        async with GatewayClient.from_env(pool=ConnectionPoolConfig(max_connections=20)) as client:
            response = await client.transport("authenticate").post({"email": email})
        ```
    """

    def __init__(
        self,
        credential: Credential,
        *,
        pool: ConnectionPoolConfig | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | bool = DEFAULT_TIMEOUT_MS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.credential = credential
        self.pool = pool or ConnectionPoolConfig()
        self.headers = dict(headers or {})
        self.timeout = timeout
        self._http = httpx.AsyncClient(limits=self.pool.to_limits(), transport=transport)

    @classmethod
    def from_env(
        cls,
        *,
        resolver: CredentialResolver | None = None,
        encryptor: Callable[[Any], bytes | str] | None = None,
        **kwargs: Any,
    ) -> "GatewayClient":
        """Build a client whose credential comes from the environment / .env file."""
        resolver = resolver or CredentialResolver()
        return cls(resolver.resolve_credential(encryptor=encryptor), **kwargs)

    @property
    def closed(self) -> bool:
        return self._http.is_closed

    def transport(self, endpoint: str | None = None, evented: bool = False) -> RequestTransport:
        """Create a configured single-use transport."""
        request = RequestTransport(self.credential, evented, client=self._http)
        request.set_headers(self.headers).set_timeout(self.timeout)
        if endpoint:
            request.set_endpoint(endpoint)
        return request

    async def aclose(self) -> None:
        await self._http.aclose()
        logger.debug("Gateway client closed")

    async def __aenter__(self) -> "GatewayClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
