"""Authenticated request transport for the UNLOQ gateway.

Each ``RequestTransport`` performs exactly one call: configure it with the
fluent setters, then call one of the verb helpers (or ``run``) from inside
a running event loop. The call returns a ``RequestHandle`` immediately.

Example:
    ```python
    transport = RequestTransport(credential).set_endpoint("authenticate").set_timeout(5000)
    response = await transport.post({"email": "john@example.com"})
    print(response["data"])
    ```

Evented calls emit intermediate events on the handle:

    ```python
    handle = RequestTransport(credential, evented=True).set_endpoint("authenticate").post(payload)
    handle.on("step", on_step)
    await handle
    ```
"""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Mapping
from typing import Any

import httpx

from unloq_client_core.auth.credentials import Credential
from unloq_client_core.errors.exceptions import (
    AuthInvalidError,
    ConfigurationError,
    InternalError,
    TransportError,
)
from unloq_client_core.errors.handler import classify_transport_error, unwrap_envelope
from unloq_client_core.transport.config import (
    CLIENT_NAME,
    DEFAULT_TIMEOUT_MS,
    EVENT_RESPONSE_TYPE,
    RESPONSE_TYPE_HEADER,
    ConnectionPoolConfig,
    timeout_from_ms,
)
from unloq_client_core.transport.events import EventChunkParser
from unloq_client_core.transport.handle import RequestHandle

logger = logging.getLogger(__name__)


class RequestTransport:
    """Single-use authenticated call against the credential's gateway.

    Args:
        credential: Supplies the gateway URL, auth material and body encryption.
        evented: Expect an evented (``x-response-type: event``) response.
        pool: Connection limits for the client opened for this call. Ignored
            when ``client`` is given.
        client: Shared ``httpx.AsyncClient`` to send through. The transport
            never closes it.

    Raises:
        ConfigurationError: If the credential carries neither a bearer key
            nor a key/secret pair.
    """

    def __init__(
        self,
        credential: Credential,
        evented: bool = False,
        *,
        pool: ConnectionPoolConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._credential = credential
        self._evented = evented if isinstance(evented, bool) else False
        self._pool = pool or ConnectionPoolConfig()
        self._client = client

        self._method = "POST"
        self._timeout: float | None = DEFAULT_TIMEOUT_MS
        self._data: Any = None
        self._used = False

        self._url = credential.gateway
        self._headers = httpx.Headers({"content-type": "application/json"})
        self._attach_auth(credential)
        self._valid = bool(credential.is_valid())

    def _attach_auth(self, credential: Credential) -> None:
        key = getattr(credential, "key", None)
        secret = getattr(credential, "secret", None)

        if isinstance(secret, str):
            if isinstance(key, str):
                self._headers["x-api-key"] = key
            if secret:
                self._headers["x-api-secret"] = secret
        elif isinstance(key, str):
            self._headers["authorization"] = f"Bearer {key}"
        else:
            raise ConfigurationError("UNLOQ requires either key/secret or key token")

        self._headers["x-requested-with"] = CLIENT_NAME

    @property
    def credential(self) -> Credential:
        return self._credential

    @property
    def url(self) -> str:
        return self._url

    @property
    def method(self) -> str:
        return self._method

    @property
    def headers(self) -> httpx.Headers:
        return self._headers.copy()

    @property
    def timeout(self) -> float | None:
        """Timeout in milliseconds, None when disabled."""
        return self._timeout

    @property
    def evented(self) -> bool:
        return self._evented

    @property
    def valid(self) -> bool:
        return self._valid

    def set_endpoint(self, path: str) -> "RequestTransport":
        """Append ``path`` to the URL, dropping one leading slash."""
        if path.startswith("/"):
            path = path[1:]
        self._url += path
        return self

    def set_headers(self, headers: Mapping[str, str] | None) -> "RequestTransport":
        """Merge headers into the request; same-name headers are replaced."""
        if isinstance(headers, Mapping):
            self._headers.update(headers)
        return self

    def set_timeout(self, value: Any) -> "RequestTransport":
        """Set the timeout in milliseconds.

        ``False`` disables the timeout. Anything other than a positive number
        is ignored.
        """
        if value is False:
            self._timeout = None
        elif isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            self._timeout = value
        return self

    def post(self, data: Any = None) -> RequestHandle:
        self._method = "POST"
        self._data = data if data is not None else {}
        return self.run()

    def get(self) -> RequestHandle:
        self._method = "GET"
        return self.run()

    def put(self, data: Any = None) -> RequestHandle:
        self._method = "PUT"
        if data is not None:
            self._data = data
        return self.run()

    def delete(self) -> RequestHandle:
        self._method = "DELETE"
        return self.run()

    def run(self) -> RequestHandle:
        """Send the request and return its pending handle.

        Must be called while an event loop is running.

        The request body is whatever ``credential.encrypt`` returns: ``bytes`` and
        ``str`` results go on the wire as-is (a ``str`` is not JSON-quoted), any
        other object is JSON-encoded.

        Raises:
            RuntimeError: If this transport has already run.
        """
        if self._used:
            raise RuntimeError("RequestTransport instances are single-use")
        self._used = True

        handle = RequestHandle()
        if not self._valid:
            handle.reject(AuthInvalidError())
            return handle

        options = self._build_request_options()
        task = asyncio.get_running_loop().create_task(self._perform(handle, options))
        handle.attach(task)
        return handle

    def _build_request_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "headers": self._headers.copy(),
            "timeout": timeout_from_ms(self._timeout),
            "follow_redirects": False,
        }

        if self._data is not None:
            body = self._credential.encrypt(self._data)
            if isinstance(body, (bytes, str)):
                options["content"] = body
            else:
                options["json"] = body

        return options

    @contextlib.asynccontextmanager
    async def _client_context(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return

        async with httpx.AsyncClient(limits=self._pool.to_limits()) as client:
            yield client

    async def _perform(self, handle: RequestHandle, options: dict[str, Any]) -> None:
        logger.debug(f"{self._method} {self._url} (evented={self._evented})")
        try:
            async with self._client_context() as client:
                async with client.stream(self._method, self._url, **options) as response:
                    await self._consume(handle, response)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error = classify_transport_error(e, self._credential.gateway)
            logger.debug(f"{self._method} {self._url} failed: {error.code}")
            handle.reject(error)
        except Exception as e:
            logger.exception(f"Unexpected failure during {self._method} {self._url}")
            error = InternalError()
            error.__cause__ = e
            handle.reject(error)

    async def _consume(self, handle: RequestHandle, response: httpx.Response) -> None:
        is_error = response.status_code != 200
        if self._evented and response.headers.get(RESPONSE_TYPE_HEADER) != EVENT_RESPONSE_TYPE:
            is_error = True

        streaming = self._evented and not is_error
        parser = EventChunkParser() if streaming else None
        body = bytearray()

        async for chunk in response.aiter_bytes():
            if handle.settled:
                return
            if parser is not None:
                for frame in parser.feed(chunk):
                    await handle.emit(frame.name, frame.payload)
            else:
                body.extend(chunk)

        if handle.settled:
            return

        if parser is not None:
            for frame in parser.flush():
                await handle.emit(frame.name, frame.payload)
            handle.resolve(None)
            return

        try:
            handle.resolve(unwrap_envelope(bytes(body)))
        except TransportError as e:
            handle.reject(e)
