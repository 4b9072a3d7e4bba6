"""Testing utilities for code built on the gateway transport.

Example:
    ```python
    import httpx

    from unloq_client_core.testing import CountingHandler, StubCredential, event_frame, streaming_response


    async def test_emits_step():
        handler = CountingHandler(
            lambda request: streaming_response([event_frame("step", {"n": 1})], evented=True)
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            transport = RequestTransport(StubCredential(), evented=True, client=client)
            ...
    ```
"""

import json
from collections.abc import AsyncIterator, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import httpx

from unloq_client_core.transport.config import EVENT_RESPONSE_TYPE, RESPONSE_TYPE_HEADER


@dataclass
class StubCredential:
    """Credential double; ``encrypt`` records payloads and returns JSON bytes."""

    gateway: str = "https://api.unloq.test/v1/"
    key: str | None = "test-key"
    secret: str | None = None
    valid: bool = True
    encrypted: list[Any] = field(default_factory=list)

    def is_valid(self) -> bool:
        return self.valid

    def encrypt(self, payload: Any) -> bytes:
        self.encrypted.append(payload)
        return json.dumps(payload).encode("utf-8")


def event_frame(name: str | None, data: Any = None) -> bytes:
    """Encode one frame of an evented response; ``name=None`` omits the event field."""
    body: dict[str, Any] = {"data": data}
    if name is not None:
        body["event"] = name
    return b"\n" + json.dumps(body, ensure_ascii=False).encode("utf-8") + b"\n"


def streaming_response(
    chunks: Iterable[bytes],
    *,
    status_code: int = 200,
    evented: bool = False,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a response whose body is delivered chunk by chunk."""
    response_headers = dict(headers or {})
    if evented:
        response_headers[RESPONSE_TYPE_HEADER] = EVENT_RESPONSE_TYPE

    parts = list(chunks)

    async def body() -> AsyncIterator[bytes]:
        for part in parts:
            yield part

    return httpx.Response(status_code, headers=response_headers, content=body())


class CountingHandler:
    """``httpx.MockTransport`` handler that records every request it sees."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self._respond = respond
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)
