"""Pytest configuration and shared fixtures for unloq-client-core tests."""

import httpx
import pytest

from unloq_client_core.testing import CountingHandler, StubCredential


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing credential resolution.
    """
    import os

    test_prefixes = ("TEST_", "UNLOQ_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def credential():
    """Valid bearer-key credential."""
    return StubCredential()


@pytest.fixture
async def mock_client():
    """Factory for AsyncClients backed by a counting ``httpx.MockTransport``.

    Returns ``(client, handler)``; clients are closed after the test.
    """
    clients = []

    def factory(respond):
        handler = CountingHandler(respond)
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client, handler

    yield factory

    for client in clients:
        await client.aclose()
