"""Test basic package functionality."""

import unloq_client_core


def test_version():
    """Test that package version is defined."""
    assert hasattr(unloq_client_core, "__version__")
    assert unloq_client_core.__version__ == "0.1.0"


def test_public_exports():
    """Test that the main entry points are importable from the package root."""
    for name in ("GatewayClient", "RequestTransport", "RequestHandle", "ErrorCode", "TransportError"):
        assert name in unloq_client_core.__all__
        assert hasattr(unloq_client_core, name)
