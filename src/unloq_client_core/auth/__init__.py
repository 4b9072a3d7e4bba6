"""Authentication components for the gateway transport.

This module provides:
- The ``Credential`` protocol the transport consumes
- ``GatewayCredential``, a credential built from plain values
- Multi-source credential resolution (value → env → .env → default)

Example:
    ```python
    from unloq_client_core.auth import CredentialResolver

    resolver = CredentialResolver()
    credential = resolver.resolve_credential()
    ```
"""

from unloq_client_core.auth.credentials import Credential, CredentialResolver, GatewayCredential
from unloq_client_core.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)

__all__ = [
    "Credential",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "GatewayCredential",
]
