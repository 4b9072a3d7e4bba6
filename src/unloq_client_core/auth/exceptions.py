"""Exceptions raised while resolving gateway credentials.

Credential errors are configuration errors: they surface synchronously,
before any request is built.

Example:
    ```python
    from unloq_client_core.auth.exceptions import CredentialNotFoundError

    if not api_key:
        raise CredentialNotFoundError("API key not found", env_var_name="UNLOQ_API_KEY")
    ```
"""

from unloq_client_core.errors.exceptions import ConfigurationError


class CredentialError(ConfigurationError):
    """Base exception for credential-related errors.

    Carries the ``CONFIGURATION_ERROR`` code so callers handling transport
    set-up failures catch it as well.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential value cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when a credential file cannot be read."""

    pass
