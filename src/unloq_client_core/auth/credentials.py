"""Gateway credentials and multi-source credential resolution.

A credential is the collaborator the transport authenticates with. It
supplies the gateway base URL, the API key (and optional secret), a
validity flag and the transform applied to outgoing request bodies.

Resolution order for ``CredentialResolver`` (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv, loaded into the environment)
4. Default value

Example:
    ```python
    from unloq_client_core.auth import CredentialResolver

    resolver = CredentialResolver()

    # UNLOQ_GATEWAY, UNLOQ_API_KEY and optionally UNLOQ_API_SECRET
    credential = resolver.resolve_credential()

    # Explicit values win over the environment
    credential = resolver.resolve_credential(key="explicit-key-123")
    ```

Security Considerations:
    - Credential values are never logged, only the source they came from
    - File-based secrets have whitespace stripped
    - Thread-safe dotenv loading with lock
"""

import json
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import Any, Protocol, runtime_checkable

from dotenv import load_dotenv

from unloq_client_core.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)

GATEWAY_ENV_VAR = "UNLOQ_GATEWAY"
API_KEY_ENV_VAR = "UNLOQ_API_KEY"
API_SECRET_ENV_VAR = "UNLOQ_API_SECRET"
API_SECRET_FILE_ENV_VAR = "UNLOQ_API_SECRET_FILE"


@runtime_checkable
class Credential(Protocol):
    """What the transport needs from a credential.

    ``secret`` is ``None`` for bearer-key credentials.
    """

    gateway: str
    key: str | None
    secret: str | None

    def is_valid(self) -> bool: ...

    def encrypt(self, payload: Any) -> bytes | str: ...


@dataclass
class GatewayCredential:
    """Credential backed by plain values.

    Args:
        gateway: Gateway base URL, e.g. ``https://api.unloq.io/v1/``.
        key: Bearer key, or the API key half of a key/secret pair.
        secret: API secret. ``None`` means bearer authentication.
        encryptor: Transform applied to outgoing payloads. Defaults to
            JSON serialization.
    """

    gateway: str
    key: str | None = None
    secret: str | None = None
    encryptor: Callable[[Any], bytes | str] | None = field(default=None, repr=False)

    def __repr__(self) -> str:
        # Never expose key material
        masked_secret = "***" if self.secret is not None else None
        return f"GatewayCredential(gateway={self.gateway!r}, key='***', secret={masked_secret!r})"

    def is_valid(self) -> bool:
        return bool(self.gateway) and isinstance(self.key, str) and bool(self.key)

    def encrypt(self, payload: Any) -> bytes | str:
        if self.encryptor is not None:
            return self.encryptor(payload)
        return json.dumps(payload).encode("utf-8")


class CredentialResolver:
    """Resolve gateway credentials from multiple sources with priority ordering.

    Explicit values take precedence over environment variables, which take
    precedence over defaults. The ``.env`` file is loaded into the
    environment once, without overriding variables that are already set.

    Example:
        ```python
        resolver = CredentialResolver(load_dotenv=False)

        gateway = resolver.resolve(env_var_name="UNLOQ_GATEWAY", required=True)
        secret = resolver.resolve_from_file(file_path="~/.config/unloq/secret")
        ```
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize credential resolver.

        Args:
            dotenv_path: Path to .env file. If None, python-dotenv searches
                parent directories for one.
            load_dotenv: Whether to load the .env file at all.
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            # Only attempted once, even on failure
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Resolve a single credential value.

        Args:
            value: Explicit value, wins over every other source.
            env_var_name: Environment variable to consult.
            default: Fallback value.
            required: Raise instead of returning None when nothing is found.

        Returns:
            The resolved value, or None.

        Raises:
            CredentialNotFoundError: If required and not found anywhere.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            logger.debug(f"Resolved credential from {source}: ***")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Read a credential value from a file.

        The path may come from ``file_path`` or from the environment variable
        ``env_var_name``; ``~`` and ``$VAR`` are expanded. Content is stripped.

        Raises:
            CredentialFileError: If required and the file cannot be read.
        """
        path_to_use = None

        if file_path is not None:
            path_to_use = str(file_path)
        elif env_var_name:
            path_to_use = self.resolve(env_var_name=env_var_name) or None

        if path_to_use is None:
            if required:
                error_msg = "No file path provided for credential resolution"
                if env_var_name:
                    error_msg += f" (env var '{env_var_name}' not set)"
                raise CredentialFileError(error_msg)
            return None

        path_obj = Path(os.path.expanduser(os.path.expandvars(path_to_use)))

        try:
            content = path_obj.read_text().strip()
        except FileNotFoundError:
            error_msg = f"Credential file not found: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.debug(error_msg)
            return None
        except OSError as e:
            error_msg = f"Error reading credential file {path_obj}: {e}"
            if required:
                raise CredentialFileError(error_msg) from e
            logger.warning(error_msg)
            return None

        logger.debug(f"Resolved credential from file: {path_obj} (***)")
        return content

    def resolve_credential(
        self,
        *,
        gateway: str | None = None,
        key: str | None = None,
        secret: str | None = None,
        encryptor: Callable[[Any], bytes | str] | None = None,
    ) -> GatewayCredential:
        """Build a ``GatewayCredential`` from explicit values and the environment.

        Gateway and key are required. The secret is optional and is looked up
        in ``UNLOQ_API_SECRET``, then in the file named by
        ``UNLOQ_API_SECRET_FILE``.

        Raises:
            CredentialNotFoundError: If the gateway or key cannot be resolved.
            CredentialFileError: If the secret file is set but unreadable.
        """
        resolved_gateway = self.resolve(value=gateway, env_var_name=GATEWAY_ENV_VAR, required=True)
        resolved_key = self.resolve(value=key, env_var_name=API_KEY_ENV_VAR, required=True)
        resolved_secret = self.resolve(value=secret, env_var_name=API_SECRET_ENV_VAR)
        if resolved_secret is None and API_SECRET_FILE_ENV_VAR in os.environ:
            resolved_secret = self.resolve_from_file(env_var_name=API_SECRET_FILE_ENV_VAR, required=True)

        return GatewayCredential(
            gateway=resolved_gateway,
            key=resolved_key,
            secret=resolved_secret,
            encryptor=encryptor,
        )
