"""Client configuration."""

import os
from dataclasses import dataclass, field
from typing import Optional, Union

from .types import ConfigurationError

DEFAULT_BASE_URL = "https://signchain.net"
DEFAULT_TIMEOUT = 30.0

ENV_URL = "SIGNCHAIN_URL"
ENV_API_KEY = "SIGNCHAIN_API_KEY"
ENV_VAULT_ID = "SIGNCHAIN_VAULT_ID"
ENV_AUTH_SECRET_KEY = "VAULT_AUTH_SECRET_KEY"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings for a SignchainClient.

    Args:
        api_key: Bearer credential sent with every request
        vault_id: Vault the client operates on
        base_url: API base URL (default: https://signchain.net)
        auth_secret_key: Shared secret used to sign requests (optional)
        timeout: Per-request timeout in seconds
        require_signature: Raise instead of sending unsigned when a signed
            call is made without an auth_secret_key
    """

    api_key: str
    vault_id: str
    base_url: str = DEFAULT_BASE_URL
    auth_secret_key: Optional[Union[str, bytes]] = field(default=None, repr=False)
    timeout: float = DEFAULT_TIMEOUT
    require_signature: bool = False

    def __post_init__(self):
        if not self.api_key:
            raise ConfigurationError("api_key is required")
        if not self.vault_id:
            raise ConfigurationError("vault_id is required")
        if not self.base_url:
            raise ConfigurationError("base_url must not be empty")
        if self.auth_secret_key is not None and not self.auth_secret_key:
            raise ConfigurationError("auth_secret_key must not be empty")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        """Build a config from SIGNCHAIN_* and VAULT_AUTH_SECRET_KEY.

        Keyword arguments take precedence over the environment. Empty
        environment variables are treated as unset.
        """
        values = {
            "base_url": os.environ.get(ENV_URL),
            "api_key": os.environ.get(ENV_API_KEY),
            "vault_id": os.environ.get(ENV_VAULT_ID),
            "auth_secret_key": os.environ.get(ENV_AUTH_SECRET_KEY),
        }
        values = {k: v for k, v in values.items() if v}
        values.update(overrides)

        missing = [k for k in ("api_key", "vault_id") if not values.get(k)]
        if missing:
            raise ConfigurationError(f"Missing configuration: {', '.join(missing)}")

        return cls(**values)
